#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Iterable, Tuple

from bitarray import bitarray
from bitarray.util import ba2int, int2ba

from artcodec.errors import ArtCodecError


def new_bits() -> bitarray:
    return bitarray(endian="big")


def to_bits(raw: Iterable[int]) -> bitarray:
    """Copy `raw` into a fresh big-endian bit vector.

    Accepts a bitarray of either endianness or any iterable of 0/1 values.
    """
    if isinstance(raw, bitarray):
        return bitarray(raw.to01(), endian="big")
    out = new_bits()
    for bit in raw:
        if bit not in (0, 1):
            raise ArtCodecError(f"invalid bit value: {bit!r}")
        out.append(int(bit))
    return out


def write_uint(bits: bitarray, value: int, width: int) -> None:
    """Append `value` as a `width`-bit big-endian unsigned integer."""
    if width <= 0:
        raise ValueError(f"invalid field width: {width}")
    if value < 0 or (value >> width):
        raise ValueError(f"value {value} does not fit in {width} bits")
    bits.extend(int2ba(int(value), length=width, endian="big"))


def read_uint(bits: bitarray, offset: int, width: int) -> int:
    """Read a `width`-bit big-endian unsigned integer starting at bit `offset`."""
    end = offset + width
    if width <= 0 or offset < 0 or end > len(bits):
        raise IndexError(f"bit field [{offset}:{end}] outside of {len(bits)} bits")
    return ba2int(bits[offset:end], signed=False)


def bits_to_bytes(bits: bitarray) -> Tuple[bytes, int]:
    """Pack MSB-first into bytes; returns the bytes and the count of zero pad bits."""
    pad = (8 - len(bits) % 8) % 8
    return to_bits(bits).tobytes(), pad


def bytes_to_bits(data: bytes, pad: int = 0) -> bitarray:
    if not 0 <= pad <= 7:
        raise ValueError(f"invalid pad bit count: {pad}")
    if pad and not data:
        raise ValueError("pad bits without data")
    bits = new_bits()
    bits.frombytes(bytes(data))
    if pad:
        del bits[-pad:]
    return bits
