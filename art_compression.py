#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""Fixed-width symbol remapping for ASCII art.

Every distinct character gets a small integer ID and the artwork is stored
as a bit stream of equally wide IDs. The stream carries its own character
map, so decode() needs no outside context:

    [8 bits: header_bit_length]
    [header_bit_length bits: header]   (see artcodec.header)
    [remaining bits: payload]          (one bit_width-wide ID per character)

pack_artwork() / unpack_artwork() wrap the bit stream into bytes for storage.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Union

from bitarray import bitarray

from artcodec.bits import bits_to_bytes, bytes_to_bits, new_bits, read_uint, to_bits, write_uint
from artcodec.errors import (
    AlphabetTooLargeError,
    ArtCodecError,
    ContainerCRCError,
    ContainerError,
    ContainerFormatError,
    CorruptPayloadError,
    HeaderTooLargeError,
    MalformedHeaderError,
    UnsupportedCharacterError,
)
from artcodec.header import WIDTH_FIELD_BITS, decode_header, encode_header
from artcodec.payload import decode_payload, encode_payload
from artcodec.symbols import CHAR_CODE_BITS, as_text, build_symbol_table, select_bit_width

__all__ = [
    "AlphabetTooLargeError",
    "ArtCodecError",
    "ArtworkStats",
    "ContainerCRCError",
    "ContainerError",
    "ContainerFormatError",
    "CorruptPayloadError",
    "HeaderTooLargeError",
    "MalformedHeaderError",
    "UnsupportedCharacterError",
    "artwork_stats",
    "decode",
    "encode",
    "pack_artwork",
    "unpack_artwork",
]

LENGTH_FIELD_BITS = 8
MAX_HEADER_BITS = (1 << LENGTH_FIELD_BITS) - 1

MAGIC = b"AC"
VERSION = 1
CONTAINER_OVERHEAD = 5  # magic(2) + version + pad + crc

TextLike = Union[str, bytes, bytearray]


def encode(text: TextLike) -> bitarray:
    source = as_text(text)
    if not source:
        return new_bits()

    table = build_symbol_table(source)
    bit_width = select_bit_width(table.max_id)
    header = encode_header(table, bit_width)
    if len(header) > MAX_HEADER_BITS:
        raise HeaderTooLargeError(
            f"header needs {len(header)} bits ({len(table)} symbols at {bit_width} bits), "
            f"limit is {MAX_HEADER_BITS}"
        )
    payload = encode_payload(source, table, bit_width)

    out = new_bits()
    write_uint(out, len(header), LENGTH_FIELD_BITS)
    out.extend(header)
    out.extend(payload)
    return out


def decode(bits: Iterable[int]) -> str:
    raw = to_bits(bits)
    if not raw:
        return ""
    if len(raw) < LENGTH_FIELD_BITS:
        raise MalformedHeaderError(f"truncated header length field: {len(raw)} bits")
    header_bits = read_uint(raw, 0, LENGTH_FIELD_BITS)
    end = LENGTH_FIELD_BITS + header_bits
    if end > len(raw):
        raise MalformedHeaderError(
            f"header length {header_bits} exceeds the {len(raw) - LENGTH_FIELD_BITS} bits available"
        )
    bit_width, symbols = decode_header(raw[LENGTH_FIELD_BITS:end])
    return decode_payload(raw[end:], bit_width, symbols)


@dataclass
class ArtworkStats:
    characters: int
    symbols: int
    bit_width: int
    header_bits: int
    payload_bits: int
    encoded_bits: int

    @property
    def original_bits(self) -> int:
        return self.characters * CHAR_CODE_BITS

    @property
    def saved_bits(self) -> int:
        return self.original_bits - self.encoded_bits

    @property
    def reduction_pct(self) -> float:
        if self.original_bits <= 0:
            return 0.0
        return (self.saved_bits / float(self.original_bits)) * 100.0


def artwork_stats(text: TextLike, encoded: Optional[bitarray] = None) -> ArtworkStats:
    """Size figures for `text`; pass `encoded` to skip re-encoding."""
    source = as_text(text)
    bits = encode(source) if encoded is None else to_bits(encoded)
    if not bits:
        return ArtworkStats(len(source), 0, 0, 0, 0, 0)
    if len(bits) < LENGTH_FIELD_BITS + WIDTH_FIELD_BITS:
        raise MalformedHeaderError(f"encoded artwork too short: {len(bits)} bits")
    header_bits = read_uint(bits, 0, LENGTH_FIELD_BITS)
    bit_width = read_uint(bits, LENGTH_FIELD_BITS, WIDTH_FIELD_BITS)
    symbols = (header_bits - WIDTH_FIELD_BITS) // (bit_width + CHAR_CODE_BITS)
    return ArtworkStats(
        characters=len(source),
        symbols=symbols,
        bit_width=bit_width,
        header_bits=header_bits,
        payload_bits=len(bits) - LENGTH_FIELD_BITS - header_bits,
        encoded_bits=len(bits),
    )


def _crc8(data: bytes, poly: int = 0x07, init: int = 0x00) -> int:
    crc = init & 0xFF
    for b in data:
        crc ^= b
        for _ in range(8):
            if crc & 0x80:
                crc = ((crc << 1) ^ poly) & 0xFF
            else:
                crc = (crc << 1) & 0xFF
    return crc


def pack_bits(bits: Iterable[int]) -> bytes:
    data, pad = bits_to_bytes(to_bits(bits))
    head = bytes([MAGIC[0], MAGIC[1], VERSION, pad])
    return head + data + bytes([_crc8(head + data)])


def unpack_bits(blob: bytes) -> bitarray:
    if not isinstance(blob, (bytes, bytearray)):
        raise ContainerFormatError("blob must be bytes")
    raw = bytes(blob)
    if len(raw) < CONTAINER_OVERHEAD:
        raise ContainerFormatError("container too short")
    if raw[:2] != MAGIC:
        raise ContainerFormatError("invalid MAGIC")
    ver = raw[2]
    if ver != VERSION:
        raise ContainerFormatError(f"unsupported version: {ver}")
    if _crc8(raw[:-1]) != raw[-1]:
        raise ContainerCRCError("CRC8 mismatch")
    pad = raw[3]
    data = raw[4:-1]
    if pad > 7 or (pad and not data):
        raise ContainerFormatError(f"invalid pad bit count: {pad}")
    if pad and data[-1] & ((1 << pad) - 1):
        raise ContainerFormatError("non-zero pad bits")
    return bytes_to_bits(data, pad)


def pack_artwork(text: TextLike) -> bytes:
    return pack_bits(encode(text))


def unpack_artwork(blob: bytes) -> str:
    return decode(unpack_bits(blob))
