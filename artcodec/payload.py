#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Dict, List

from bitarray import bitarray

from artcodec.bits import new_bits, read_uint, write_uint
from artcodec.errors import CorruptPayloadError
from artcodec.symbols import SymbolTable


def encode_payload(text: str, table: SymbolTable, bit_width: int) -> bitarray:
    bits = new_bits()
    for ch in text:
        write_uint(bits, table.id_of(ch), bit_width)
    return bits


def decode_payload(bits: bitarray, bit_width: int, symbols: Dict[int, str]) -> str:
    if len(bits) % bit_width:
        raise CorruptPayloadError(
            f"payload of {len(bits)} bits is not a multiple of bit width {bit_width}"
        )
    out: List[str] = []
    for pos in range(0, len(bits), bit_width):
        sym_id = read_uint(bits, pos, bit_width)
        ch = symbols.get(sym_id)
        if ch is None:
            raise CorruptPayloadError(f"unmapped symbol id {sym_id} at bit {pos}")
        out.append(ch)
    return "".join(out)
