#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""Header codec.

Layout (big-endian):

    [8 bits: bit_width]
    [per symbol, in ID order: bit_width bits of ID, 8 bits of character code]
"""

from __future__ import annotations

from typing import Dict, Tuple

from bitarray import bitarray

from artcodec.bits import new_bits, read_uint, write_uint
from artcodec.errors import MalformedHeaderError
from artcodec.symbols import CHAR_CODE_BITS, MAX_BIT_WIDTH, MIN_BIT_WIDTH, SymbolTable

WIDTH_FIELD_BITS = 8


def header_bit_length(symbol_count: int, bit_width: int) -> int:
    return WIDTH_FIELD_BITS + symbol_count * (bit_width + CHAR_CODE_BITS)


def encode_header(table: SymbolTable, bit_width: int) -> bitarray:
    bits = new_bits()
    write_uint(bits, bit_width, WIDTH_FIELD_BITS)
    for sym_id, ch in table.items():
        write_uint(bits, sym_id, bit_width)
        write_uint(bits, ord(ch), CHAR_CODE_BITS)
    return bits


def decode_header(bits: bitarray) -> Tuple[int, Dict[int, str]]:
    """Parse header bits into (bit_width, {id: character})."""
    if len(bits) < WIDTH_FIELD_BITS:
        raise MalformedHeaderError(f"header too short: {len(bits)} bits")
    bit_width = read_uint(bits, 0, WIDTH_FIELD_BITS)
    if not MIN_BIT_WIDTH <= bit_width <= MAX_BIT_WIDTH:
        raise MalformedHeaderError(f"invalid bit width: {bit_width}")

    pair_bits = bit_width + CHAR_CODE_BITS
    body_bits = len(bits) - WIDTH_FIELD_BITS
    if body_bits % pair_bits:
        raise MalformedHeaderError(
            f"header body of {body_bits} bits is not a multiple of {pair_bits}-bit pairs"
        )

    symbols: Dict[int, str] = {}
    pos = WIDTH_FIELD_BITS
    for _ in range(body_bits // pair_bits):
        sym_id = read_uint(bits, pos, bit_width)
        code = read_uint(bits, pos + bit_width, CHAR_CODE_BITS)
        # An ID truncated by a too-narrow width shows up as a repeat.
        if sym_id in symbols:
            raise MalformedHeaderError(f"duplicate symbol id: {sym_id}")
        symbols[sym_id] = chr(code)
        pos += pair_bits
    return bit_width, symbols
