#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Dict, Iterator, List, Tuple, Union

from artcodec.errors import AlphabetTooLargeError, ArtCodecError, UnsupportedCharacterError

MAX_SYMBOLS = 256
MAX_BIT_WIDTH = 8
CHAR_CODE_BITS = 8

# Checked in order: the first threshold that max_id exceeds picks the width.
WIDTH_STEPS: Tuple[Tuple[int, int], ...] = (
    (128, 8),
    (64, 7),
    (32, 6),
    (16, 5),
    (8, 4),
    (4, 3),
    (2, 2),
)
MIN_BIT_WIDTH = 1


def as_text(text: Union[str, bytes, bytearray]) -> str:
    if isinstance(text, (bytes, bytearray)):
        return bytes(text).decode("latin-1")
    if not isinstance(text, str):
        raise ArtCodecError("text must be str or bytes")
    return text


class SymbolTable:
    """Character <-> ID mapping with IDs assigned in first-occurrence order."""

    def __init__(self) -> None:
        self._ids: Dict[str, int] = {}
        self._symbols: List[str] = []

    def add(self, char: str, position: int = 0) -> int:
        sym_id = self._ids.get(char)
        if sym_id is not None:
            return sym_id
        if ord(char) >= (1 << CHAR_CODE_BITS):
            raise UnsupportedCharacterError(char, position)
        sym_id = len(self._symbols)
        self._ids[char] = sym_id
        self._symbols.append(char)
        return sym_id

    def id_of(self, char: str) -> int:
        return self._ids[char]

    def symbol_of(self, sym_id: int) -> str:
        return self._symbols[sym_id]

    def items(self) -> Iterator[Tuple[int, str]]:
        return iter(enumerate(self._symbols))

    def inverse(self) -> Dict[int, str]:
        return dict(enumerate(self._symbols))

    @property
    def max_id(self) -> int:
        return len(self._symbols) - 1

    def __len__(self) -> int:
        return len(self._symbols)

    def __contains__(self, char: object) -> bool:
        return char in self._ids

    def __repr__(self) -> str:
        return f"SymbolTable({self._ids!r})"


def build_symbol_table(text: Union[str, bytes, bytearray]) -> SymbolTable:
    table = SymbolTable()
    for pos, ch in enumerate(as_text(text)):
        table.add(ch, pos)
    return table


def stepped_bit_width(max_id: int) -> int:
    """Width from the stepped threshold table.

    This is the rule older encoders used verbatim. It is one bit short when
    max_id is a power of two (2, 4, 8, ... 128); see select_bit_width().
    """
    for threshold, width in WIDTH_STEPS:
        if max_id > threshold:
            return width
    return MIN_BIT_WIDTH


def select_bit_width(max_id: int) -> int:
    """Width used by the encoder for IDs 0..max_id.

    Same as stepped_bit_width() wherever that width can hold max_id, so
    streams written by older encoders stay bit-identical.
    """
    if max_id < 0:
        raise ValueError(f"invalid max symbol id: {max_id}")
    if max_id >= MAX_SYMBOLS:
        raise AlphabetTooLargeError(f"symbol id {max_id} does not fit in {MAX_BIT_WIDTH} bits")
    width = stepped_bit_width(max_id)
    if max_id >> width:
        width += 1
    return width
