#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations


class ArtCodecError(ValueError):
    pass


class AlphabetTooLargeError(ArtCodecError):
    pass


class UnsupportedCharacterError(ArtCodecError):
    def __init__(self, char: str, position: int) -> None:
        super().__init__(f"character {char!r} (code {ord(char)}) at position {position} does not fit in 8 bits")
        self.char = char
        self.position = position


class HeaderTooLargeError(ArtCodecError):
    pass


class MalformedHeaderError(ArtCodecError):
    pass


class CorruptPayloadError(ArtCodecError):
    pass


class ContainerError(ArtCodecError):
    pass


class ContainerFormatError(ContainerError):
    pass


class ContainerCRCError(ContainerError):
    pass
