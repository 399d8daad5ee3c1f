#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
artcodec package

Building blocks for art_compression.py: bit vector helpers, the symbol table,
and the header/payload codecs. art_compression.py stays the public entrypoint;
these modules are split out so each layer can be tested on its own.
"""

from __future__ import annotations
