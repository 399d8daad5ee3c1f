#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import argparse
import bz2
import datetime as _dt
import json
import lzma
import os
import sys
import threading
import zlib
from typing import Dict, List, Optional, Tuple

import zstandard

from art_compression import (
    ArtCodecError,
    artwork_stats,
    decode,
    encode,
    pack_bits,
    unpack_artwork,
)

VERSION = "1.0.0"

DEFAULTS: Dict[str, object] = {
    "baseline": False,
    "quiet": False,
    "log_file": None,
    "pack_out": None,
    "zstd_level": 10,
}

SAMPLES: List[Tuple[str, str]] = [
    (
        "quill",
        "\n"
        "         _.-.\n"
        "       ,'/ //\\\n"
        "      /// // /)\n"
        "     /// // //|\n"
        "    /// // ///\n"
        "   /// // ///\n"
        "  (`: // ///\n"
        "   `;`: ///\n"
        "   / /:`:/\n"
        "  / /  `'\n"
        " / /\n"
        "(_/\n",
    ),
    (
        "bear",
        "\n"
        " __         __\n"
        "/  \\.-\"\"\"-./  \\\n"
        "\\    -   -    /\n"
        " |   o   o   |\n"
        " \\  .-'''-.  /\n"
        "  '-\\__Y__/-'\n"
        "     `---`\n",
    ),
    # Backslashes are kept as drawn.
    (
        "bowl",
        "\n"
        "         (\n"
        "          )\n"
        "     __..---..__\n"
        " ,-='  /  |  \\  `=-.\n"
        ":--..___________..--;\n"
        " \\.,_____________,./\n",
    ),
]


# ----------------------------
# Utilities: time / output
# ----------------------------

def ts_now() -> str:
    return _dt.datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def out(msg: str) -> None:
    sys.stdout.write(msg + "\n")
    sys.stdout.flush()


class RuntimeLog:
    """Append-only text log; a missing path disables it."""

    def __init__(self, path: Optional[str]) -> None:
        self.path = path or ""
        self._lock = threading.Lock()

    def append(self, line: str) -> None:
        if not self.path or not line:
            return
        try:
            parent = os.path.dirname(self.path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with self._lock:
                with open(self.path, "a", encoding="utf-8") as f:
                    f.write(f"{ts_now()} {line}\n")
        except OSError:
            pass


class ConfigError(ValueError):
    pass


def load_config(path: Optional[str]) -> Dict[str, object]:
    """Merge a JSON config file over DEFAULTS. Unknown keys are ignored."""
    cfg = dict(DEFAULTS)
    if not path:
        return cfg
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigError(f"cannot read config {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid JSON in config {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config {path} must contain a JSON object")
    for key in DEFAULTS:
        if key in data:
            cfg[key] = data[key]
    return cfg


def check_config(cfg: Dict[str, object]) -> None:
    for key in ("baseline", "quiet"):
        if not isinstance(cfg.get(key), bool):
            raise ConfigError(f"{key} must be true or false: {cfg.get(key)!r}")
    for key in ("log_file", "pack_out"):
        value = cfg.get(key)
        if value is not None and not isinstance(value, str):
            raise ConfigError(f"{key} must be a path string: {value!r}")
    level = cfg.get("zstd_level")
    if isinstance(level, bool) or not isinstance(level, int):
        raise ConfigError(f"zstd_level must be an integer: {level!r}")
    if not 1 <= level <= zstandard.MAX_COMPRESSION_LEVEL:
        raise ConfigError(f"zstd_level must be between 1 and {zstandard.MAX_COMPRESSION_LEVEL}: {level}")


# ----------------------------
# Reporting
# ----------------------------

def baseline_sizes(raw: bytes, zstd_level: int = 10) -> Dict[str, int]:
    """Output size in bits of general-purpose compressors on the same input."""
    cctx = zstandard.ZstdCompressor(level=int(zstd_level))
    return {
        "zlib": len(zlib.compress(raw, level=9)) * 8,
        "bz2": len(bz2.compress(raw, compresslevel=9)) * 8,
        "lzma": len(lzma.compress(raw, preset=9)) * 8,
        "zstd": len(cctx.compress(raw)) * 8,
    }


def report_artwork(
    name: str,
    art: str,
    cfg: Dict[str, object],
    log: RuntimeLog,
) -> bool:
    quiet = bool(cfg.get("quiet"))
    if not quiet:
        out(art)
    try:
        encoded = encode(art)
        decoded = decode(encoded)
    except ArtCodecError as e:
        out(f"Encode failure :( {name}: {e}")
        log.append(f"fail name={name} error={type(e).__name__}: {e}")
        out("")
        return False
    if decoded != art:
        out(f"Encode failure :( {name}: round trip mismatch")
        log.append(f"fail name={name} error=mismatch")
        out("")
        return False

    stats = artwork_stats(art, encoded)
    out(f"Encode / Decode successful! ({name})")
    out(f"Original size:     {stats.original_bits} bits")
    out(f"Encoded size:      {stats.encoded_bits} bits")
    out(f"Size saved:        {stats.saved_bits} bits")
    out(f"Overall reduction: {stats.reduction_pct:.2f}%")
    if not quiet:
        out(f"Symbols:           {stats.symbols} x {stats.bit_width} bits")
    if cfg.get("baseline"):
        sizes = baseline_sizes(art.encode("latin-1"), int(cfg["zstd_level"]))  # type: ignore[arg-type]
        for label, size in sizes.items():
            out(f"{label + ':':<19}{size} bits")
    log.append(
        f"ok name={name} original={stats.original_bits} encoded={stats.encoded_bits} "
        f"width={stats.bit_width} symbols={stats.symbols}"
    )

    pack_dir = cfg.get("pack_out")
    if pack_dir:
        path = os.path.join(str(pack_dir), f"{name}.acz")
        try:
            os.makedirs(str(pack_dir), exist_ok=True)
            with open(path, "wb") as f:
                f.write(pack_bits(encoded))
        except OSError as e:
            out(f"cannot write {path}: {e}")
            log.append(f"fail name={name} write={path}")
            out("")
            return False
        if not quiet:
            out(f"Packed to:         {path}")
    out("")
    return True


def read_artwork(path: str) -> str:
    with open(path, "rb") as f:
        return f.read().decode("latin-1")


def unpack_file(path: str, log: RuntimeLog) -> int:
    try:
        with open(path, "rb") as f:
            blob = f.read()
        art = unpack_artwork(blob)
    except OSError as e:
        out(f"cannot read {path}: {e}")
        return 1
    except ArtCodecError as e:
        out(f"Decode failure :( {path}: {e}")
        log.append(f"fail unpack={path} error={type(e).__name__}: {e}")
        return 1
    sys.stdout.write(art)
    sys.stdout.flush()
    log.append(f"ok unpack={path} chars={len(art)}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(
        prog="artDemo.py",
        description="artDemo.py: encode ASCII art with fixed-width symbol remapping and report the size reduction.",
    )
    ap.add_argument("--file", action="append", default=[], help="artwork file to encode (repeatable; default: bundled samples).")
    ap.add_argument("--baseline", action="store_true", default=None, help="also show zlib/bz2/lzma/zstd sizes.")
    ap.add_argument("--zstd-level", dest="zstd_level", type=int, default=None, help=f"zstd level for --baseline (default: {DEFAULTS['zstd_level']}).")
    ap.add_argument("--pack-out", dest="pack_out", default=None, help="directory to write <name>.acz containers to.")
    ap.add_argument("--unpack", default=None, help="decode a .acz container, print the artwork and exit.")
    ap.add_argument("--config", default=None, help="JSON config file (keys: baseline, quiet, log_file, pack_out, zstd_level).")
    ap.add_argument("--log-file", dest="log_file", default=None, help="append runtime events to this file.")
    ap.add_argument("--quiet", action="store_true", default=None, help="less terminal output.")
    ap.add_argument("--version", action="store_true", help="print version and exit.")
    args = ap.parse_args(argv)

    if args.version:
        out(f"artDemo.py v{VERSION}")
        return 0

    try:
        cfg = load_config(args.config)
        for key in DEFAULTS:
            value = getattr(args, key)
            if value is not None:
                cfg[key] = value
        check_config(cfg)
    except ConfigError as e:
        out(f"config error: {e}")
        return 2

    log = RuntimeLog(cfg.get("log_file"))  # type: ignore[arg-type]

    if args.unpack:
        return unpack_file(args.unpack, log)

    jobs: List[Tuple[str, str]] = []
    failed = 0
    if args.file:
        for path in args.file:
            try:
                jobs.append((os.path.splitext(os.path.basename(path))[0] or path, read_artwork(path)))
            except OSError as e:
                out(f"cannot read {path}: {e}")
                log.append(f"fail file={path} error={e}")
                failed += 1
    else:
        jobs = list(SAMPLES)

    log.append(f"start artworks={len(jobs)} baseline={bool(cfg.get('baseline'))}")
    for name, art in jobs:
        if not report_artwork(name, art, cfg, log):
            failed += 1
    log.append(f"done failed={failed}")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
