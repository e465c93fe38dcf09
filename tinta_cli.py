# -*- coding: utf-8 -*-
"""
Tinta: Perceptual color appearance and tonal palettes
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: tinta_cli.py — Command line front end.

    tinta generate-css -p "#6750a4" [-s HEX] [-t HEX] [-e HEX] -o DIR

Builds a core palette from the given colors and writes the light and
dark schemes as CSS custom properties to ``DIR/tokens.css``.
"""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import List, Optional, TextIO

from __about__ import __version__
from tinta_colorutils import argb_from_hex
from tinta_palettes import CorePalette, CorePaletteColors
from tinta_scheme import Scheme

logger = logging.getLogger(__name__)

TOKENS_FILENAME = "tokens.css"
TOKEN_PREFIX = "md-sys-color"


def _hex_color(value: str) -> int:
    """argparse type: hex string -> packed ARGB."""
    try:
        return argb_from_hex(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tinta",
        description="Generate Material color tokens from seed colors",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    subparsers = parser.add_subparsers(dest="command")

    css = subparsers.add_parser("generate-css", help="Generate CSS with color settings")
    css.add_argument(
        "-p", "--primary", required=True, type=_hex_color, metavar="#001122",
        help="Sets the primary color",
    )
    css.add_argument(
        "-s", "--secondary", type=_hex_color, metavar="#001122",
        help="Sets the secondary color",
    )
    css.add_argument(
        "-t", "--tertiary", type=_hex_color, metavar="#001122",
        help="Sets the tertiary color",
    )
    css.add_argument(
        "-e", "--error", type=_hex_color, metavar="#001122",
        help="Sets the error color",
    )
    css.add_argument(
        "-o", "--output", required=True, metavar="DIR",
        help="Sets the output directory",
    )
    return parser


def is_directory_writable(directory: Path) -> bool:
    return directory.is_dir() and os.access(directory, os.W_OK)


def write_scheme(scheme: Scheme, stream: TextIO, suffix: str, prefix: str = TOKEN_PREFIX) -> None:
    """Writes one ``--prefix-role-suffix: "#rrggbb";`` line per role."""
    for role, hex_color in scheme.to_hex_dict().items():
        stream.write(f'  --{prefix}-{role.replace("_", "-")}-{suffix}: "{hex_color}";\n')


def generate_css(args: argparse.Namespace) -> int:
    out_dir = Path(args.output)
    if not is_directory_writable(out_dir):
        logger.error("Cannot write to '%s', quitting", out_dir)
        return 1

    colors = CorePaletteColors(
        primary=args.primary,
        secondary=args.secondary,
        tertiary=args.tertiary,
        error=args.error,
    )
    core = CorePalette.from_colors(colors)
    light = Scheme.light_from_core_palette(core)
    dark = Scheme.dark_from_core_palette(core)

    path = out_dir / TOKENS_FILENAME
    try:
        with path.open("w", encoding="utf-8") as stream:
            stream.write(":root {\n")
            write_scheme(light, stream, "light")
            write_scheme(dark, stream, "dark")
            stream.write("}\n")
    except OSError as exc:
        logger.error("Failed to write %s: %s", path, exc)
        return 1

    logger.info("Wrote %s", path)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if args.command == "generate-css":
        return generate_css(args)

    parser.print_help()
    return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
