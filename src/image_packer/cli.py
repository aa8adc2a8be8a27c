from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from . import __version__
from .errors import ImagePackerError
from .images.transcode import pack_file, unpack_file
from .settings import ImagePackerSettings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="image-packer",
        description="Convert images between 8-bit RGBA and 16-bit ARGB1555.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log each step to stderr")

    sub = parser.add_subparsers(dest="command", metavar="command", required=True)

    pack = sub.add_parser("pack", help="Pack an image to 16-bit ARGB1555 format")
    unpack = sub.add_parser("unpack", help="Unpack a 16-bit ARGB1555 image to 8-bit RGBA")
    for p in (pack, unpack):
        p.add_argument("input", help="Input file path")
        p.add_argument("output", help="Output file path")
        p.add_argument("--format", help="Pillow output format (default: from the output extension)")
        p.add_argument(
            "--no-atomic",
            action="store_true",
            help="Write straight to the output path instead of via a temporary file",
        )

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = ImagePackerSettings.from_args(args)
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    convert = pack_file if args.command == "pack" else unpack_file
    try:
        convert(args.input, args.output, settings=settings)
    except ImagePackerError as e:
        logger.debug("%s failed", args.command, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0
