from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import Settings, configure_logging, load_settings
from .encoder import make_qr
from .errors import QRCodeError
from .render import render_svg, render_text
from .tables import ECC_LEVELS

logger = logging.getLogger(__name__)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="glyphqr",
        description="Encode text as a QR code drawn with text glyphs, or write it as SVG.",
    )
    parser.add_argument("data", help="The text to encode in the QR code")
    parser.add_argument(
        "-e",
        "--error-correction",
        type=str.upper,
        choices=ECC_LEVELS,
        default=settings.error_correction,
        help="Error correction level (default: %(default)s)",
    )
    parser.add_argument(
        "-m",
        "--mask",
        type=int,
        choices=range(8),
        metavar="0-7",
        default=settings.mask_pattern,
        help="Mask pattern (default: %(default)s)",
    )
    parser.add_argument("--fill", default=settings.fill_symbol, help="Symbol drawn for dark modules")
    parser.add_argument("--clear", default=settings.clear_symbol, help="Symbol drawn for light modules")
    parser.add_argument("--svg", type=Path, help="Write an SVG image to this path instead of printing")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    try:
        settings = load_settings()
        parser = build_parser(settings)
    except QRCodeError as exc:
        print(f"glyphqr: configuration error: {exc}", file=sys.stderr)
        return 2
    configure_logging(settings)
    args = parser.parse_args(argv)

    try:
        code = make_qr(args.data, args.error_correction, args.mask)
    except QRCodeError as exc:
        logger.error("Could not encode input: %s", exc)
        print(f"glyphqr: {exc}", file=sys.stderr)
        return 1

    logger.info(
        "Encoded %s data as version %d-%s (%dx%d), mask %d",
        code.mode.name.lower(),
        code.version,
        code.error_correction,
        code.size,
        code.size,
        code.mask_pattern,
    )
    if args.svg:
        args.svg.write_text(render_svg(code.matrix), encoding="utf-8")
        logger.info("Wrote %s", args.svg)
    else:
        sys.stdout.write(render_text(code.matrix, args.fill, args.clear))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
