"""Encode text into QR Code Model 2 symbols rendered as text glyphs."""

from .encoder import QRCode, encode, make_qr
from .errors import CapacityExceededError, InternalInvariantError, InvalidParameterError, QRCodeError
from .render import render_svg, render_text
from .segments import Mode

__all__ = [
    "CapacityExceededError",
    "InternalInvariantError",
    "InvalidParameterError",
    "Mode",
    "QRCode",
    "QRCodeError",
    "encode",
    "make_qr",
    "render_svg",
    "render_text",
]

__version__ = "0.1.0"
