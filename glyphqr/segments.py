"""Input classification and symbol version selection.

The whole input is carried by a single segment. Its mode is the cheapest one
every character fits into: numeric, then alphanumeric, then byte.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Tuple

from .errors import CapacityExceededError, InvalidParameterError
from .tables import ALPHANUMERIC_CHARS, BIT_LIMITS, MAX_VERSION, MIN_VERSION

logger = logging.getLogger(__name__)


class Mode(IntEnum):
    """Encoding modes; the value is the 4-bit mode indicator."""

    NUMERIC = 0b0001
    ALPHANUMERIC = 0b0010
    BYTE = 0b0100
    KANJI = 0b1000


# Character count indicator widths for versions 1-9, 10-26 and 27-40.
CHAR_COUNT_BITS = {
    Mode.NUMERIC: (10, 12, 14),
    Mode.ALPHANUMERIC: (9, 11, 13),
    Mode.BYTE: (8, 16, 16),
    Mode.KANJI: (8, 10, 12),
}


def char_count_bits(version: int, mode: Mode) -> int:
    try:
        widths = CHAR_COUNT_BITS[mode]
    except KeyError:
        raise InvalidParameterError(f"Unsupported mode: {mode!r}") from None
    if version < 10:
        return widths[0]
    if version < 27:
        return widths[1]
    return widths[2]


@dataclass(frozen=True)
class Segment:
    mode: Mode
    # Characters for numeric/alphanumeric, UTF-8 octets for byte mode.
    char_count: int
    chunks: Tuple[int, ...]
    stride: int
    final_stride: int

    @property
    def payload_bits(self) -> int:
        if not self.chunks:
            return 0
        return (len(self.chunks) - 1) * self.stride + self.final_stride

    def bits_required(self, version: int) -> int:
        return 4 + char_count_bits(version, self.mode) + self.payload_bits


def classify(text: str) -> Mode:
    only_numeric = True
    only_alphanumeric = True
    for char in text:
        if not "0" <= char <= "9":
            only_numeric = False
        if char not in ALPHANUMERIC_CHARS:
            only_alphanumeric = False
        # Nothing later in the text can make a cheaper mode feasible again.
        if not only_numeric and not only_alphanumeric:
            break
    if only_numeric:
        return Mode.NUMERIC
    if only_alphanumeric:
        return Mode.ALPHANUMERIC
    return Mode.BYTE


def to_utf8(text: str) -> bytes:
    """Expand each code point into 1-4 UTF-8 octets."""
    out = bytearray()
    for char in text:
        cp = ord(char)
        if cp < 0x80:
            out.append(cp)
        elif cp < 0x800:
            out.append(0b11000000 | (cp >> 6))
            out.append(0b10000000 | (cp & 0b111111))
        elif cp < 0x10000:
            out.append(0b11100000 | (cp >> 12))
            out.append(0b10000000 | ((cp >> 6) & 0b111111))
            out.append(0b10000000 | (cp & 0b111111))
        else:
            out.append(0b11110000 | (cp >> 18))
            out.append(0b10000000 | ((cp >> 12) & 0b111111))
            out.append(0b10000000 | ((cp >> 6) & 0b111111))
            out.append(0b10000000 | (cp & 0b111111))
    return bytes(out)


def _numeric_segment(text: str) -> Segment:
    chunks = tuple(int(text[i:i + 3]) for i in range(0, len(text), 3))
    final_stride = {0: 10, 1: 4, 2: 7}[len(text) % 3]
    return Segment(Mode.NUMERIC, len(text), chunks, 10, final_stride)


def _alphanumeric_segment(text: str) -> Segment:
    chunks: List[int] = []
    for i in range(0, len(text), 2):
        pair = text[i:i + 2]
        if len(pair) == 2:
            chunks.append(ALPHANUMERIC_CHARS.index(pair[0]) * 45 + ALPHANUMERIC_CHARS.index(pair[1]))
        else:
            chunks.append(ALPHANUMERIC_CHARS.index(pair))
    final_stride = 11 if len(text) % 2 == 0 else 6
    return Segment(Mode.ALPHANUMERIC, len(text), tuple(chunks), 11, final_stride)


def _byte_segment(text: str) -> Segment:
    data = to_utf8(text)
    return Segment(Mode.BYTE, len(data), tuple(data), 8, 8)


def make_segment(text: str) -> Segment:
    mode = classify(text)
    if mode == Mode.NUMERIC:
        segment = _numeric_segment(text)
    elif mode == Mode.ALPHANUMERIC:
        segment = _alphanumeric_segment(text)
    else:
        segment = _byte_segment(text)
    logger.debug("Classified %d characters as %s", len(text), segment.mode.name)
    return segment


def choose_version(segment: Segment, ecc_level: str) -> int:
    """Return the smallest version whose data capacity holds ``segment``."""
    limits = BIT_LIMITS[ecc_level]
    for version in range(MIN_VERSION, MAX_VERSION + 1):
        if segment.bits_required(version) <= limits[version]:
            return version
    raise CapacityExceededError(
        f"{segment.mode.name.lower()} payload needs {segment.bits_required(MAX_VERSION)} bits, "
        f"more than version {MAX_VERSION} holds at level {ecc_level} ({limits[MAX_VERSION]})"
    )
