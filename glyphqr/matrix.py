"""Function patterns of the symbol: finders, separators, alignment and timing
patterns, the dark module, and the BCH-protected format and version fields.

Coordinates follow the image convention: ``x`` is the column and ``y`` the
row, with the origin in the top-left corner.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from .errors import InternalInvariantError
from .tables import ALIGNMENT_POSITIONS, ECC_LEVEL_FORMAT, ECC_LEVELS, MAX_VERSION, module_count

logger = logging.getLogger(__name__)

Position = Tuple[int, int]

# x^10 + x^8 + x^5 + x^4 + x^2 + x + 1
G15 = 0b10100110111
G15_MASK = 0b101010000010010
# x^12 + x^11 + x^10 + x^9 + x^8 + x^5 + x^2 + 1
G18 = 0b1111100100101


class QRMatrix:
    """Square grid of modules; ``None`` marks a module not yet assigned."""

    def __init__(self, size: int) -> None:
        self.size = size
        self.modules: List[List[Optional[bool]]] = [[None for _ in range(size)] for _ in range(size)]
        self.is_function: List[List[bool]] = [[False for _ in range(size)] for _ in range(size)]

    def set_function(self, x: int, y: int, value: bool) -> None:
        self.modules[y][x] = value
        self.is_function[y][x] = True

    def set_data(self, x: int, y: int, value: bool) -> None:
        if self.is_function[y][x]:
            raise InternalInvariantError(f"Attempting to overwrite function module at ({x}, {y})")
        if self.modules[y][x] is not None:
            raise InternalInvariantError(f"Module at ({x}, {y}) is already assigned")
        self.modules[y][x] = value

    def get(self, x: int, y: int) -> Optional[bool]:
        return self.modules[y][x]

    def unassigned(self) -> List[Position]:
        return [
            (x, y)
            for y in range(self.size)
            for x in range(self.size)
            if self.modules[y][x] is None
        ]

    def rows(self) -> List[List[bool]]:
        """Return the finished grid as booleans, ``True`` for dark."""
        missing = self.unassigned()
        if missing:
            raise InternalInvariantError(f"{len(missing)} modules left unassigned, first at {missing[0]}")
        return [[bool(module) for module in row] for row in self.modules]


FINDER_PATTERN = [
    [True, True, True, True, True, True, True],
    [True, False, False, False, False, False, True],
    [True, False, True, True, True, False, True],
    [True, False, True, True, True, False, True],
    [True, False, True, True, True, False, True],
    [True, False, False, False, False, False, True],
    [True, True, True, True, True, True, True],
]

ALIGNMENT_PATTERN = [
    [True, True, True, True, True],
    [True, False, False, False, True],
    [True, False, True, False, True],
    [True, False, False, False, True],
    [True, True, True, True, True],
]


def place_finder(matrix: QRMatrix, x: int, y: int) -> None:
    for dy in range(7):
        for dx in range(7):
            matrix.set_function(x + dx, y + dy, FINDER_PATTERN[dy][dx])
    # Separator
    for i in range(-1, 8):
        for dx, dy in ((-1, i), (7, i), (i, -1), (i, 7)):
            xx, yy = x + dx, y + dy
            if 0 <= xx < matrix.size and 0 <= yy < matrix.size and matrix.get(xx, yy) is None:
                matrix.set_function(xx, yy, False)


def place_alignment(matrix: QRMatrix, version: int) -> None:
    positions = ALIGNMENT_POSITIONS[version]
    for y in positions:
        for x in positions:
            # Centres inside a finder pattern are already taken.
            if matrix.get(x, y) is not None:
                continue
            for dy in range(5):
                for dx in range(5):
                    matrix.set_function(x - 2 + dx, y - 2 + dy, ALIGNMENT_PATTERN[dy][dx])


def place_timing(matrix: QRMatrix) -> None:
    for i in range(8, matrix.size - 8):
        bit = (i % 2) == 0
        if matrix.get(i, 6) is None:
            matrix.set_function(i, 6, bit)
        if matrix.get(6, i) is None:
            matrix.set_function(6, i, bit)


def place_dark_module(matrix: QRMatrix) -> None:
    matrix.set_function(8, matrix.size - 8, True)


def bch_remainder(value: int, generator: int) -> int:
    """Reduce ``value`` modulo ``generator`` as polynomials over GF(2)."""
    degree = generator.bit_length()
    while value.bit_length() >= degree:
        value ^= generator << (value.bit_length() - degree)
    return value


def format_info_bits(ecc_level: str, mask: int) -> int:
    format_value = (ECC_LEVEL_FORMAT[ecc_level] << 3) | mask
    return ((format_value << 10) | bch_remainder(format_value << 10, G15)) ^ G15_MASK


def version_info_bits(version: int) -> int:
    return (version << 12) | bch_remainder(version << 12, G18)


def format_info_positions(size: int) -> Tuple[List[Position], List[Position]]:
    """Module positions of format bits 0-14 for both copies."""
    around_finder: List[Position] = [(8, i) for i in range(6)]
    around_finder += [(8, 7), (8, 8), (7, 8)]
    around_finder += [(14 - i, 8) for i in range(9, 15)]
    split: List[Position] = [(size - 1 - i, 8) for i in range(8)]
    split += [(8, size - 15 + i) for i in range(8, 15)]
    return around_finder, split


def version_info_positions(size: int) -> Tuple[List[Position], List[Position]]:
    """Module positions of version bits 0-17 for the top-right and bottom-left blocks."""
    top_right = [(size - 11 + i % 3, i // 3) for i in range(18)]
    bottom_left = [(i // 3, size - 11 + i % 3) for i in range(18)]
    return top_right, bottom_left


def apply_format_info(matrix: QRMatrix, ecc_level: str, mask: int) -> None:
    bits = format_info_bits(ecc_level, mask)
    for positions in format_info_positions(matrix.size):
        for i, (x, y) in enumerate(positions):
            matrix.set_function(x, y, ((bits >> i) & 1) == 1)


def apply_version_info(matrix: QRMatrix, version: int) -> None:
    if version < 7:
        return
    bits = version_info_bits(version)
    for positions in version_info_positions(matrix.size):
        for i, (x, y) in enumerate(positions):
            matrix.set_function(x, y, ((bits >> i) & 1) == 1)


def build_function_patterns(version: int, ecc_level: str, mask: int) -> QRMatrix:
    """Allocate a symbol and stamp every function module onto it."""
    size = module_count(version)
    matrix = QRMatrix(size)
    place_finder(matrix, 0, 0)
    place_finder(matrix, size - 7, 0)
    place_finder(matrix, 0, size - 7)
    place_alignment(matrix, version)
    place_timing(matrix)
    apply_format_info(matrix, ecc_level, mask)
    place_dark_module(matrix)
    apply_version_info(matrix, version)
    logger.debug("Function patterns stamped on %dx%d matrix", size, size)
    return matrix


def _read_bits(matrix: QRMatrix, positions: Sequence[Position]) -> int:
    value = 0
    for i, (x, y) in enumerate(positions):
        if matrix.get(x, y):
            value |= 1 << i
    return value


def _hamming(a: int, b: int) -> int:
    return bin(a ^ b).count("1")


def read_format_info(matrix: QRMatrix) -> Optional[Tuple[str, int]]:
    """Recover ``(ecc_level, mask)`` from the nearest valid format codeword.

    Both copies are checked; ``None`` is returned when neither lies within
    three bit errors of a valid codeword.
    """
    best: Optional[Tuple[str, int]] = None
    best_distance = 4
    for positions in format_info_positions(matrix.size):
        read = _read_bits(matrix, positions)
        for level in ECC_LEVELS:
            for mask in range(8):
                distance = _hamming(read, format_info_bits(level, mask))
                if distance < best_distance:
                    best, best_distance = (level, mask), distance
    return best


def read_version_info(matrix: QRMatrix) -> Optional[int]:
    """Recover the version from the nearest valid version codeword, as above."""
    best: Optional[int] = None
    best_distance = 4
    for positions in version_info_positions(matrix.size):
        read = _read_bits(matrix, positions)
        for version in range(7, MAX_VERSION + 1):
            distance = _hamming(read, version_info_bits(version))
            if distance < best_distance:
                best, best_distance = version, distance
    return best
