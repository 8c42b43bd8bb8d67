from __future__ import annotations

from typing import Callable, Dict, Sequence

from .errors import InternalInvariantError, InvalidParameterError
from .matrix import QRMatrix

# Data mask conditions, keyed by mask pattern. Arguments are (x, y): column, row.
MASK_FUNCTIONS: Dict[int, Callable[[int, int], bool]] = {
    0: lambda x, y: (x + y) % 2 == 0,
    1: lambda x, y: y % 2 == 0,
    2: lambda x, y: x % 3 == 0,
    3: lambda x, y: (x + y) % 3 == 0,
    4: lambda x, y: ((y // 2) + (x // 3)) % 2 == 0,
    5: lambda x, y: ((x * y) % 2) + ((x * y) % 3) == 0,
    6: lambda x, y: (((x * y) % 2) + ((x * y) % 3)) % 2 == 0,
    7: lambda x, y: (((x * y) % 3) + ((x + y) % 2)) % 2 == 0,
}


def apply_mask(x: int, y: int, mask: int) -> bool:
    try:
        return MASK_FUNCTIONS[mask](x, y)
    except KeyError:
        raise InvalidParameterError(f"Invalid mask pattern: {mask}") from None


def draw_data(matrix: QRMatrix, codewords: Sequence[int], mask: int) -> None:
    """Place ``codewords`` in the two-column zig-zag order and apply ``mask``.

    Modules left over once the codewords run out are remainder bits, placed
    as light before masking.
    """
    size = matrix.size
    bit_index = 0
    total_bits = len(codewords) * 8

    def get_bit(idx: int) -> int:
        return (codewords[idx >> 3] >> (7 - (idx & 7))) & 1

    x = size - 1
    y = size - 1
    direction = -1

    while x > 0:
        # Skip the vertical timing pattern
        if x == 6:
            x -= 1
        while 0 <= y < size:
            for dx in range(2):
                xx = x - dx
                if matrix.get(xx, y) is None:
                    bit = False
                    if bit_index < total_bits:
                        bit = bool(get_bit(bit_index))
                        bit_index += 1
                    if apply_mask(xx, y, mask):
                        bit = not bit
                    matrix.set_data(xx, y, bit)
            y += direction
        y += -direction
        direction = -direction
        x -= 2

    if bit_index != total_bits:
        raise InternalInvariantError(f"Placed {bit_index} of {total_bits} codeword bits")
