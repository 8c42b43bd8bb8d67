from __future__ import annotations

from typing import List

from .errors import InternalInvariantError, InvalidParameterError
from .segments import Mode, Segment, char_count_bits
from .tables import data_codeword_capacity

PAD_BYTES = (0xEC, 0x11)


class BitBuffer:
    """Fixed-size bit buffer, most significant bit first within each byte."""

    def __init__(self, capacity_bits: int) -> None:
        self.capacity = capacity_bits
        self.data = bytearray((capacity_bits + 7) // 8)
        self.length = 0

    def __len__(self) -> int:
        return self.length

    @property
    def remaining(self) -> int:
        return self.capacity - self.length

    def append_bits(self, value: int, length: int) -> None:
        if length > self.remaining:
            raise InternalInvariantError(
                f"Writing {length} bits overflows the buffer ({self.remaining} bits left)"
            )
        for i in reversed(range(length)):
            if (value >> i) & 1:
                self.data[self.length >> 3] |= 0x80 >> (self.length & 7)
            self.length += 1

    def get_bit(self, index: int) -> int:
        return (self.data[index >> 3] >> (7 - (index & 7))) & 1

    def to_codewords(self) -> List[int]:
        return list(self.data[:(self.length + 7) // 8])


def encode_segment(segment: Segment, version: int, ecc_level: str) -> List[int]:
    """Build the data codewords for ``segment``, padded to the symbol's capacity."""
    if segment.mode not in (Mode.NUMERIC, Mode.ALPHANUMERIC, Mode.BYTE):
        raise InvalidParameterError(f"Unsupported mode: {segment.mode!r}")

    capacity = data_codeword_capacity(version, ecc_level) * 8
    buffer = BitBuffer(capacity)

    buffer.append_bits(segment.mode.value, 4)
    buffer.append_bits(segment.char_count, char_count_bits(version, segment.mode))
    last = len(segment.chunks) - 1
    for i, chunk in enumerate(segment.chunks):
        buffer.append_bits(chunk, segment.final_stride if i == last else segment.stride)

    buffer.append_bits(0, min(4, buffer.remaining))
    buffer.append_bits(0, (8 - len(buffer) % 8) % 8)

    idx = 0
    while buffer.remaining:
        buffer.append_bits(PAD_BYTES[idx], 8)
        idx ^= 1
    return buffer.to_codewords()
