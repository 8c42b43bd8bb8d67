from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from .gf256 import gf_exp, gf_log, gf_mul, poly_mul, trim
from .tables import GENERATOR_POLYNOMIALS, RSBlock, rs_blocks

logger = logging.getLogger(__name__)


def rs_generator_poly(degree: int) -> List[int]:
    """Return the generator polynomial of ``degree``, highest degree first."""
    cached = GENERATOR_POLYNOMIALS.get(degree)
    if cached is not None:
        return list(cached)
    result = [1]
    for i in range(degree):
        result = poly_mul(result, [1, gf_exp(i)])
    return result


def poly_mod(dividend: List[int], divisor: List[int]) -> List[int]:
    """Remainder of ``dividend / divisor`` over GF(256)."""
    left = trim(dividend)
    right = trim(divisor)
    while len(left) >= len(right):
        ratio = gf_log(left[0]) - gf_log(right[0])
        factor = gf_exp(ratio)
        output = left[:]
        for i, coef in enumerate(right):
            output[i] ^= gf_mul(coef, factor)
        left = trim(output)
    return left


def rs_compute_remainder(data: Sequence[int], ecc_count: int) -> List[int]:
    """Return the ``ecc_count`` error correction codewords for ``data``."""
    generator = rs_generator_poly(ecc_count)
    remainder = poly_mod(list(data) + [0] * (len(generator) - 1), generator)
    # Missing high order terms of a short remainder are zero.
    return [0] * (ecc_count - len(remainder)) + remainder


def split_blocks(
    codewords: Sequence[int], blocks: Sequence[RSBlock]
) -> Tuple[List[List[int]], List[List[int]]]:
    data_blocks: List[List[int]] = []
    ecc_blocks: List[List[int]] = []
    offset = 0
    for block in blocks:
        data = list(codewords[offset:offset + block.data_codewords])
        offset += block.data_codewords
        data_blocks.append(data)
        ecc_blocks.append(rs_compute_remainder(data, block.ecc_codewords))
    return data_blocks, ecc_blocks


def interleave(data_blocks: Sequence[Sequence[int]], ecc_blocks: Sequence[Sequence[int]]) -> List[int]:
    result: List[int] = []
    for group in (data_blocks, ecc_blocks):
        longest = max((len(block) for block in group), default=0)
        for i in range(longest):
            for block in group:
                if i < len(block):
                    result.append(block[i])
    return result


def make_final_codewords(codewords: Sequence[int], version: int, ecc_level: str) -> List[int]:
    """Add error correction to the data codewords and interleave all blocks."""
    blocks = rs_blocks(version, ecc_level)
    logger.debug(
        "Version %d-%s uses %d blocks with %d EC codewords each",
        version,
        ecc_level,
        len(blocks),
        blocks[0].ecc_codewords,
    )
    data_blocks, ecc_blocks = split_blocks(codewords, blocks)
    return interleave(data_blocks, ecc_blocks)
