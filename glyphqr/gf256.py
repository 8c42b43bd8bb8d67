from __future__ import annotations

from typing import List

from .errors import InternalInvariantError

# Galois field setup for GF(256)
POLY = 0x11D
EXP_TABLE = [0] * 512
LOG_TABLE = [0] * 256


def _init_tables() -> None:
    x = 1
    for i in range(255):
        EXP_TABLE[i] = x
        LOG_TABLE[x] = i
        x <<= 1
        if x & 0x100:
            x ^= POLY
    for i in range(255, 512):
        EXP_TABLE[i] = EXP_TABLE[i - 255]


_init_tables()


def gf_exp(n: int) -> int:
    return EXP_TABLE[n % 255]


def gf_log(x: int) -> int:
    if x == 0:
        raise InternalInvariantError("log(0) is undefined in GF(256)")
    return LOG_TABLE[x]


def gf_mul(x: int, y: int) -> int:
    if x == 0 or y == 0:
        return 0
    return EXP_TABLE[LOG_TABLE[x] + LOG_TABLE[y]]


def trim(poly: List[int]) -> List[int]:
    """Drop leading zero coefficients so ``poly[0]`` is the true leading term."""
    offset = 0
    while offset < len(poly) and poly[offset] == 0:
        offset += 1
    return poly[offset:]


def poly_mul(p: List[int], q: List[int]) -> List[int]:
    res = [0] * (len(p) + len(q) - 1)
    for i, a in enumerate(p):
        for j, b in enumerate(q):
            res[i + j] ^= gf_mul(a, b)
    return trim(res)


def poly_eval(poly: List[int], x: int) -> int:
    """Evaluate ``poly`` (highest degree first) at ``x`` using Horner's rule."""
    result = 0
    for coef in poly:
        result = gf_mul(result, x) ^ coef
    return result
