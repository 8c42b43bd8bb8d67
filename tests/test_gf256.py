import pytest

from glyphqr.errors import InternalInvariantError
from glyphqr.gf256 import EXP_TABLE, LOG_TABLE, gf_exp, gf_log, gf_mul, poly_eval, poly_mul, trim


def test_exp_table_starts_with_powers_of_two():
    assert EXP_TABLE[:9] == [1, 2, 4, 8, 16, 32, 64, 128, 29]
    assert EXP_TABLE[255] == 1


def test_log_inverts_exp():
    for i in range(255):
        assert LOG_TABLE[EXP_TABLE[i]] == i


def test_exp_covers_every_non_zero_element():
    assert sorted(EXP_TABLE[:255]) == list(range(1, 256))


def test_mul():
    assert gf_mul(0, 7) == 0
    assert gf_mul(7, 0) == 0
    assert gf_mul(2, 128) == 29
    assert gf_mul(3, 7) == 9
    for a in (1, 3, 87, 255):
        assert gf_mul(a, 1) == a
        assert gf_mul(a, EXP_TABLE[255 - LOG_TABLE[a]]) == 1


def test_log_of_zero_is_an_invariant_violation():
    with pytest.raises(InternalInvariantError):
        gf_log(0)


def test_exp_wraps_modulo_255():
    assert gf_exp(255) == 1
    assert gf_exp(-1) == EXP_TABLE[254]


def test_trim_drops_leading_zeros_only():
    assert trim([0, 0, 3, 0, 1]) == [3, 0, 1]
    assert trim([0, 0]) == []


def test_poly_mul_of_linear_factors_has_their_roots():
    poly = poly_mul([1, gf_exp(0)], [1, gf_exp(1)])
    assert poly_eval(poly, gf_exp(0)) == 0
    assert poly_eval(poly, gf_exp(1)) == 0
    assert poly_eval(poly, gf_exp(2)) != 0
