import pytest

from glyphqr.tables import (
    ALIGNMENT_POSITIONS,
    BIT_LIMITS,
    ECC_LEVELS,
    GENERATOR_POLYNOMIALS,
    data_codeword_capacity,
    module_count,
    rs_block_groups,
    rs_blocks,
    total_codeword_capacity,
)

# Total codewords per version from ISO/IEC 18004 table 1 (sample).
TOTAL_CODEWORDS = {1: 26, 2: 44, 7: 196, 10: 346, 14: 581, 21: 1156, 27: 1931, 35: 3035, 40: 3706}


def test_module_count():
    assert module_count(1) == 21
    assert module_count(7) == 45
    assert module_count(40) == 177


@pytest.mark.parametrize("version", sorted(TOTAL_CODEWORDS))
@pytest.mark.parametrize("level", ECC_LEVELS)
def test_total_codewords_match_standard(version, level):
    assert total_codeword_capacity(version, level) == TOTAL_CODEWORDS[version]


@pytest.mark.parametrize("version", range(1, 41))
def test_every_level_shares_the_total_codeword_count(version):
    totals = {total_codeword_capacity(version, level) for level in ECC_LEVELS}
    assert len(totals) == 1


@pytest.mark.parametrize("version", range(1, 41))
@pytest.mark.parametrize("level", ECC_LEVELS)
def test_bit_limits_agree_with_block_table(version, level):
    assert BIT_LIMITS[level][version] == data_codeword_capacity(version, level) * 8


@pytest.mark.parametrize("version", range(1, 41))
@pytest.mark.parametrize("level", ECC_LEVELS)
def test_blocks_share_one_ec_length(version, level):
    blocks = rs_blocks(version, level)
    assert len({block.ecc_codewords for block in blocks}) == 1
    assert blocks[0].ecc_codewords in GENERATOR_POLYNOMIALS


def test_known_block_layouts():
    assert rs_block_groups(1, "M") == ((1, 26, 16),)
    assert rs_block_groups(5, "Q") == ((2, 33, 15), (2, 34, 16))
    assert rs_block_groups(40, "H") == ((20, 45, 15), (61, 46, 16))
    assert data_codeword_capacity(40, "L") == 2956


def test_alignment_positions():
    assert ALIGNMENT_POSITIONS[1] == ()
    assert ALIGNMENT_POSITIONS[2] == (6, 18)
    assert ALIGNMENT_POSITIONS[7] == (6, 22, 38)
    assert ALIGNMENT_POSITIONS[32] == (6, 34, 60, 86, 112, 138)
    for version, positions in ALIGNMENT_POSITIONS.items():
        if positions:
            assert positions[0] == 6
            assert positions[-1] == module_count(version) - 7


def test_generator_cache_degrees():
    for degree, poly in GENERATOR_POLYNOMIALS.items():
        assert len(poly) == degree + 1
        assert poly[0] == 1
