import pytest

from glyphqr import CapacityExceededError, InvalidParameterError, Mode, QRCodeError, encode, make_qr
from glyphqr.matrix import FINDER_PATTERN, read_format_info, read_version_info
from glyphqr.tables import module_count


def test_hello_world():
    code = make_qr("HELLO WORLD", "M", 0)
    assert code.mode == Mode.ALPHANUMERIC
    assert code.version == 1
    assert code.size == 21
    assert read_format_info(code.matrix) == ("M", 0)


def test_empty_text():
    code = make_qr("", "L", 1)
    assert code.mode == Mode.NUMERIC
    assert code.version == 1
    assert read_format_info(code.matrix) == ("L", 1)
    rows = code.matrix.rows()
    assert [row[:7] for row in rows[:7]] == FINDER_PATTERN
    assert [rows[6][x] for x in range(8, 13)] == [True, False, True, False, True]


@pytest.mark.parametrize(
    "text, level, mask",
    [
        ("0", "H", 7),
        ("HTTPS://EXAMPLE.COM/A", "Q", 2),
        ("Hello, world!", "L", 5),
        ("Grüße aus Köln 🎉", "M", 4),
        ("x" * 300, "H", 6),
        ("31415926535" * 40, "M", 3),
    ],
)
def test_symbol_is_square_and_complete(text, level, mask):
    code = make_qr(text, level, mask)
    rows = code.matrix.rows()
    assert len(rows) == module_count(code.version)
    assert all(len(row) == len(rows) for row in rows)
    assert code.matrix.unassigned() == []
    assert read_format_info(code.matrix) == (level, mask)
    if code.version >= 7:
        assert read_version_info(code.matrix) == code.version


def test_encoding_is_deterministic():
    first = encode("Deterministic?", "Q", 6)
    second = encode("Deterministic?", "Q", 6)
    assert first == second


def test_mask_changes_the_data_region():
    assert encode("HELLO WORLD", "M", 0) != encode("HELLO WORLD", "M", 1)


def test_maximum_numeric_payload():
    code = make_qr("8" * 7089, "L", 0)
    assert code.version == 40
    assert code.size == 177
    assert read_version_info(code.matrix) == 40


def test_numeric_payload_over_capacity():
    with pytest.raises(CapacityExceededError):
        make_qr("8" * 7090, "L", 0)


def test_capacity_error_is_a_value_error():
    with pytest.raises(ValueError):
        encode("z" * 3000, "H", 0)


@pytest.mark.parametrize("mask", [-1, 8, True, "1", 1.0])
def test_invalid_mask(mask):
    with pytest.raises(InvalidParameterError):
        make_qr("HELLO", "M", mask)


@pytest.mark.parametrize("level", ["X", "", "LM"])
def test_invalid_level(level):
    with pytest.raises(QRCodeError):
        make_qr("HELLO", level, 0)


def test_level_is_case_insensitive():
    assert make_qr("HELLO", "q", 0).error_correction == "Q"


def test_encode_renders_one_line_per_row():
    output = encode("HELLO WORLD", "M", 0, "#", ".")
    lines = output.split("\n")
    assert output.endswith("\n")
    assert lines[-1] == ""
    assert len(lines) == 22
    assert all(len(line) == 21 for line in lines[:-1])
    assert lines[0].startswith("#######.")
    assert lines[0].endswith(".#######")


def test_default_glyphs():
    output = encode("1")
    assert set(output) == {"█", "░", "\n"}
