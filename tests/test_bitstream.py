import pytest

from glyphqr.bitstream import BitBuffer, encode_segment
from glyphqr.errors import InternalInvariantError, InvalidParameterError
from glyphqr.segments import Mode, Segment, choose_version, make_segment
from glyphqr.tables import data_codeword_capacity


def test_append_bits_is_msb_first():
    buffer = BitBuffer(16)
    buffer.append_bits(0b0010, 4)
    buffer.append_bits(0b000001011, 9)
    assert len(buffer) == 13
    assert buffer.to_codewords() == [0b00100000, 0b01011000]
    assert [buffer.get_bit(i) for i in range(4)] == [0, 0, 1, 0]


def test_writing_past_capacity_fails():
    buffer = BitBuffer(8)
    buffer.append_bits(0xFF, 8)
    with pytest.raises(InternalInvariantError):
        buffer.append_bits(1, 1)


def test_hello_world_1m_codewords():
    codewords = encode_segment(make_segment("HELLO WORLD"), 1, "M")
    assert codewords == [32, 91, 11, 120, 209, 114, 220, 77, 67, 64, 236, 17, 236, 17, 236, 17]


def test_numeric_1m_codewords():
    codewords = encode_segment(make_segment("01234567"), 1, "M")
    assert codewords == [16, 32, 12, 86, 97, 128, 236, 17, 236, 17, 236, 17, 236, 17, 236, 17]


def test_empty_text_is_header_then_padding():
    codewords = encode_segment(make_segment(""), 1, "L")
    assert len(codewords) == 19
    assert codewords[:3] == [0x10, 0x00, 0x00]
    assert codewords[3:7] == [0xEC, 0x11, 0xEC, 0x11]


def test_byte_mode_header():
    codewords = encode_segment(make_segment("né"), 1, "L")
    # 0100 | 00000011 | 01101110 11000011 10101001 | 0000
    assert codewords[:5] == [0x40, 0x36, 0xEC, 0x3A, 0x90]


def test_full_symbol_gets_no_terminator_or_padding():
    codewords = encode_segment(make_segment("9" * 7089), 40, "L")
    assert len(codewords) == data_codeword_capacity(40, "L")
    # Last 8 bits of the final 10-bit chunk for "999".
    assert codewords[-1] == 0b11100111


@pytest.mark.parametrize("text", ["", "1", "HELLO WORLD", "hello, world", "€" * 30])
@pytest.mark.parametrize("level", ["L", "M", "Q", "H"])
def test_output_fills_data_capacity_exactly(text, level):
    segment = make_segment(text)
    version = choose_version(segment, level)
    assert len(encode_segment(segment, version, level)) == data_codeword_capacity(version, level)


def test_kanji_segment_is_rejected():
    segment = Segment(Mode.KANJI, 1, (0x1AAA,), 13, 13)
    with pytest.raises(InvalidParameterError):
        encode_segment(segment, 1, "L")
