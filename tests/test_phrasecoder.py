import pytest

from giroqr import phrasecoder
from giroqr.errors import CapacityError

DATA_CODEWORDS = 80


@pytest.fixture
def pc():
    return phrasecoder.encode(version=4)


def test_no_phrases(pc):
    encoded = pc.encode_phrases(DATA_CODEWORDS)

    assert len(encoded) == DATA_CODEWORDS
    # terminator padded to a full octet, then the pad bytes
    assert encoded[0] == 0x00
    assert list(encoded[1:5]) == [0xec, 0x11, 0xec, 0x11]


def test_empty_phrase(pc):
    pc.add_phrase("")
    encoded = pc.encode_phrases(DATA_CODEWORDS)

    # 0100 00000000 0000
    assert list(encoded[:2]) == [0x40, 0x00]
    assert encoded[2] == 0xec


def test_single_character(pc):
    pc.add_phrase("A")
    encoded = pc.encode_phrases(DATA_CODEWORDS)

    # 0100 00000001 01000001 0000
    assert list(encoded[:3]) == [0x40, 0x14, 0x10]
    assert list(encoded[3:6]) == [0xec, 0x11, 0xec]
    assert encoded[-1] == 0xec


def test_two_segments(pc):
    pc.add_phrase("A")
    pc.add_phrase("B")
    encoded = pc.encode_phrases(DATA_CODEWORDS)

    # 0100 00000001 01000001 0100 00000001 01000010 0000
    assert list(encoded[:6]) == [0x40, 0x14, 0x14, 0x01, 0x42, 0x00]
    assert encoded[6] == 0xec
    assert len(pc.get_phrases()) == 2


def test_latin1_characters(pc):
    pc.add_phrase("\xe4")
    encoded = pc.encode_phrases(DATA_CODEWORDS)

    # 0100 00000001 11100100
    assert list(encoded[:3]) == [0x40, 0x1e, 0x40]


def test_exact_capacity(pc):
    # 4 + 8 + 78*8 = 636 bits, room for the terminator only
    pc.add_phrase("x" * 78)
    encoded = pc.encode_phrases(DATA_CODEWORDS)

    assert len(encoded) == DATA_CODEWORDS
    # low nibble of the last "x" followed by the terminator
    assert encoded[-1] == 0x80


def test_over_capacity(pc):
    pc.add_phrase("x" * 79)

    with pytest.raises(CapacityError):
        pc.encode_phrases(DATA_CODEWORDS)


def test_segments_over_capacity(pc):
    pc.add_phrase("x" * 40)
    pc.add_phrase("y" * 40)

    with pytest.raises(CapacityError):
        pc.encode_phrases(DATA_CODEWORDS)


def test_count_field_limit(pc):
    pc.add_phrase("x" * 255)

    with pytest.raises(CapacityError):
        pc.add_phrase("x" * 256)


def test_non_latin1(pc):
    with pytest.raises(ValueError):
        pc.add_phrase("€")


def test_not_a_string(pc):
    with pytest.raises(TypeError):
        pc.add_phrase(b"bytes")


@pytest.mark.parametrize("version", [0, 10])
def test_unsupported_version(version):
    with pytest.raises(ValueError):
        phrasecoder.encode(version=version)
