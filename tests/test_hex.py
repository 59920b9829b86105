import pytest

from crater.hex import HexError, InvalidCharError, InvalidLengthError, from_hex


def test_from_hex_valid():
    assert from_hex("00010210ffFfFF") == bytes([0x00, 0x01, 0x02, 0x10, 0xFF, 0xFF, 0xFF])


def test_from_hex_empty():
    assert from_hex("") == b""


@pytest.mark.parametrize("text, char", [("!", "!"), ("g", "g")])
def test_from_hex_invalid_char(text, char):
    with pytest.raises(InvalidCharError) as info:
        from_hex(text)
    assert info.value == InvalidCharError(char)
    assert info.value.char == char


def test_from_hex_invalid_length():
    with pytest.raises(InvalidLengthError) as info:
        from_hex("000")
    assert info.value == InvalidLengthError()


def test_invalid_char_reported_before_length():
    with pytest.raises(InvalidCharError) as info:
        from_hex("0z0")
    assert info.value.char == "z"


def test_errors_are_hex_errors():
    with pytest.raises(HexError):
        from_hex("0")
    with pytest.raises(ValueError):
        from_hex("x")