"""Decoding of hexadecimal strings."""

from __future__ import annotations

import string

_HEX_DIGITS = frozenset(string.hexdigits)


class HexError(ValueError):
    """Raised when a string is not valid hexadecimal."""


class InvalidCharError(HexError):
    """A character outside 0-9, a-f and A-F was found."""

    def __init__(self, char: str) -> None:
        super().__init__(f"invalid char in hex: {char}")
        self.char = char

    def __eq__(self, other: object) -> bool:
        return isinstance(other, InvalidCharError) and other.char == self.char

    def __hash__(self) -> int:
        return hash((InvalidCharError, self.char))


class InvalidLengthError(HexError):
    """The number of hex digits is odd."""

    def __init__(self) -> None:
        super().__init__("invalid hex length")

    def __eq__(self, other: object) -> bool:
        return isinstance(other, InvalidLengthError)

    def __hash__(self) -> int:
        return hash(InvalidLengthError)


def from_hex(text: str) -> bytes:
    """Decode a hexadecimal string into bytes."""
    for char in text:
        if char not in _HEX_DIGITS:
            raise InvalidCharError(char)
    if len(text) % 2:
        raise InvalidLengthError()
    return bytes.fromhex(text)