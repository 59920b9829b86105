"""Shared helpers: string enums, filename encoding and failure reporting."""

from __future__ import annotations

import logging
import traceback
from enum import Enum

_log = logging.getLogger(__name__)

# Characters that cannot appear in a filename on Windows, besides control characters.
_FILENAME_RESERVED = frozenset(b'<>:"/\\|?*')


class StringEnum(str, Enum):
    """Enum whose members are written and parsed as fixed strings."""

    def __str__(self) -> str:
        return self.value

    def __format__(self, spec: str) -> str:
        return format(self.value, spec)

    @classmethod
    def parse(cls, text: str) -> StringEnum:
        """Return the member whose string is ``text``."""
        try:
            return cls(text)
        except ValueError:
            raise ValueError(f"invalid {cls.__name__}: {text}") from None

    @classmethod
    def possible_values(cls) -> tuple[str, ...]:
        """Return the strings of all members, in definition order."""
        return tuple(member.value for member in cls)


def encode_filename(text: str) -> str:
    """Percent-encode characters that are not allowed in filenames."""
    return "".join(
        chr(byte)
        if 0x20 <= byte < 0x7F and byte not in _FILENAME_RESERVED
        else f"%{byte:02X}"
        for byte in text.encode("utf-8")
    )


def _causes(error: BaseException):
    seen = {id(error)}
    current = error
    while True:
        cause = current.__cause__
        if cause is None and not current.__suppress_context__:
            cause = current.__context__
        if cause is None or id(cause) in seen:
            return
        seen.add(id(cause))
        yield cause
        current = cause


def report_failure(error: BaseException) -> None:
    """Log an error, the chain of errors that caused it and its traceback."""
    _log.error("%s", error)
    for cause in _causes(error):
        _log.error("caused by: %s", cause)

    if error.__traceback__ is None:
        _log.error("no backtrace")
        return
    _log.error("%s", "".join(traceback.format_tb(error.__traceback__)).rstrip())