"""Human-readable data sizes such as ``4G`` or ``512KB``."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

_NUMBER = re.compile(r"\+?[0-9]+")


class SizeUnit(Enum):
    """Unit of a size, with its suffix and its multiplier in bytes."""

    BYTES = ("", 1)
    KILOBYTES = ("K", 1024)
    MEGABYTES = ("M", 1024**2)
    GIGABYTES = ("G", 1024**3)
    TERABYTES = ("T", 1024**4)

    def __init__(self, suffix: str, multiplier: int) -> None:
        self.suffix = suffix
        self.multiplier = multiplier


_UNIT_BY_SUFFIX = {unit.suffix: unit for unit in SizeUnit if unit.suffix}


@dataclass(frozen=True)
class Size:
    """An amount of data expressed in a given unit."""

    count: int
    unit: SizeUnit = SizeUnit.BYTES

    @classmethod
    def parse(cls, text: str) -> Size:
        """Parse a size such as ``1234``, ``12k`` or ``3GB``."""
        body = text
        if not body:
            raise ValueError("empty size")
        if body[-1] in "bB":
            body = body[:-1]
            if not body:
                raise ValueError("empty size")

        unit = _UNIT_BY_SUFFIX.get(body[-1].upper())
        if unit is None:
            unit, number = SizeUnit.BYTES, body
        else:
            number = body[:-1]

        if not _NUMBER.fullmatch(number):
            raise ValueError(f"invalid size: {text!r}")
        return cls(int(number), unit)

    def to_bytes(self) -> int:
        """Return the size in bytes."""
        return self.count * self.unit.multiplier

    def __str__(self) -> str:
        return f"{self.count}{self.unit.suffix}"