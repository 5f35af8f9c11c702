"""Parsing of short durations such as ``10s`` or ``5 minutes``."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

_U64_MAX = 2**64 - 1
_DIGITS = re.compile(r"[0-9]+")


class Unit(Enum):
    """The unit a duration was written in."""

    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


_UNIT_BY_INITIAL = {
    "s": Unit.SECONDS,
    "m": Unit.MINUTES,
    "h": Unit.HOURS,
    "d": Unit.DAYS,
}


@dataclass(frozen=True)
class Timestamp:
    """A parsed duration expressed in several units."""

    seconds: int = 0
    minutes: int = 0
    hours: int = 0
    days: int = 0
    unit: Unit = Unit.UNKNOWN


def unit_from_text(text: str) -> Unit:
    """Map a unit word to a :class:`Unit` by its first letter."""
    lowered = text.lower()
    if not lowered:
        return Unit.UNKNOWN
    return _UNIT_BY_INITIAL.get(lowered[0], Unit.UNKNOWN)


def parse_timestamp(timestamp: str) -> Timestamp:
    """Parse text like ``10s`` or ``3 hours`` into a :class:`Timestamp`.

    Raises ``ValueError`` when the text does not hold exactly one number.
    An unrecognised unit gives an all-zero timestamp with ``Unit.UNKNOWN``.
    """
    number_str = "".join(c if c.isnumeric() else " " for c in timestamp).strip()
    if not _DIGITS.fullmatch(number_str):
        raise ValueError(f"invalid number in {timestamp!r}")
    number = int(number_str)
    if number > _U64_MAX:
        raise ValueError(f"number too large in {timestamp!r}")

    unit = unit_from_text(timestamp.replace(str(number), "").strip())

    if unit is Unit.SECONDS:
        return Timestamp(seconds=number, unit=unit)
    if unit is Unit.MINUTES:
        return Timestamp(seconds=number * 60, minutes=number, unit=unit)
    if unit is Unit.HOURS:
        return Timestamp(
            seconds=number * 60 * 60, minutes=number * 60, hours=number, unit=unit
        )
    if unit is Unit.DAYS:
        return Timestamp(
            seconds=number * 60 * 60 * 24,
            minutes=number * 60,
            hours=number * 60,
            days=number,
            unit=unit,
        )
    return Timestamp(unit=unit)