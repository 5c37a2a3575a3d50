"""
Immutable durations expressed at a chosen granularity.
"""

import re
from dataclasses import dataclass
from enum import Enum

from .exceptions import InvalidArgument


class Unit(Enum):
    """Interval units with their length in minutes."""
    MINUTES = 1
    HOURS = 60
    DAYS = 1440
    WEEKS = 10080

    @property
    def minutes(self) -> int:
        return self.value


_UNIT_ALIASES = {
    "m": Unit.MINUTES, "min": Unit.MINUTES, "mins": Unit.MINUTES,
    "minute": Unit.MINUTES, "minutes": Unit.MINUTES,
    "h": Unit.HOURS, "hr": Unit.HOURS, "hrs": Unit.HOURS,
    "hour": Unit.HOURS, "hours": Unit.HOURS,
    "d": Unit.DAYS, "day": Unit.DAYS, "days": Unit.DAYS,
    "w": Unit.WEEKS, "week": Unit.WEEKS, "weeks": Unit.WEEKS,
}

_INTERVAL_PATTERN = re.compile(r"^\s*(\d+)\s*([a-zA-Z]+)\s*$")


@dataclass(frozen=True, eq=False)
class Interval:
    """
    A positive amount of a time unit, e.g. 15 minutes or 1 hour.

    Invariant: amount is a positive integer. Two intervals are equal when
    they cover the same number of minutes, so ``Interval.hours(1)`` equals
    ``Interval.minutes(60)``.
    """
    amount: int
    unit: Unit

    def __post_init__(self):
        # bool is an int subclass, but True minutes is never meant
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise InvalidArgument(
                f"Interval amount must be an integer, got {self.amount!r}"
            )
        if self.amount <= 0:
            raise InvalidArgument(
                f"Interval amount must be positive, got {self.amount}"
            )
        if not isinstance(self.unit, Unit):
            raise InvalidArgument(f"Unknown interval unit: {self.unit!r}")

    @classmethod
    def minutes(cls, amount: int) -> "Interval":
        return cls(amount, Unit.MINUTES)

    @classmethod
    def hours(cls, amount: int) -> "Interval":
        return cls(amount, Unit.HOURS)

    @classmethod
    def days(cls, amount: int) -> "Interval":
        return cls(amount, Unit.DAYS)

    @classmethod
    def weeks(cls, amount: int) -> "Interval":
        return cls(amount, Unit.WEEKS)

    @classmethod
    def parse(cls, text: str) -> "Interval":
        """
        Parse a compact interval string such as ``"15m"``, ``"1h"`` or
        ``"30 minutes"``.

        Raises:
            InvalidArgument: If the text is not a positive amount and unit
        """
        match = _INTERVAL_PATTERN.match(text or "")
        if not match:
            raise InvalidArgument(f"Cannot parse interval: '{text}'")

        unit = _UNIT_ALIASES.get(match.group(2).lower())
        if unit is None:
            raise InvalidArgument(
                f"Unknown interval unit '{match.group(2)}' in '{text}'"
            )

        return cls(int(match.group(1)), unit)

    def to_minutes(self) -> int:
        """Return the interval length in minutes."""
        return self.amount * self.unit.minutes

    def to_hours(self) -> float:
        """Return the interval length in (possibly fractional) hours."""
        return self.to_minutes() / 60

    def __eq__(self, other) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return self.to_minutes() == other.to_minutes()

    def __hash__(self) -> int:
        return hash(self.to_minutes())

    def __str__(self) -> str:
        name = self.unit.name.lower()
        if self.amount == 1:
            name = name[:-1]
        return f"{self.amount} {name}"
