"""
Basic types and enums used across the scheduling system.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

from xccylib.errors import ConfigurationError


class TimeUnit(Enum):
    """Units a tenor can be expressed in."""

    DAYS = "D"
    WEEKS = "W"
    MONTHS = "M"
    YEARS = "Y"


class BusinessDayAdjustment(Enum):
    """Business day adjustment rules."""

    NO_ADJUSTMENT = "NO_ADJUSTMENT"
    FOLLOWING = "FOLLOWING"
    MODIFIED_FOLLOWING = "MODIFIED_FOLLOWING"
    PRECEDING = "PRECEDING"
    MODIFIED_PRECEDING = "MODIFIED_PRECEDING"


class DateGeneration(Enum):
    """Direction in which regular schedule dates are rolled out."""

    BACKWARD = "BACKWARD"  # from termination, stub at the front
    FORWARD = "FORWARD"  # from effective, stub at the back


_PERIOD_PATTERN = re.compile(r"^\s*(-?\d+)\s*([DWMY])\s*$", re.IGNORECASE)

# Calendar-day bounds used when comparing tenors of different unit families
_DAY_BOUNDS = {
    TimeUnit.DAYS: (1, 1),
    TimeUnit.WEEKS: (7, 7),
    TimeUnit.MONTHS: (28, 31),
    TimeUnit.YEARS: (365, 366),
}


@dataclass(frozen=True)
class Period:
    """A tenor such as ``3M`` or ``5Y``."""

    length: int
    unit: TimeUnit

    @classmethod
    def parse(cls, tenor: Union[str, "Period"]) -> "Period":
        """Parse a tenor string (e.g. '3M', '2Y', '1W')."""
        if isinstance(tenor, Period):
            return tenor
        if not isinstance(tenor, str):
            raise ConfigurationError(f"Unsupported tenor: {tenor!r}")
        match = _PERIOD_PATTERN.match(tenor)
        if match is None:
            raise ConfigurationError(f"Unsupported tenor: {tenor}")
        return cls(int(match.group(1)), TimeUnit(match.group(2).upper()))

    def months(self) -> int:
        """Length in months for month-based tenors."""
        if self.unit == TimeUnit.MONTHS:
            return self.length
        if self.unit == TimeUnit.YEARS:
            return self.length * 12
        raise ConfigurationError(f"{self} is not a month-based tenor")

    def days(self) -> int:
        """Length in calendar days for day-based tenors."""
        if self.unit == TimeUnit.DAYS:
            return self.length
        if self.unit == TimeUnit.WEEKS:
            return self.length * 7
        raise ConfigurationError(f"{self} is not a day-based tenor")

    @property
    def is_month_based(self) -> bool:
        return self.unit in (TimeUnit.MONTHS, TimeUnit.YEARS)

    def _day_range(self) -> Tuple[int, int]:
        low, high = _DAY_BOUNDS[self.unit]
        return self.length * low, self.length * high

    def __neg__(self) -> "Period":
        return Period(-self.length, self.unit)

    def __lt__(self, other: "Period") -> bool:
        if not isinstance(other, Period):
            return NotImplemented
        if self.is_month_based and other.is_month_based:
            return self.months() < other.months()
        if not self.is_month_based and not other.is_month_based:
            return self.days() < other.days()

        self_min, self_max = self._day_range()
        other_min, other_max = other._day_range()
        if self_max < other_min:
            return True
        if self_min >= other_max:
            return False
        raise ConfigurationError(f"Undecidable comparison between {self} and {other}")

    def __le__(self, other: "Period") -> bool:
        if not isinstance(other, Period):
            return NotImplemented
        return not other < self

    def __gt__(self, other: "Period") -> bool:
        if not isinstance(other, Period):
            return NotImplemented
        return other < self

    def __ge__(self, other: "Period") -> bool:
        if not isinstance(other, Period):
            return NotImplemented
        return not self < other

    def __str__(self) -> str:
        return f"{self.length}{self.unit.value}"
