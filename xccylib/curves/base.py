"""
Base curve classes and protocols.
"""

import math
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Protocol, Union

from xccylib.conventions.daycount import (
    DayCountConvention,
    get_day_count_convention,
)
from xccylib.errors import ConfigurationError, NumericalError

TimeLike = Union[datetime, date, float]


class Curve(Protocol):
    """Protocol defining the interface for all curves."""

    reference_date: date

    def df(self, t: TimeLike) -> float:
        """Get discount factor at time t."""
        ...

    def zero(self, t: TimeLike) -> float:
        """Get zero rate at time t."""
        ...


class BaseCurve(ABC):
    """Base implementation for yield curves."""

    def __init__(
        self,
        reference_date: date,
        name: str = "",
        time_day_count: Union[str, DayCountConvention] = "ACT/365F",
    ):
        """
        Initialize base curve.

        Args:
            reference_date: Curve reference/valuation date
            name: Optional curve name for identification
            time_day_count: Day-count convention to convert dates to curve times
        """
        if isinstance(reference_date, datetime):
            reference_date = reference_date.date()
        self.reference_date = reference_date
        self.name = name
        self._time_day_count = get_day_count_convention(time_day_count)

    @property
    def time_day_count(self) -> DayCountConvention:
        return self._time_day_count

    @property
    def version(self) -> int:
        """Change counter; immutable curves stay at 0."""
        return 0

    def time_from_reference(self, dt: TimeLike) -> float:
        """Convert a date to the curve's year fraction basis (floats pass through)."""
        if isinstance(dt, (int, float)):
            return float(dt)
        if isinstance(dt, datetime):
            dt = dt.date()
        return self._time_day_count.year_fraction(self.reference_date, dt)

    @abstractmethod
    def df(self, t: TimeLike) -> float:
        """Get discount factor at time t."""

    def zero(self, t: TimeLike) -> float:
        """Get continuously compounded zero rate at time t."""
        time_frac = self.time_from_reference(t)
        if time_frac <= 0:
            return 0.0

        df_val = self.df(t)
        if df_val <= 0:
            raise NumericalError(f"Non-positive discount factor: {df_val}")
        return -math.log(df_val) / time_frac

    def forward(
        self,
        start: Union[date, datetime],
        end: Union[date, datetime],
        day_count: Union[str, DayCountConvention],
    ) -> float:
        """Simply compounded forward rate between two dates."""
        alpha = get_day_count_convention(day_count).year_fraction(start, end)
        if alpha <= 0:
            raise ConfigurationError("Forward period must be positive")
        return (self.df(start) / self.df(end) - 1.0) / alpha

    def __str__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.name})"
            if self.name
            else self.__class__.__name__
        )
