"""
QuantLib-backed day count conventions.

Coupon accruals use the index day count; curve time axes use ACT/365F.
"""

from datetime import date, datetime
from typing import Union

import QuantLib as ql

from xccylib.errors import ConfigurationError

DateLike = Union[date, datetime]


def to_date(dt: DateLike) -> date:
    """Convert datetime to date if needed."""
    return dt.date() if isinstance(dt, datetime) else dt


def to_ql_date(dt: DateLike) -> ql.Date:
    """Convert Python date/datetime to QuantLib Date."""
    py_date = to_date(dt)
    return ql.Date(py_date.day, py_date.month, py_date.year)


def from_ql_date(ql_date: ql.Date) -> date:
    """Convert QuantLib Date to Python date."""
    return date(ql_date.year(), ql_date.month(), ql_date.dayOfMonth())


class DayCountConvention:
    """Day count convention delegating to a QuantLib ``DayCounter``."""

    def __init__(self, name: str, ql_daycount: ql.DayCounter):
        self.name = name
        self._ql_daycount = ql_daycount

    def year_fraction(self, start: DateLike, end: DateLike) -> float:
        """Accrual fraction between two dates."""
        return self._ql_daycount.yearFraction(to_ql_date(start), to_ql_date(end))

    def day_count(self, start: DateLike, end: DateLike) -> int:
        return self._ql_daycount.dayCount(to_ql_date(start), to_ql_date(end))

    def __eq__(self, other) -> bool:
        return isinstance(other, DayCountConvention) and self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"DayCountConvention({self.name!r})"


ACT_360 = DayCountConvention("ACT/360", ql.Actual360())
ACT_365F = DayCountConvention("ACT/365F", ql.Actual365Fixed())
THIRTY_360E = DayCountConvention("30E/360", ql.Thirty360(ql.Thirty360.European))
THIRTY_360U = DayCountConvention("30U/360", ql.Thirty360(ql.Thirty360.BondBasis))
ACT_ACT = DayCountConvention("ACT/ACT", ql.ActualActual(ql.ActualActual.ISDA))

DAY_COUNT_CONVENTIONS = {
    "ACT/360": ACT_360,
    "ACTUAL/360": ACT_360,
    "ACT/365F": ACT_365F,
    "ACT/365": ACT_365F,
    "ACTUAL/365F": ACT_365F,
    "30E/360": THIRTY_360E,
    "30/360 EUROPEAN": THIRTY_360E,
    "30U/360": THIRTY_360U,
    "30/360": THIRTY_360U,
    "ACT/ACT": ACT_ACT,
    "ACTUAL/ACTUAL": ACT_ACT,
    "ACT/ACT ISDA": ACT_ACT,
}


def get_day_count_convention(
    name: Union[str, DayCountConvention],
) -> DayCountConvention:
    """Get a day count convention by name (instances pass through)."""
    if isinstance(name, DayCountConvention):
        return name
    name_upper = str(name).upper()
    if name_upper not in DAY_COUNT_CONVENTIONS:
        raise ConfigurationError(
            f"Unknown day count convention: {name}. "
            f"Available: {list(DAY_COUNT_CONVENTIONS.keys())}"
        )
    return DAY_COUNT_CONVENTIONS[name_upper]
