"""
QuantLib-backed calendars.

Business-day arithmetic (adjustment and advancing by tenors) is delegated to
QuantLib. Joint calendars are requested by joining names with ``+``, for
example ``get_calendar("TARGET+USNY")``.
"""

from datetime import date
from typing import Dict, Union

import QuantLib as ql

from xccylib.conventions.daycount import DateLike, from_ql_date, to_ql_date
from xccylib.conventions.types import BusinessDayAdjustment, Period, TimeUnit
from xccylib.errors import ConfigurationError

_QL_ADJUSTMENTS = {
    BusinessDayAdjustment.NO_ADJUSTMENT: ql.Unadjusted,
    BusinessDayAdjustment.FOLLOWING: ql.Following,
    BusinessDayAdjustment.MODIFIED_FOLLOWING: ql.ModifiedFollowing,
    BusinessDayAdjustment.PRECEDING: ql.Preceding,
    BusinessDayAdjustment.MODIFIED_PRECEDING: ql.ModifiedPreceding,
}

_QL_UNITS = {
    TimeUnit.DAYS: ql.Days,
    TimeUnit.WEEKS: ql.Weeks,
    TimeUnit.MONTHS: ql.Months,
    TimeUnit.YEARS: ql.Years,
}


def to_ql_adjustment(adjustment: BusinessDayAdjustment) -> int:
    try:
        return _QL_ADJUSTMENTS[adjustment]
    except KeyError:
        raise ConfigurationError(
            f"Unknown business day adjustment: {adjustment}"
        ) from None


def to_ql_period(period: Period) -> ql.Period:
    return ql.Period(period.length, _QL_UNITS[period.unit])


class Calendar:
    """Holiday calendar for business-day calculations."""

    def __init__(self, name: str, ql_calendar: ql.Calendar):
        self.name = name
        self._ql_calendar = ql_calendar

    def is_business_day(self, dt: DateLike) -> bool:
        """Check if date is a business day (not weekend or holiday)."""
        return self._ql_calendar.isBusinessDay(to_ql_date(dt))

    def is_end_of_month(self, dt: DateLike) -> bool:
        """True if ``dt`` is the last business day of its month."""
        return self._ql_calendar.isEndOfMonth(to_ql_date(dt))

    def end_of_month(self, dt: DateLike) -> date:
        """Last business day of the month containing ``dt``."""
        return from_ql_date(self._ql_calendar.endOfMonth(to_ql_date(dt)))

    def adjust(
        self,
        dt: DateLike,
        adjustment: BusinessDayAdjustment = BusinessDayAdjustment.FOLLOWING,
    ) -> date:
        """Roll a date onto a business day."""
        ql_result = self._ql_calendar.adjust(
            to_ql_date(dt), to_ql_adjustment(adjustment)
        )
        return from_ql_date(ql_result)

    def add_business_days(self, start_date: DateLike, days: int) -> date:
        """Add (or subtract, for negative ``days``) business days."""
        ql_result = self._ql_calendar.advance(to_ql_date(start_date), days, ql.Days)
        return from_ql_date(ql_result)

    def advance(
        self,
        dt: DateLike,
        period: Union[Period, str],
        adjustment: BusinessDayAdjustment = BusinessDayAdjustment.FOLLOWING,
        end_of_month: bool = False,
    ) -> date:
        """Advance a date by a tenor.

        Day tenors count business days; week, month and year tenors move on
        the calendar and are then adjusted. With ``end_of_month`` set, a start
        on the last business day of a month lands on the last business day of
        the target month.
        """
        period = Period.parse(period)
        ql_result = self._ql_calendar.advance(
            to_ql_date(dt),
            to_ql_period(period),
            to_ql_adjustment(adjustment),
            end_of_month,
        )
        return from_ql_date(ql_result)

    def __eq__(self, other) -> bool:
        return isinstance(other, Calendar) and self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Calendar({self.name!r})"


TARGET = Calendar("TARGET", ql.TARGET())
USNY = Calendar("USNY", ql.UnitedStates(ql.UnitedStates.Settlement))
UK = Calendar("UK", ql.UnitedKingdom(ql.UnitedKingdom.Settlement))
JAPAN = Calendar("JAPAN", ql.Japan())
WEEKEND_ONLY = Calendar("WEEKEND", ql.WeekendsOnly())

CALENDARS: Dict[str, Calendar] = {
    "TARGET": TARGET,
    "EUR": TARGET,
    "USNY": USNY,
    "USD": USNY,
    "UK": UK,
    "GBP": UK,
    "JAPAN": JAPAN,
    "JPY": JAPAN,
    "WEEKEND": WEEKEND_ONLY,
}


def joint_calendar(*calendars: Calendar) -> Calendar:
    """Calendar whose business days are business days in all ``calendars``."""
    if len(calendars) == 1:
        return calendars[0]
    if not 2 <= len(calendars) <= 4:
        raise ConfigurationError("Joint calendars combine between 2 and 4 calendars")
    name = "+".join(c.name for c in calendars)
    ql_joint = ql.JointCalendar(*[c._ql_calendar for c in calendars])
    return Calendar(name, ql_joint)


def get_calendar(name: Union[str, Calendar]) -> Calendar:
    """Get a calendar by name; ``"A+B"`` builds a joint calendar."""
    if isinstance(name, Calendar):
        return name
    key = str(name).upper().strip()
    if "+" in key:
        return joint_calendar(*[get_calendar(part) for part in key.split("+")])
    if key not in CALENDARS:
        raise ConfigurationError(
            f"Unknown calendar: {name}. Available: {list(CALENDARS.keys())}"
        )
    return CALENDARS[key]
