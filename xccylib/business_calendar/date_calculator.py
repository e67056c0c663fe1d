"""
Spot lag handling and tenor arithmetic on business calendars.
"""

from datetime import date, datetime
from typing import Union

from xccylib.conventions.calendars import Calendar, get_calendar
from xccylib.conventions.types import BusinessDayAdjustment, Period
from xccylib.errors import ConfigurationError
from xccylib.schedule import adjust_date, shift_by_period


def get_spot_date(
    trade_date: Union[date, datetime],
    calendar: Union[str, Calendar] = "TARGET",
    spot_lag: int = 2,
    business_day_adjustment: BusinessDayAdjustment = BusinessDayAdjustment.FOLLOWING,
) -> date:
    """Adjust the trade date onto a business day and advance by the spot lag.

    ``spot_lag`` counts business days on ``calendar``.
    """
    if isinstance(trade_date, datetime):
        trade_date = trade_date.date()
    if not isinstance(spot_lag, int) or spot_lag < 0:
        raise ConfigurationError(f"Spot lag must be a non-negative integer: {spot_lag!r}")

    calendar = get_calendar(calendar)
    adjusted = adjust_date(trade_date, business_day_adjustment, calendar)
    if spot_lag == 0:
        return adjusted
    return calendar.add_business_days(adjusted, spot_lag)


def compute_maturity(start_date: date, tenor: Union[str, Period]) -> date:
    """Unadjusted maturity ``start + tenor``; schedules adjust it later."""
    return shift_by_period(start_date, Period.parse(tenor))
