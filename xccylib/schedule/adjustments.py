"""
Date adjustment functions for schedule generation.
"""

from datetime import date, datetime, timedelta
from typing import Union

from dateutil.relativedelta import relativedelta

from xccylib.conventions.calendars import Calendar
from xccylib.conventions.types import BusinessDayAdjustment, Period, TimeUnit
from xccylib.errors import ConfigurationError


def adjust_date(
    dt: Union[date, datetime], adjustment: BusinessDayAdjustment, calendar: Calendar
) -> date:
    """Apply business day adjustment to a date."""
    if isinstance(dt, datetime):
        dt = dt.date()
    if adjustment == BusinessDayAdjustment.NO_ADJUSTMENT:
        return dt
    return calendar.adjust(dt, adjustment)


def shift_by_period(dt: date, period: Period, multiple: int = 1) -> date:
    """Move a date by ``multiple`` tenors on the plain (holiday-free) calendar."""
    if period.unit == TimeUnit.DAYS:
        return dt + timedelta(days=period.length * multiple)
    if period.unit == TimeUnit.WEEKS:
        return dt + timedelta(weeks=period.length * multiple)
    if period.is_month_based:
        return dt + relativedelta(months=period.months() * multiple)
    raise ConfigurationError(f"Unsupported tenor unit: {period.unit}")
