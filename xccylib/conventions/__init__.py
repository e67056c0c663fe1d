"""Market conventions: tenors, business-day rules, calendars and day counts."""

from .calendars import Calendar, get_calendar, joint_calendar
from .daycount import (
    ACT_360,
    ACT_365F,
    DayCountConvention,
    get_day_count_convention,
)
from .types import BusinessDayAdjustment, Period, TimeUnit

__all__ = [
    "ACT_360",
    "ACT_365F",
    "BusinessDayAdjustment",
    "Calendar",
    "DayCountConvention",
    "Period",
    "TimeUnit",
    "get_calendar",
    "get_day_count_convention",
    "joint_calendar",
]
