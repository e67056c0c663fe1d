"""Schedule generation for floating legs."""

from .adjustments import adjust_date, shift_by_period
from .core import Schedule, SchedulePeriod
from .generator import ScheduleGenerator

__all__ = [
    "Schedule",
    "SchedulePeriod",
    "ScheduleGenerator",
    "adjust_date",
    "shift_by_period",
]
