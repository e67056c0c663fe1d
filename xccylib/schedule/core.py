"""
Core data structures for schedule generation.
"""

from dataclasses import dataclass
from datetime import date
from typing import List, Tuple

from xccylib.conventions.calendars import Calendar
from xccylib.conventions.types import BusinessDayAdjustment, Period


@dataclass(frozen=True)
class SchedulePeriod:
    """A single accrual period of a schedule."""

    accrual_start: date
    accrual_end: date
    is_stub: bool = False


@dataclass(frozen=True)
class Schedule:
    """Adjusted accrual boundary dates of one leg, in increasing order.

    Attributes:
        dates: Adjusted boundary dates; n dates define n - 1 periods
        tenor: Regular period length the schedule was generated with
        calendar: Calendar used for the business-day adjustment
        adjustment: Business day convention applied to every date
        end_of_month: Whether the end-of-month rule was applied
        is_regular: Per-period flag, False for a front stub
    """

    dates: Tuple[date, ...]
    tenor: Period
    calendar: Calendar
    adjustment: BusinessDayAdjustment
    end_of_month: bool
    is_regular: Tuple[bool, ...] = ()

    @property
    def start_date(self) -> date:
        return self.dates[0]

    @property
    def end_date(self) -> date:
        return self.dates[-1]

    def __len__(self) -> int:
        return len(self.dates)

    def __iter__(self):
        return iter(self.dates)

    def __getitem__(self, index):
        return self.dates[index]

    def periods(self) -> List[SchedulePeriod]:
        """Accrual periods between consecutive dates."""
        periods = []
        for i in range(len(self.dates) - 1):
            regular = self.is_regular[i] if i < len(self.is_regular) else True
            periods.append(
                SchedulePeriod(
                    accrual_start=self.dates[i],
                    accrual_end=self.dates[i + 1],
                    is_stub=not regular,
                )
            )
        return periods
