"""
Main schedule generation logic.
"""

import logging
from datetime import date, datetime
from typing import List, Union

from xccylib.conventions.calendars import Calendar, get_calendar
from xccylib.conventions.types import (
    BusinessDayAdjustment,
    DateGeneration,
    Period,
    TimeUnit,
)
from xccylib.errors import ConfigurationError

from .adjustments import adjust_date, shift_by_period
from .core import Schedule

logger = logging.getLogger(__name__)


class ScheduleGenerator:
    """Generates accrual schedules for floating legs."""

    def __init__(
        self,
        calendar: Union[str, Calendar],
        adjustment: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING,
        end_of_month: bool = False,
        rule: DateGeneration = DateGeneration.BACKWARD,
    ):
        self.calendar = get_calendar(calendar)
        self.adjustment = adjustment
        self.end_of_month = end_of_month
        self.rule = rule

    def _adjust_date(self, dt: date) -> date:
        return adjust_date(dt, self.adjustment, self.calendar)

    def generate(
        self,
        effective_date: Union[date, datetime],
        termination_date: Union[date, datetime],
        tenor: Union[str, Period],
    ) -> Schedule:
        """
        Generate a schedule.

        Args:
            effective_date: Start of the first accrual period (unadjusted)
            termination_date: End of the last accrual period (unadjusted)
            tenor: Regular period length, e.g. the floating index tenor

        Returns:
            Schedule of adjusted dates
        """
        if isinstance(effective_date, datetime):
            effective_date = effective_date.date()
        if isinstance(termination_date, datetime):
            termination_date = termination_date.date()
        tenor = Period.parse(tenor)

        if tenor.length <= 0 or tenor.unit == TimeUnit.DAYS:
            raise ConfigurationError(f"Unsupported schedule tenor: {tenor}")
        if effective_date >= termination_date:
            raise ConfigurationError(
                f"Effective date {effective_date} must be before "
                f"termination date {termination_date}"
            )

        if self.rule == DateGeneration.BACKWARD:
            unadjusted, exact = self._roll_backward(effective_date, termination_date, tenor)
        else:
            unadjusted, exact = self._roll_forward(effective_date, termination_date, tenor)

        adjusted: List[date] = []
        for dt in unadjusted:
            adj = self._adjust_date(dt)
            # Adjustment can collapse a short stub onto its neighbour
            if adjusted and adj <= adjusted[-1]:
                continue
            adjusted.append(adj)

        if len(adjusted) < 2:
            raise ConfigurationError(
                f"Schedule from {effective_date} to {termination_date} has no periods"
            )

        n_periods = len(adjusted) - 1
        is_regular = [True] * n_periods
        if not exact:
            stub_index = 0 if self.rule == DateGeneration.BACKWARD else n_periods - 1
            is_regular[stub_index] = False

        logger.debug(
            "Generated %s schedule %s -> %s (%s, %d periods)",
            self.rule.value, adjusted[0], adjusted[-1], tenor, n_periods,
        )
        return Schedule(
            dates=tuple(adjusted),
            tenor=tenor,
            calendar=self.calendar,
            adjustment=self.adjustment,
            end_of_month=self.end_of_month,
            is_regular=tuple(is_regular),
        )

    def _roll_backward(self, effective: date, termination: date, tenor: Period):
        """Roll from termination towards effective; any stub lands at the front."""
        eom = self._end_of_month_active(termination, tenor)
        dates = [termination]
        periods = 1
        while True:
            candidate = self._roll(termination, tenor, -periods, eom)
            if candidate <= effective:
                exact = candidate == effective
                break
            dates.insert(0, candidate)
            periods += 1
        dates.insert(0, effective)
        return dates, exact

    def _roll_forward(self, effective: date, termination: date, tenor: Period):
        """Roll from effective towards termination; any stub lands at the back."""
        eom = self._end_of_month_active(effective, tenor)
        dates = [effective]
        periods = 1
        while True:
            candidate = self._roll(effective, tenor, periods, eom)
            if candidate >= termination:
                exact = candidate == termination
                break
            dates.append(candidate)
            periods += 1
        dates.append(termination)
        return dates, exact

    def _end_of_month_active(self, seed: date, tenor: Period) -> bool:
        return (
            self.end_of_month
            and tenor.is_month_based
            and self.calendar.is_end_of_month(seed)
        )

    def _roll(self, seed: date, tenor: Period, multiple: int, eom: bool) -> date:
        rolled = shift_by_period(seed, tenor, multiple)
        if eom:
            return self.calendar.end_of_month(rolled)
        return rolled
