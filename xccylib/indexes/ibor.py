"""Term (IBOR-style) floating rate index with curve-based forecasting."""

import logging
import math
import re
from datetime import date
from typing import Dict, Optional, Union

from xccylib.conventions.calendars import Calendar, get_calendar
from xccylib.conventions.daycount import DayCountConvention, get_day_count_convention
from xccylib.conventions.types import BusinessDayAdjustment, Period
from xccylib.curves.base import BaseCurve
from xccylib.curves.handles import CurveHandle
from xccylib.errors import ConfigurationError, MissingFixingError, NumericalError
from xccylib.settings import get_evaluation_date

logger = logging.getLogger(__name__)

_CURRENCY_CODE = re.compile(r"^[A-Z]{3}$")


class IborIndex:
    """Floating rate index fixing ``fixing_days`` business days before value date.

    Attributes:
        family_name: Index family, e.g. ``"EURIBOR"``
        tenor: Index tenor; also the regular coupon frequency of legs on it
        fixing_days: Business days between fixing and value date
        currency: ISO currency code of the index
        calendar: Fixing calendar
        business_day_adjustment: Convention used to roll the index maturity
        end_of_month: End-of-month rule for the index maturity
        day_count: Accrual day count of the index
        forecast_curve: Handle to the curve forecasting the index
    """

    def __init__(
        self,
        family_name: str,
        tenor: Union[str, Period],
        fixing_days: int,
        currency: str,
        calendar: Union[str, Calendar],
        business_day_adjustment: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING,
        end_of_month: bool = False,
        day_count: Union[str, DayCountConvention] = "ACT/360",
        forecast_curve: Optional[Union[CurveHandle, BaseCurve]] = None,
    ):
        self.family_name = family_name
        self.tenor = Period.parse(tenor)
        if self.tenor.length <= 0:
            raise ConfigurationError(f"Index tenor must be positive: {self.tenor}")
        if not isinstance(fixing_days, int) or fixing_days < 0:
            raise ConfigurationError(
                f"Index fixing days must be a non-negative integer: {fixing_days!r}"
            )
        if not isinstance(currency, str) or not _CURRENCY_CODE.match(currency):
            raise ConfigurationError(f"Invalid currency code: {currency!r}")

        self.fixing_days = fixing_days
        self.currency = currency
        self.calendar = get_calendar(calendar)
        self.business_day_adjustment = business_day_adjustment
        self.end_of_month = end_of_month
        self.day_count = get_day_count_convention(day_count)

        if isinstance(forecast_curve, CurveHandle):
            self.forecast_curve = forecast_curve
        else:
            self.forecast_curve = CurveHandle(forecast_curve, name=f"{self.name} forecast")

        self._fixings: Dict[date, float] = {}
        self._fixings_version = 0

    @property
    def name(self) -> str:
        return f"{self.currency}-{self.family_name}-{self.tenor}"

    @property
    def fixings_version(self) -> int:
        """Bumped whenever stored fixings change."""
        return self._fixings_version

    # ------------------------------------------------------------------
    # Dates
    # ------------------------------------------------------------------
    def fixing_date(self, value_date: date) -> date:
        return self.calendar.add_business_days(value_date, -self.fixing_days)

    def value_date(self, fixing_date: date) -> date:
        return self.calendar.add_business_days(fixing_date, self.fixing_days)

    def maturity_date(self, value_date: date) -> date:
        return self.calendar.advance(
            value_date, self.tenor, self.business_day_adjustment, self.end_of_month
        )

    # ------------------------------------------------------------------
    # Historical fixings
    # ------------------------------------------------------------------
    def add_fixing(self, fixing_date: date, value: float, force_overwrite: bool = False) -> None:
        if not self.calendar.is_business_day(fixing_date):
            raise ConfigurationError(f"{fixing_date} is not a valid fixing date for {self.name}")
        if not math.isfinite(value):
            raise ConfigurationError(f"Fixing for {self.name} on {fixing_date} is not finite")
        existing = self._fixings.get(fixing_date)
        if existing is not None and existing != value and not force_overwrite:
            raise ConfigurationError(
                f"Duplicated fixing for {self.name} on {fixing_date}: {existing} vs {value}"
            )
        self._fixings[fixing_date] = float(value)
        self._fixings_version += 1

    def clear_fixings(self) -> None:
        self._fixings.clear()
        self._fixings_version += 1

    def past_fixing(self, fixing_date: date) -> Optional[float]:
        return self._fixings.get(fixing_date)

    # ------------------------------------------------------------------
    # Rates
    # ------------------------------------------------------------------
    def forecast_rate(self, start: date, end: date) -> float:
        """Simply compounded forward over ``[start, end]`` off the forecast curve."""
        curve = self.forecast_curve.current_link
        tau = self.day_count.year_fraction(start, end)
        if tau <= 0.0:
            raise ConfigurationError(
                f"Empty forecast period {start} -> {end} for {self.name}"
            )
        df_start = curve.df(start)
        df_end = curve.df(end)
        rate = (df_start / df_end - 1.0) / tau
        if not math.isfinite(rate):
            raise NumericalError(
                f"Non-finite forecast for {self.name} over {start} -> {end} "
                f"(df_start={df_start}, df_end={df_end})"
            )
        return rate

    def fixing(self, fixing_date: date, end_date: Optional[date] = None) -> float:
        """Index rate fixed on ``fixing_date``.

        Past fixings must have been stored with :meth:`add_fixing`. A fixing
        on the evaluation date uses the stored value when present and is
        forecast otherwise. ``end_date`` overrides the index maturity
        (par coupons forecast up to their accrual end).
        """
        today = get_evaluation_date()
        stored = self._fixings.get(fixing_date)
        if fixing_date < today:
            if stored is None:
                raise MissingFixingError(f"Missing {self.name} fixing for {fixing_date}")
            return stored
        if fixing_date == today and stored is not None:
            return stored

        value_date = self.value_date(fixing_date)
        if end_date is None:
            end_date = self.maturity_date(value_date)
        return self.forecast_rate(value_date, end_date)

    def __repr__(self) -> str:
        return f"IborIndex({self.name})"
