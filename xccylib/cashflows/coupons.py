"""Floating rate coupons of cross-currency legs."""

from dataclasses import dataclass, replace
from datetime import date

from xccylib.indexes.ibor import IborIndex


@dataclass(frozen=True)
class FloatingRateCoupon:
    """Coupon paying ``nominal * (index fixing + spread) * accrual``.

    The fixing is forecast over the accrual period itself (par coupon), from
    the index value date of the fixing to ``accrual_end``.

    Attributes:
        payment_date: Date the coupon amount is paid
        nominal: Notional in leg currency units (1.0 on normalized legs)
        accrual_start: Start of the accrual period
        accrual_end: End of the accrual period
        index: Floating rate index the coupon fixes on
        fixing_days: Business days between fixing date and accrual start
        spread: Additive spread over the index fixing
    """

    payment_date: date
    nominal: float
    accrual_start: date
    accrual_end: date
    index: IborIndex
    fixing_days: int
    spread: float = 0.0

    @property
    def accrual_period(self) -> float:
        return self.index.day_count.year_fraction(self.accrual_start, self.accrual_end)

    @property
    def fixing_date(self) -> date:
        return self.index.calendar.add_business_days(self.accrual_start, -self.fixing_days)

    def index_fixing(self) -> float:
        return self.index.fixing(self.fixing_date, end_date=self.accrual_end)

    def rate(self) -> float:
        return self.index_fixing() + self.spread

    def amount(self) -> float:
        return self.nominal * self.rate() * self.accrual_period

    def with_nominal(self, nominal: float) -> "FloatingRateCoupon":
        """Copy of this coupon with a different notional."""
        return replace(self, nominal=nominal)
