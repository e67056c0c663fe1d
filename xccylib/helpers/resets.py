"""Mark-to-market notional resets driven by FX forward parity.

The FX spot ``S`` is quoted in quote currency per unit of base currency.
Covered interest parity on the two discount curves gives the forward

    F(t) = S * P_base(t) / P_quote(t)

Legs are normalized to a unit notional at inception, so the resettable
leg's notional for the period starting at ``t`` is ``P_other(t) / P_own(t)``
(the forward relative to spot, seen from the resettable leg's currency).
See Moreni & Pallavicini, "Derivative Pricing with Multiple Currencies and
Collateral" (2015).
"""

import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import List, Protocol, Tuple

from xccylib.cashflows.legs import Leg
from xccylib.cashflows.pv import DiscountFunction
from xccylib.errors import ConfigurationError, NumericalError
from xccylib.quotes import Quote, as_quote

from .discounting import LegSide

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResetRecord:
    """Notional fixed at a reset date.

    Attributes:
        reset_date: Accrual start of the coupon the notional applies to
        fx_forward: FX forward (quote per base) implied at the reset date
        notional: Normalized notional of the resettable leg for the period
    """

    reset_date: date
    fx_forward: float
    notional: float


class NotionalReset(Protocol):
    """Strategy recomputing one leg's per-period notionals."""

    @property
    def resettable_side(self) -> LegSide:
        ...

    @property
    def version(self) -> int:
        ...

    def reset_dates(self, leg: Leg) -> Tuple[date, ...]:
        ...

    def reset_leg(
        self,
        leg: Leg,
        base_discount: DiscountFunction,
        quote_discount: DiscountFunction,
    ) -> Tuple[Leg, List[ResetRecord]]:
        ...


class MtMNotionalReset:
    """Resets the notional of one leg at the start of every accrual period."""

    def __init__(self, fx_spot, is_fx_base_currency_leg_resettable: bool):
        if fx_spot is None:
            raise ConfigurationError("Mark-to-market resets require an FX spot quote")
        self.fx_spot: Quote = as_quote(fx_spot)
        if self.fx_spot.is_valid() and not self.fx_spot.value > 0.0:
            raise ConfigurationError(f"FX spot must be positive: {self.fx_spot.value}")
        self.is_fx_base_currency_leg_resettable = bool(is_fx_base_currency_leg_resettable)

    @property
    def resettable_side(self) -> LegSide:
        if self.is_fx_base_currency_leg_resettable:
            return LegSide.BASE
        return LegSide.QUOTE

    @property
    def version(self) -> int:
        return self.fx_spot.version

    def reset_dates(self, leg: Leg) -> Tuple[date, ...]:
        """One reset date per accrual period of the resettable leg."""
        return tuple(coupon.accrual_start for coupon in leg)

    def fx_forward(
        self,
        reset_date: date,
        base_discount: DiscountFunction,
        quote_discount: DiscountFunction,
    ) -> float:
        return self._spot() * base_discount(reset_date) / quote_discount(reset_date)

    def reset_leg(
        self,
        leg: Leg,
        base_discount: DiscountFunction,
        quote_discount: DiscountFunction,
    ) -> Tuple[Leg, List[ResetRecord]]:
        """Return the leg with reset notionals, plus the reset records.

        Reset dates are the coupons' accrual starts. No per-leg state is kept,
        so one instance can serve several helpers.
        """
        if self.resettable_side == LegSide.BASE:
            own, other = base_discount, quote_discount
        else:
            own, other = quote_discount, base_discount

        reset: Leg = []
        records: List[ResetRecord] = []
        for coupon in leg:
            reset_date = coupon.accrual_start
            p_own = own(reset_date)
            p_other = other(reset_date)
            notional = coupon.nominal * (p_other / p_own)
            if not math.isfinite(notional):
                raise NumericalError(f"Non-finite reset notional at {reset_date}")
            fx_forward = self.fx_forward(reset_date, base_discount, quote_discount)
            reset.append(coupon.with_nominal(notional))
            records.append(ResetRecord(reset_date, fx_forward, notional))

        logger.debug(
            "Reset %d %s-leg notionals (first=%.10f, last=%.10f)",
            len(records), self.resettable_side.value,
            records[0].notional if records else float("nan"),
            records[-1].notional if records else float("nan"),
        )
        return reset, records

    def _spot(self) -> float:
        spot = self.fx_spot.value
        if not math.isfinite(spot) or spot <= 0.0:
            raise NumericalError(f"FX spot must be positive and finite: {spot}")
        return spot
