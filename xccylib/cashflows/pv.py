"""Present value of cross-currency legs.

A leg is valued from the point of view of the party receiving its coupons:
it lends the initial notional (negative flow at the accrual start of the
first coupon), receives the coupons and gets the final notional back. When
consecutive coupons carry different notionals (mark-to-market resets) the
difference is settled at the reset date: the previous notional is returned
at the end of its period and the new one is lent at the start of the next.
"""

import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Callable, List, Optional

from xccylib.errors import ConfigurationError

from .legs import Leg

DiscountFunction = Callable[[date], float]


class CashflowKind(Enum):
    COUPON = "COUPON"
    INITIAL_EXCHANGE = "INITIAL_EXCHANGE"
    FINAL_EXCHANGE = "FINAL_EXCHANGE"
    NOTIONAL_RESET = "NOTIONAL_RESET"


@dataclass
class LegCashflow:
    """Single discounted cashflow of a leg.

    Attributes:
        kind: Coupon, notional exchange or notional reset flow
        payment_date: Payment date
        notional: Notional the flow refers to
        amount: Undiscounted amount in leg currency units
        discount_factor: Discount factor at payment date
        pv: Discounted amount
        accrual_start: Accrual start date (coupons only)
        accrual_end: Accrual end date (coupons only)
        fixing_date: Index fixing date (coupons only)
        accrual_fraction: Day count fraction (coupons only)
        index_fixing: Index fixing or forecast (coupons only)
        spread: Spread over the fixing (coupons only)
    """

    kind: CashflowKind
    payment_date: date
    notional: float
    amount: float
    discount_factor: float
    pv: float
    accrual_start: Optional[date] = None
    accrual_end: Optional[date] = None
    fixing_date: Optional[date] = None
    accrual_fraction: Optional[float] = None
    index_fixing: Optional[float] = None
    spread: Optional[float] = None


@dataclass
class LegPV:
    """Present value and spread sensitivity of one leg.

    Attributes:
        pv: Total present value in leg currency units
        bps: Present value of a unit spread on every coupon
        cashflows: Individual discounted flows
    """

    pv: float
    bps: float
    cashflows: List[LegCashflow] = field(default_factory=list)

    def pv_of(self, kind: CashflowKind) -> float:
        return math.fsum(cf.pv for cf in self.cashflows if cf.kind == kind)

    @property
    def mtm_adjustment(self) -> float:
        """Value of the intermediate notional resets (zero on constant legs)."""
        return self.pv_of(CashflowKind.NOTIONAL_RESET)


def price_leg(
    leg: Leg,
    discount: DiscountFunction,
    valuation_date: Optional[date] = None,
) -> LegPV:
    """Price a leg with full cashflow details.

    Args:
        leg: Coupons in payment order
        discount: Discount factor as a function of payment date
        valuation_date: Flows paid before this date are ignored

    Returns:
        LegPV with the total PV, the BPS and the individual flows
    """
    if not leg:
        raise ConfigurationError("Cannot price an empty leg")

    cashflows: List[LegCashflow] = []
    bps_terms: List[float] = []

    def alive(payment_date: date) -> bool:
        return valuation_date is None or payment_date >= valuation_date

    for coupon in leg:
        if not alive(coupon.payment_date):
            continue
        df = discount(coupon.payment_date)
        fixing = coupon.index_fixing()
        accrual = coupon.accrual_period
        amount = coupon.nominal * (fixing + coupon.spread) * accrual
        cashflows.append(
            LegCashflow(
                kind=CashflowKind.COUPON,
                payment_date=coupon.payment_date,
                notional=coupon.nominal,
                amount=amount,
                discount_factor=df,
                pv=amount * df,
                accrual_start=coupon.accrual_start,
                accrual_end=coupon.accrual_end,
                fixing_date=coupon.fixing_date,
                accrual_fraction=accrual,
                index_fixing=fixing,
                spread=coupon.spread,
            )
        )
        bps_terms.append(coupon.nominal * accrual * df)

    first, last = leg[0], leg[-1]
    if alive(first.accrual_start):
        cashflows.append(_notional_flow(
            CashflowKind.INITIAL_EXCHANGE, first.accrual_start, first.nominal, -1.0, discount
        ))
    if alive(last.accrual_end):
        cashflows.append(_notional_flow(
            CashflowKind.FINAL_EXCHANGE, last.accrual_end, last.nominal, 1.0, discount
        ))

    for previous, current in zip(leg[:-1], leg[1:]):
        if previous.nominal == current.nominal and previous.accrual_end == current.accrual_start:
            continue
        if alive(previous.accrual_end):
            cashflows.append(_notional_flow(
                CashflowKind.NOTIONAL_RESET, previous.accrual_end, previous.nominal, 1.0, discount
            ))
        if alive(current.accrual_start):
            cashflows.append(_notional_flow(
                CashflowKind.NOTIONAL_RESET, current.accrual_start, current.nominal, -1.0, discount
            ))

    return LegPV(
        pv=math.fsum(cf.pv for cf in cashflows),
        bps=math.fsum(bps_terms),
        cashflows=cashflows,
    )


def _notional_flow(
    kind: CashflowKind,
    payment_date: date,
    notional: float,
    sign: float,
    discount: DiscountFunction,
) -> LegCashflow:
    df = discount(payment_date)
    amount = sign * notional
    return LegCashflow(
        kind=kind,
        payment_date=payment_date,
        notional=notional,
        amount=amount,
        discount_factor=df,
        pv=amount * df,
    )
