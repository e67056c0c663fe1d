"""Coupons, leg construction and leg valuation."""

from .coupons import FloatingRateCoupon
from .legs import (
    Leg,
    build_cross_currency_leg,
    leg_last_payment_date,
    leg_maturity_date,
    leg_start_date,
)
from .pv import CashflowKind, LegCashflow, LegPV, price_leg

__all__ = [
    "CashflowKind",
    "FloatingRateCoupon",
    "Leg",
    "LegCashflow",
    "LegPV",
    "build_cross_currency_leg",
    "leg_last_payment_date",
    "leg_maturity_date",
    "leg_start_date",
    "price_leg",
]
