"""Leg construction and leg-level date queries."""

import logging
from datetime import date
from typing import List

from xccylib.errors import ConfigurationError
from xccylib.indexes.ibor import IborIndex
from xccylib.schedule.core import Schedule

from .coupons import FloatingRateCoupon

logger = logging.getLogger(__name__)

Leg = List[FloatingRateCoupon]


def build_cross_currency_leg(
    schedule: Schedule,
    index: IborIndex,
    notional: float = 1.0,
    basis: float = 0.0,
) -> Leg:
    """Build a floating leg with one coupon per schedule period.

    Every coupon carries the same notional and the same ``basis`` spread;
    payment is on the adjusted accrual end.

    Raises:
        ConfigurationError: If the schedule has no accrual period.
    """
    if schedule is None or len(schedule) < 2:
        raise ConfigurationError("Cannot build a leg from a schedule with no periods")

    leg: Leg = [
        FloatingRateCoupon(
            payment_date=period.accrual_end,
            nominal=notional,
            accrual_start=period.accrual_start,
            accrual_end=period.accrual_end,
            index=index,
            fixing_days=index.fixing_days,
            spread=basis,
        )
        for period in schedule.periods()
    ]
    logger.debug(
        "Built %s leg: %d coupons, notional=%s, spread=%s",
        index.name, len(leg), notional, basis,
    )
    return leg


def leg_start_date(leg: Leg) -> date:
    if not leg:
        raise ConfigurationError("Empty leg has no start date")
    return min(c.accrual_start for c in leg)


def leg_maturity_date(leg: Leg) -> date:
    if not leg:
        raise ConfigurationError("Empty leg has no maturity date")
    return max(c.accrual_end for c in leg)


def leg_last_payment_date(leg: Leg) -> date:
    if not leg:
        raise ConfigurationError("Empty leg has no payment dates")
    return max(c.payment_date for c in leg)
