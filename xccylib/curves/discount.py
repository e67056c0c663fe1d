"""
Interpolated discount curve with a fixed set of pillars.
"""
import logging
import math
from datetime import date
from typing import Optional, Sequence

from xccylib.errors import ConfigurationError
from xccylib.interpolation import (
    DISCOUNT_FACTOR_METHODS,
    Interpolator,
    create_interpolator,
)

from .base import BaseCurve, TimeLike

logger = logging.getLogger(__name__)


class InterpolatedDiscountCurve(BaseCurve):
    """
    Discount curve defined by discount factors at pillar times.

    Used for collateral curves and index forecast curves supplied by the
    caller; the curve under construction is a :class:`PiecewiseDiscountCurve`.
    """

    def __init__(self,
                 reference_date: date,
                 pillar_times: Sequence[float],
                 discount_factors: Sequence[float],
                 interpolator: Optional[Interpolator] = None,
                 interpolation_method: str = "LOGLINEAR_ZERO",
                 name: str = ""):
        """
        Initialize discount curve.

        Args:
            reference_date: Curve valuation date
            pillar_times: Pillar times in years (ACT/365F) from reference date
            discount_factors: Discount factors at pillar times
            interpolator: Custom interpolator (if None, created from method)
            interpolation_method: Method name if interpolator is None
            name: Curve name
        """
        super().__init__(reference_date, name, time_day_count="ACT/365F")

        if len(pillar_times) != len(discount_factors):
            raise ConfigurationError("Pillar times and discount factors must have same length")
        if len(pillar_times) < 2:
            raise ConfigurationError("Need at least 2 pillar points")

        for i, df in enumerate(discount_factors):
            if not df > 0 or math.isinf(df):
                raise ConfigurationError(f"Discount factor at pillar {i} must be positive: {df}")

        sorted_pairs = sorted(zip(pillar_times, discount_factors))
        for i in range(1, len(sorted_pairs)):
            increase = sorted_pairs[i][1] - sorted_pairs[i - 1][1]
            if increase > 1e-6:
                logger.warning(
                    "Discount factors increasing at pillar %s of %s (increase = %.8f)",
                    i,
                    self,
                    increase,
                )

        self.pillar_times = [float(t) for t in pillar_times]
        self.discount_factors = [float(df) for df in discount_factors]
        self.interpolation_method = interpolation_method.upper()

        if interpolator is not None:
            self.interpolator = interpolator
        elif self.interpolation_method in DISCOUNT_FACTOR_METHODS:
            self.interpolator = create_interpolator(
                self.interpolation_method, self.pillar_times, self.discount_factors
            )
        else:
            zero_rates = [
                -math.log(df) / t if t > 0 else 0.0
                for t, df in zip(self.pillar_times, self.discount_factors)
            ]
            self.interpolator = create_interpolator(
                self.interpolation_method, self.pillar_times, zero_rates
            )

    def df(self, t: TimeLike) -> float:
        """Get discount factor at time t."""
        time_frac = self.time_from_reference(t)
        if time_frac <= 0:
            return 1.0

        if self.interpolation_method in DISCOUNT_FACTOR_METHODS:
            return self.interpolator.interpolate(time_frac)
        if hasattr(self.interpolator, "interpolate_discount_factor"):
            return self.interpolator.interpolate_discount_factor(time_frac)
        zero_rate = self.interpolator.interpolate(time_frac)
        return math.exp(-zero_rate * time_frac)

    def shift_parallel(self, shift_bp: float) -> "InterpolatedDiscountCurve":
        """
        Create a parallel shifted version of the curve.

        Args:
            shift_bp: Parallel shift of continuously compounded zero rates in bp

        Returns:
            New shifted curve
        """
        shift_decimal = shift_bp / 10000.0
        shifted = [
            df * math.exp(-shift_decimal * t)
            for t, df in zip(self.pillar_times, self.discount_factors)
        ]
        return InterpolatedDiscountCurve(
            reference_date=self.reference_date,
            pillar_times=list(self.pillar_times),
            discount_factors=shifted,
            interpolation_method=self.interpolation_method,
            name=f"{self.name}_shifted_{shift_bp}bp",
        )

    def __repr__(self) -> str:
        return (f"InterpolatedDiscountCurve(reference_date={self.reference_date}, "
                f"pillars={len(self.pillar_times)}, "
                f"interpolation_method='{self.interpolation_method}', "
                f"name='{self.name}')")


def create_flat_discount_curve(reference_date: date,
                               flat_rate: float,
                               max_time: float = 50.0,
                               num_pillars: int = 11,
                               name: str = "FLAT") -> InterpolatedDiscountCurve:
    """
    Create a flat, continuously compounded discount curve.

    Step-forward interpolation keeps the zero rate exactly flat between and
    beyond the pillars.

    Args:
        reference_date: Curve reference date
        flat_rate: Flat zero rate (decimal)
        max_time: Last pillar time in years
        num_pillars: Number of pillar points
        name: Curve name
    """
    if num_pillars < 2:
        raise ConfigurationError("Need at least 2 pillar points")
    times = [(i + 1) * max_time / num_pillars for i in range(num_pillars)]
    discount_factors = [math.exp(-flat_rate * t) for t in times]

    return InterpolatedDiscountCurve(
        reference_date=reference_date,
        pillar_times=times,
        discount_factors=discount_factors,
        interpolation_method="STEP_FORWARD_CONTINUOUS",
        name=name,
    )
