"""
Linear interpolation methods for yield curves.
"""
import math
from typing import Sequence

import numpy as np

from .base import Interpolator


class LinearDiscountFactorInterpolator(Interpolator):
    """Linear interpolation on discount factors, flat outside the pillars."""

    def interpolate(self, t: float) -> float:
        if t <= self.pillars[0]:
            return float(self.values[0])
        if t >= self.pillars[-1]:
            return float(self.values[-1])

        i = self._segment(t)
        t1, t2 = self.pillars[i], self.pillars[i + 1]
        df1, df2 = self.values[i], self.values[i + 1]

        weight = (t - t1) / (t2 - t1)
        return float(df1 + weight * (df2 - df1))


class LogLinearZeroInterpolator(Interpolator):
    """Log-linear interpolation on zero rates.

    Equivalent to linear interpolation on log discount factors inside the
    pillar range; zero rates are held flat outside it.
    """

    def __init__(self, pillars: Sequence[float], zero_rates: Sequence[float]):
        """
        Initialize with zero rates.

        Args:
            pillars: Time to maturity points (in years)
            zero_rates: Continuously compounded zero rates
        """
        super().__init__(pillars, zero_rates)
        self.log_dfs = -self.values * self.pillars

    def interpolate(self, t: float) -> float:
        """Interpolate zero rate at time t."""
        if t <= 0:
            return float(self.values[0])
        return -self._interpolate_log_df(t) / t

    def interpolate_discount_factor(self, t: float) -> float:
        return math.exp(self._interpolate_log_df(t))

    def _interpolate_log_df(self, t: float) -> float:
        if t <= self.pillars[0]:
            return float(-self.values[0] * t)
        if t >= self.pillars[-1]:
            return float(-self.values[-1] * t)

        i = self._segment(t)
        t1, t2 = self.pillars[i], self.pillars[i + 1]
        weight = (t - t1) / (t2 - t1)
        return float(self.log_dfs[i] + weight * (self.log_dfs[i + 1] - self.log_dfs[i]))


class PiecewiseConstantInterpolator(Interpolator):
    """Step function interpolation (left-continuous values)."""

    def interpolate(self, t: float) -> float:
        if t <= self.pillars[0]:
            return float(self.values[0])
        if t >= self.pillars[-1]:
            return float(self.values[-1])

        i = int(np.searchsorted(self.pillars, t, side="right")) - 1
        return float(self.values[i])
