"""
Step forward interpolation methods
"""
import math
from typing import Sequence

import numpy as np

from xccylib.errors import ConfigurationError

from .base import Interpolator


class StepForwardContinuousInterpolator(Interpolator):
    """Step Forward (continuous) interpolation on discount factors.

    Continuously compounded forward rates are constant between pillars, so
    log discount factors are linear in time. Before the first pillar the
    first zero rate applies; beyond the last pillar the last forward rate is
    extended.
    """

    def __init__(self, pillars: Sequence[float], discount_factors: Sequence[float]):
        super().__init__(pillars, discount_factors)
        if np.any(self.values <= 0.0):
            raise ConfigurationError("Discount factors must be positive")

        log_dfs = np.log(self.values)
        self.forward_rates = -np.diff(log_dfs) / np.diff(self.pillars)

    def interpolate(self, t: float) -> float:
        return self.interpolate_discount_factor(t)

    def interpolate_discount_factor(self, t: float) -> float:
        """Discount factor at time t under piecewise constant forwards."""
        if t <= 0:
            return 1.0
        if t <= self.pillars[0]:
            first_zero_rate = -math.log(self.values[0]) / self.pillars[0]
            return math.exp(-first_zero_rate * t)
        if t >= self.pillars[-1]:
            dt = t - self.pillars[-1]
            return float(self.values[-1] * math.exp(-self.forward_rates[-1] * dt))

        i = self._segment(t)
        dt = t - self.pillars[i]
        return float(self.values[i] * math.exp(-self.forward_rates[i] * dt))
