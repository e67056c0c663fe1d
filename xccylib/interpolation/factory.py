"""
Factory functions and utilities for creating interpolators.
"""
import math
from typing import Sequence

from xccylib.errors import ConfigurationError

from .base import Interpolator
from .linear import (
    LinearDiscountFactorInterpolator,
    LogLinearZeroInterpolator,
    PiecewiseConstantInterpolator,
)
from .step_forward import StepForwardContinuousInterpolator

# Methods interpolating discount factors directly; the rest work on zero rates
DISCOUNT_FACTOR_METHODS = frozenset(
    {"LINEAR_DF", "STEP_FORWARD", "STEP_FORWARD_CONTINUOUS"}
)

_INTERPOLATORS = {
    "LINEAR_DF": LinearDiscountFactorInterpolator,
    "LOGLINEAR_ZERO": LogLinearZeroInterpolator,
    "PIECEWISE_CONSTANT": PiecewiseConstantInterpolator,
    "STEP_FORWARD": StepForwardContinuousInterpolator,
    "STEP_FORWARD_CONTINUOUS": StepForwardContinuousInterpolator,
}


def create_interpolator(
    method: str, pillars: Sequence[float], values: Sequence[float]
) -> Interpolator:
    """
    Create an interpolator based on method name.

    Args:
        method: Interpolation method name
        pillars: Time points
        values: Values to interpolate

    Returns:
        Configured interpolator
    """
    method_upper = method.upper()
    if method_upper not in _INTERPOLATORS:
        raise ConfigurationError(
            f"Unknown interpolation method: {method}. "
            f"Available: {sorted(_INTERPOLATORS)}"
        )
    return _INTERPOLATORS[method_upper](pillars, values)


def discount_factor_to_zero_rate(df: float, time: float) -> float:
    """Convert discount factor to continuously compounded zero rate."""
    if df <= 0:
        raise ConfigurationError("Discount factor must be positive")
    if time <= 0:
        raise ConfigurationError("Time must be positive")
    return -math.log(df) / time
