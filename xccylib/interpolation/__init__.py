"""
Interpolation methods for discount curves.
"""

from .base import Interpolator
from .factory import (
    DISCOUNT_FACTOR_METHODS,
    create_interpolator,
    discount_factor_to_zero_rate,
)
from .linear import (
    LinearDiscountFactorInterpolator,
    LogLinearZeroInterpolator,
    PiecewiseConstantInterpolator,
)
from .step_forward import StepForwardContinuousInterpolator

__all__ = [
    'DISCOUNT_FACTOR_METHODS',
    'Interpolator',
    'LinearDiscountFactorInterpolator',
    'LogLinearZeroInterpolator',
    'PiecewiseConstantInterpolator',
    'StepForwardContinuousInterpolator',
    'create_interpolator',
    'discount_factor_to_zero_rate',
]
