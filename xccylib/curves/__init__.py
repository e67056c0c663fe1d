"""
Curves package: discount curves, the bootstrap curve and curve handles.

Main APIs:
---------
    - InterpolatedDiscountCurve: collateral / forecast curves from pillars
    - create_flat_discount_curve: flat continuously compounded curve
    - PiecewiseDiscountCurve: curve solved node by node by the bootstrapper
    - CurveHandle: re-bindable reference held by indices and rate helpers
"""

from .base import BaseCurve, Curve
from .discount import InterpolatedDiscountCurve, create_flat_discount_curve
from .handles import CurveHandle
from .piecewise import PiecewiseDiscountCurve

__all__ = [
    "BaseCurve",
    "Curve",
    "CurveHandle",
    "InterpolatedDiscountCurve",
    "PiecewiseDiscountCurve",
    "create_flat_discount_curve",
]
