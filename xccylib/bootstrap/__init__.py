"""Piecewise bootstrap of a discount curve from rate helpers."""

from .config import BootstrapConfig
from .engine import PiecewiseCurveBootstrapper
from .results import BootstrapOutcome, PillarResult

__all__ = [
    "BootstrapConfig",
    "BootstrapOutcome",
    "PiecewiseCurveBootstrapper",
    "PillarResult",
]
