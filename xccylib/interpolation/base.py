"""
Base classes for curve interpolation methods.
"""
from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np

from xccylib.errors import ConfigurationError


class Interpolator(ABC):
    """Base class for curve interpolation methods."""

    def __init__(self, pillars: Sequence[float], values: Sequence[float]):
        """
        Initialize interpolator.

        Args:
            pillars: Time to maturity points (in years)
            values: Values to interpolate (discount factors, zero rates, etc.)
        """
        if len(pillars) != len(values):
            raise ConfigurationError("Pillars and values must have same length")
        if len(pillars) < 2:
            raise ConfigurationError("Need at least 2 points for interpolation")

        order = np.argsort(np.asarray(pillars, dtype=float), kind="stable")
        self.pillars = np.asarray(pillars, dtype=float)[order]
        self.values = np.asarray(values, dtype=float)[order]

        if np.any(np.diff(self.pillars) <= 0.0):
            raise ConfigurationError("Duplicate pillar times not allowed")

    @abstractmethod
    def interpolate(self, t: float) -> float:
        """Interpolate value at time t."""

    def _segment(self, t: float) -> int:
        """Index of the pillar interval containing ``t``."""
        return int(np.searchsorted(self.pillars, t)) - 1
