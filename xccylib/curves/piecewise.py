"""Mutable discount curve solved node by node during bootstrap."""

from __future__ import annotations

import math
from datetime import date
from typing import Dict, List, Optional, Tuple

from xccylib.errors import ConfigurationError, NumericalError
from xccylib.interpolation import (
    DISCOUNT_FACTOR_METHODS,
    Interpolator,
    create_interpolator,
)

from .base import BaseCurve, TimeLike


class PiecewiseDiscountCurve(BaseCurve):
    """Discount curve whose nodes are set incrementally.

    The reference date always carries a discount factor of 1.0. Every node
    change bumps :attr:`version` and drops the cached interpolator, so the
    next query rebuilds it from the current nodes.
    """

    def __init__(
        self,
        reference_date: date,
        name: str = "",
        interpolation_method: str = "STEP_FORWARD_CONTINUOUS",
        time_day_count: str = "ACT/365F",
    ):
        super().__init__(reference_date, name, time_day_count)
        if interpolation_method.upper() not in DISCOUNT_FACTOR_METHODS:
            raise ConfigurationError(
                f"Piecewise curves interpolate discount factors; got {interpolation_method}"
            )
        self.interpolation_method = interpolation_method.upper()
        self._nodes: Dict[date, float] = {self.reference_date: 1.0}
        self._version = 0
        self._interpolator: Optional[Interpolator] = None

    # ------------------------------------------------------------------
    # Node management
    # ------------------------------------------------------------------
    @property
    def version(self) -> int:
        return self._version

    def set_node(self, node_date: date, discount_factor: float) -> None:
        if node_date <= self.reference_date:
            raise ConfigurationError(
                f"Node {node_date} must be after reference date {self.reference_date}"
            )
        if not math.isfinite(discount_factor) or discount_factor <= 0.0:
            raise NumericalError(
                f"Invalid discount factor {discount_factor} for node {node_date}"
            )
        self._nodes[node_date] = discount_factor
        self._invalidate_cache()

    def remove_node(self, node_date: date) -> None:
        if node_date == self.reference_date:
            raise ConfigurationError("The reference node cannot be removed")
        self._nodes.pop(node_date)
        self._invalidate_cache()

    def nodes(self) -> List[Tuple[date, float]]:
        return sorted(self._nodes.items())

    def node_value(self, node_date: date) -> float:
        return self._nodes[node_date]

    def has_node(self, node_date: date) -> bool:
        return node_date in self._nodes

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def df(self, t: TimeLike) -> float:
        time_frac = self.time_from_reference(t)
        if time_frac <= 0:
            return 1.0
        return self._ensure_interpolator().interpolate(time_frac)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _ensure_interpolator(self) -> Interpolator:
        if self._interpolator is not None:
            return self._interpolator
        if len(self._nodes) < 2:
            raise ConfigurationError(
                f"Curve {self} has no nodes beyond its reference date"
            )
        dates = sorted(self._nodes)
        times = [self.time_from_reference(d) for d in dates]
        values = [self._nodes[d] for d in dates]
        self._interpolator = create_interpolator(self.interpolation_method, times, values)
        return self._interpolator

    def _invalidate_cache(self) -> None:
        self._interpolator = None
        self._version += 1
