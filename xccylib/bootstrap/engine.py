"""Numerical engine for piecewise discount curve bootstrapping."""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Iterable, List, Optional, Tuple

from xccylib.curves.piecewise import PiecewiseDiscountCurve
from xccylib.errors import BootstrapError, ConfigurationError, NumericalError, XccyError
from xccylib.helpers.base import RateHelper, RelativeDateRateHelper
from xccylib.interpolation import discount_factor_to_zero_rate
from xccylib.settings import get_evaluation_date
from xccylib.utils.rootfinding import bisect, expand_bracket

from .config import BootstrapConfig
from .results import BootstrapOutcome, PillarResult

logger = logging.getLogger(__name__)


class PiecewiseCurveBootstrapper:
    """Solves one discount factor node per rate helper.

    Helpers are sorted by pillar date. Each node is solved by bracketing and
    bisection on its discount factor so that the helper's implied quote
    matches its market quote; every trial value is followed by
    ``set_term_structure`` so helpers reprice on the updated curve. Passes
    over all helpers repeat until no node moves by more than
    ``config.accuracy``.
    """

    def __init__(
        self,
        helpers: Iterable[RateHelper],
        reference_date: Optional[date] = None,
        config: Optional[BootstrapConfig] = None,
        name: str = "",
    ):
        self.reference_date = reference_date or get_evaluation_date()
        self.config = config or BootstrapConfig()
        self.name = name
        self.helpers: List[RateHelper] = list(helpers)
        if not self.helpers:
            raise ConfigurationError("Need at least one rate helper to bootstrap")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def build(self) -> BootstrapOutcome:
        helpers = self._prepare_helpers()
        curve = PiecewiseDiscountCurve(
            self.reference_date,
            name=self.name,
            interpolation_method=self.config.interpolation_method,
            time_day_count=self.config.day_count_convention,
        )
        for helper in helpers:
            helper.set_term_structure(curve)

        iterations = [0] * len(helpers)
        passes = 0
        converged = False
        for passes in range(1, self.config.max_passes + 1):
            max_change = 0.0
            for i, helper in enumerate(helpers):
                node = helper.pillar_date
                previous = curve.node_value(node) if curve.has_node(node) else None
                guess = previous if previous is not None else self._initial_guess(curve, node)
                value, iterations[i] = self._solve_node(curve, helper, guess)
                if previous is None:
                    max_change = math.inf
                else:
                    max_change = max(max_change, abs(value - previous))

            logger.info("Bootstrap pass %d: max node change %.3e", passes, max_change)
            if max_change <= self.config.accuracy:
                converged = True
                break

        if not converged:
            raise BootstrapError(
                f"Bootstrap did not converge in {self.config.max_passes} passes"
            )

        results = [self._result_entry(curve, h, n) for h, n in zip(helpers, iterations)]
        return BootstrapOutcome(curve=curve, results=results, passes=passes)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _prepare_helpers(self) -> List[RateHelper]:
        for helper in self.helpers:
            if isinstance(helper, RelativeDateRateHelper):
                helper.update()
        helpers = sorted(self.helpers, key=lambda h: h.pillar_date)

        for previous, current in zip(helpers[:-1], helpers[1:]):
            if previous.pillar_date == current.pillar_date:
                raise ConfigurationError(
                    f"Two helpers share the pillar date {current.pillar_date}"
                )
        if helpers[0].pillar_date <= self.reference_date:
            raise ConfigurationError(
                f"Pillar {helpers[0].pillar_date} is not after reference date "
                f"{self.reference_date}"
            )
        return helpers

    def _initial_guess(self, curve: PiecewiseDiscountCurve, node: date) -> float:
        """Flat-forward extension of the last solved node."""
        last_date, last_df = curve.nodes()[-1]
        if last_date == curve.reference_date:
            return math.exp(-self.config.initial_rate * curve.time_from_reference(node))
        t_last = curve.time_from_reference(last_date)
        t_node = curve.time_from_reference(node)
        zero = -math.log(last_df) / t_last
        return last_df * math.exp(-zero * (t_node - t_last))

    def _solve_node(
        self, curve: PiecewiseDiscountCurve, helper: RateHelper, guess: float
    ) -> Tuple[float, int]:
        node = helper.pillar_date
        previous = curve.node_value(node) if curve.has_node(node) else None

        def residual(df: float) -> float:
            curve.set_node(node, df)
            helper.set_term_structure(curve)
            return helper.quote_error()

        try:
            lower, upper, f_lower, f_upper = self._bracket(residual, guess, node)
            result = bisect(
                residual,
                lower,
                upper,
                tol_value=self.config.quote_tolerance,
                tol_step=self.config.node_tolerance,
                max_iter=self.config.max_iterations,
                f_lower=f_lower,
                f_upper=f_upper,
            )
        except XccyError:
            # Leave the curve as it was before this solve
            if previous is not None:
                curve.set_node(node, previous)
            elif curve.has_node(node):
                curve.remove_node(node)
            helper.set_term_structure(curve)
            raise

        curve.set_node(node, result.root)
        helper.set_term_structure(curve)
        logger.debug(
            "Node %s solved: df=%.15f after %d iterations", node, result.root, result.iterations
        )
        return result.root, result.iterations

    def _bracket(self, residual, guess: float, node: date):
        width = self.config.bracket_width
        lower, upper = guess * (1.0 - width), guess * (1.0 + width)
        retries = self.config.numerical_retries
        for attempt in range(retries + 1):
            try:
                return expand_bracket(
                    residual, lower, upper, max_iter=self.config.bracket_attempts
                )
            except NumericalError as exc:
                if attempt == retries:
                    logger.error("Giving up on node %s after %d retries: %s", node, retries, exc)
                    raise
                logger.warning(
                    "Numerical failure bracketing node %s (%s); narrowing around %.12f",
                    node, exc, guess,
                )
                lower = 0.5 * (lower + guess)
                upper = 0.5 * (upper + guess)
        raise BootstrapError(f"Unable to bracket node {node}")

    def _result_entry(
        self, curve: PiecewiseDiscountCurve, helper: RateHelper, iterations: int
    ) -> PillarResult:
        node = helper.pillar_date
        df = curve.node_value(node)
        time = curve.time_from_reference(node)
        return PillarResult(
            tenor=str(getattr(helper, "tenor", "")),
            pillar_date=node,
            time=time,
            discount_factor=df,
            zero_rate=discount_factor_to_zero_rate(df, time),
            market_quote=helper.quote.value,
            implied_quote=helper.implied_quote(),
            iterations=iterations,
        )
