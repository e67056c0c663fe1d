"""Root-finding utilities (bracket expansion and bisection)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Tuple

from xccylib.errors import RootFindingError

logger = logging.getLogger(__name__)

Func = Callable[[float], float]


@dataclass
class RootResult:
    root: float
    iterations: int
    converged: bool
    method: str


def bisect(
    func: Func,
    lower: float,
    upper: float,
    *,
    tol_value: float = 1e-12,
    tol_step: float = 1e-15,
    max_iter: int = 200,
    f_lower: float | None = None,
    f_upper: float | None = None,
) -> RootResult:
    """Bisection on a bracket with a sign change.

    ``f_lower`` / ``f_upper`` may be passed when the end points were already
    evaluated while bracketing.
    """
    if f_lower is None:
        f_lower = func(lower)
    if f_upper is None:
        f_upper = func(upper)
    if f_lower == 0.0:
        return RootResult(lower, 0, True, "bisect")
    if f_upper == 0.0:
        return RootResult(upper, 0, True, "bisect")
    if f_lower * f_upper > 0:
        raise RootFindingError(
            f"Bisection requires a sign change: f({lower})={f_lower}, f({upper})={f_upper}"
        )

    for iteration in range(1, max_iter + 1):
        mid = 0.5 * (lower + upper)
        f_mid = func(mid)
        if abs(f_mid) <= tol_value or abs(upper - lower) <= tol_step:
            logger.debug("Bisection converged in %s iterations: x=%s f=%s", iteration, mid, f_mid)
            return RootResult(mid, iteration, True, "bisect")
        if f_lower * f_mid < 0:
            upper, f_upper = mid, f_mid
        else:
            lower, f_lower = mid, f_mid
    raise RootFindingError(
        f"Bisection failed to converge in {max_iter} iterations: [{lower}, {upper}]"
    )


def expand_bracket(
    func: Func,
    lower: float,
    upper: float,
    *,
    shrink: float = 0.5,
    grow: float = 1.2,
    max_iter: int = 20,
) -> Tuple[float, float, float, float]:
    """Widen a positive bracket until ``func`` changes sign.

    The end with the smaller residual is moved: the lower end towards zero,
    the upper end away from it. Returns ``(lower, upper, f_lower, f_upper)``.
    """
    f_lower = func(lower)
    f_upper = func(upper)
    for _ in range(max_iter):
        if f_lower * f_upper <= 0:
            return lower, upper, f_lower, f_upper
        if abs(f_lower) < abs(f_upper):
            lower *= shrink
            f_lower = func(lower)
        else:
            upper *= grow
            f_upper = func(upper)
    if f_lower * f_upper <= 0:
        return lower, upper, f_lower, f_upper
    raise RootFindingError(
        f"Unable to bracket root: f({lower})={f_lower}, f({upper})={f_upper}"
    )
