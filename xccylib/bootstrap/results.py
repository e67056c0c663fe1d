"""Result dataclasses for the bootstrapping stack."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List

import pandas as pd

from xccylib.curves.piecewise import PiecewiseDiscountCurve


@dataclass(frozen=True)
class PillarResult:
    """Single pillar solved during the bootstrap."""

    tenor: str
    pillar_date: date
    time: float
    discount_factor: float
    zero_rate: float
    market_quote: float
    implied_quote: float
    iterations: int

    @property
    def quote_error(self) -> float:
        return self.market_quote - self.implied_quote


@dataclass(frozen=True)
class BootstrapOutcome:
    """Aggregate output returned by :class:`PiecewiseCurveBootstrapper`."""

    curve: PiecewiseDiscountCurve
    results: List[PillarResult]
    passes: int

    def __iter__(self):
        yield self.curve
        yield self.results

    def to_frame(self) -> pd.DataFrame:
        """Pillar results as a DataFrame indexed by pillar date."""
        frame = pd.DataFrame(
            [
                {
                    "tenor": r.tenor,
                    "pillar_date": r.pillar_date,
                    "time": r.time,
                    "discount_factor": r.discount_factor,
                    "zero_rate": r.zero_rate,
                    "market_quote": r.market_quote,
                    "implied_quote": r.implied_quote,
                    "quote_error": r.quote_error,
                    "iterations": r.iterations,
                }
                for r in self.results
            ]
        )
        return frame.set_index("pillar_date")
