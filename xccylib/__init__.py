"""Cross-Currency Basis Curve Library.

This package provides rate helpers for bootstrapping a discount curve from
cross-currency basis swap quotes, for both constant-notional and
mark-to-market swaps, against a collateral curve in the other currency.

Key modules:
- helpers: Cross-currency basis swap rate helpers and notional resets
- bootstrap: Piecewise discount curve bootstrapping from rate helpers
- cashflows: Floating coupons, leg construction and leg valuation
- indexes: Floating rate indices and their fixings
- curves: Discount curves and re-bindable curve handles
- schedule: Accrual schedule generation
- conventions: Calendars, day counts and tenors
"""

from .bootstrap import BootstrapConfig, BootstrapOutcome, PiecewiseCurveBootstrapper
from .curves import CurveHandle, InterpolatedDiscountCurve, PiecewiseDiscountCurve
from .errors import (
    BootstrapError,
    ConfigurationError,
    MissingFixingError,
    NumericalError,
    UnboundTermStructureError,
    XccyError,
)
from .helpers import (
    CashflowReport,
    CrossCurrencyBasisSwapRateHelper,
    HelperKind,
    KindDispatcher,
    MtMNotionalReset,
)
from .indexes import IborIndex
from .quotes import SimpleQuote
from .settings import evaluation_date, get_evaluation_date, set_evaluation_date

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "BootstrapConfig",
    "BootstrapError",
    "BootstrapOutcome",
    "CashflowReport",
    "ConfigurationError",
    "CrossCurrencyBasisSwapRateHelper",
    "CurveHandle",
    "HelperKind",
    "IborIndex",
    "InterpolatedDiscountCurve",
    "KindDispatcher",
    "MissingFixingError",
    "MtMNotionalReset",
    "NumericalError",
    "PiecewiseCurveBootstrapper",
    "PiecewiseDiscountCurve",
    "SimpleQuote",
    "UnboundTermStructureError",
    "XccyError",
    "evaluation_date",
    "get_evaluation_date",
    "set_evaluation_date",
]
