"""Helper kinds, visitor dispatch and cashflow diagnostics."""

from enum import Enum
from typing import Any, Callable, Mapping, Optional, TypeVar

import pandas as pd

T = TypeVar("T")

HelperVisitor = Callable[["HelperKind", Any], T]


class HelperKind(Enum):
    """Variants of cross-currency basis swap rate helpers."""

    CONSTANT_NOTIONAL = "CONSTANT_NOTIONAL"
    MARK_TO_MARKET = "MARK_TO_MARKET"


class KindDispatcher:
    """Visitor built from one function per helper kind.

    Example:
        >>> count_resets = KindDispatcher(
        ...     {HelperKind.MARK_TO_MARKET: lambda h: len(h.reset_dates)},
        ...     default=lambda h: 0,
        ... )
        >>> helper.accept(count_resets)
    """

    def __init__(
        self,
        handlers: Mapping[HelperKind, Callable[[Any], T]],
        default: Optional[Callable[[Any], T]] = None,
    ):
        self._handlers = dict(handlers)
        self._default = default

    def __call__(self, kind: HelperKind, helper: Any) -> T:
        handler = self._handlers.get(kind, self._default)
        if handler is None:
            raise TypeError(f"Visitor has no handler for {kind.value} helpers")
        return handler(helper)


REPORT_COLUMNS = [
    "leg",
    "currency",
    "kind",
    "accrual_start",
    "accrual_end",
    "fixing_date",
    "payment_date",
    "notional",
    "accrual_fraction",
    "index_fixing",
    "spread",
    "amount",
    "discount_factor",
    "pv",
    "fx_forward",
]


class CashflowReport:
    """Visitor rendering both legs of a bound helper as a DataFrame.

    One row per discounted flow; ``fx_forward`` is filled on coupons of a
    resettable leg with the FX forward fixed at the coupon's reset date.
    The implied quote and leg values are stored in ``DataFrame.attrs``.
    """

    def __call__(self, kind: HelperKind, helper: Any) -> pd.DataFrame:
        base_pv, quote_pv = helper.leg_valuations()
        fx_forwards = {}
        resettable_leg = None
        if kind == HelperKind.MARK_TO_MARKET:
            resettable_leg = helper.notional_reset.resettable_side.value
            fx_forwards = {r.reset_date: r.fx_forward for r in helper.reset_records()}

        rows = []
        legs = (
            ("BASE", helper.base_currency_index.currency, base_pv),
            ("QUOTE", helper.quote_currency_index.currency, quote_pv),
        )
        for leg_name, currency, leg_pv in legs:
            for cf in leg_pv.cashflows:
                fx_forward = None
                if leg_name == resettable_leg and cf.accrual_start is not None:
                    fx_forward = fx_forwards.get(cf.accrual_start)
                rows.append(
                    {
                        "leg": leg_name,
                        "currency": currency,
                        "kind": cf.kind.value,
                        "accrual_start": cf.accrual_start,
                        "accrual_end": cf.accrual_end,
                        "fixing_date": cf.fixing_date,
                        "payment_date": cf.payment_date,
                        "notional": cf.notional,
                        "accrual_fraction": cf.accrual_fraction,
                        "index_fixing": cf.index_fixing,
                        "spread": cf.spread,
                        "amount": cf.amount,
                        "discount_factor": cf.discount_factor,
                        "pv": cf.pv,
                        "fx_forward": fx_forward,
                    }
                )

        report = pd.DataFrame.from_records(rows, columns=REPORT_COLUMNS)
        report.attrs["helper_kind"] = kind.value
        report.attrs["implied_quote"] = helper.implied_quote()
        report.attrs["base_leg_pv"] = base_pv.pv
        report.attrs["quote_leg_pv"] = quote_pv.pv
        return report
