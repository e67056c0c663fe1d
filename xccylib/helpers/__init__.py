"""Rate helpers for bootstrapping cross-currency discount curves."""

from .base import RateHelper, RelativeDateRateHelper
from .crosscurrency import CrossCurrencyBasisSwapRateHelper
from .discounting import DiscountResolver, LegSide
from .resets import MtMNotionalReset, NotionalReset, ResetRecord
from .visitors import CashflowReport, HelperKind, KindDispatcher

__all__ = [
    "CashflowReport",
    "CrossCurrencyBasisSwapRateHelper",
    "DiscountResolver",
    "HelperKind",
    "KindDispatcher",
    "LegSide",
    "MtMNotionalReset",
    "NotionalReset",
    "RateHelper",
    "RelativeDateRateHelper",
    "ResetRecord",
]
