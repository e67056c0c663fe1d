"""Selection of the discount curve for each leg of a cross-currency swap."""

from enum import Enum
from typing import Tuple, Union

from xccylib.curves.base import BaseCurve
from xccylib.curves.handles import CurveHandle
from xccylib.errors import ConfigurationError


class LegSide(Enum):
    BASE = "BASE"
    QUOTE = "QUOTE"

    @property
    def other(self) -> "LegSide":
        return LegSide.QUOTE if self is LegSide.BASE else LegSide.BASE


class DiscountResolver:
    """Maps each leg to its discount curve.

    The leg in the collateral currency is discounted on the collateral
    curve. The other leg is discounted on the curve under construction,
    which is what makes the helper self-referential.
    """

    def __init__(
        self,
        collateral_curve: Union[CurveHandle, BaseCurve],
        is_fx_base_currency_collateral_currency: bool,
    ):
        if collateral_curve is None:
            raise ConfigurationError("Collateral curve is required")
        if isinstance(collateral_curve, CurveHandle):
            if collateral_curve.empty:
                raise ConfigurationError("Collateral curve handle is not linked")
            self.collateral_curve = collateral_curve
        else:
            self.collateral_curve = CurveHandle(collateral_curve, name="collateral")
        self.is_fx_base_currency_collateral_currency = bool(
            is_fx_base_currency_collateral_currency
        )

    @property
    def collateral_side(self) -> LegSide:
        if self.is_fx_base_currency_collateral_currency:
            return LegSide.BASE
        return LegSide.QUOTE

    def resolve(self, side: LegSide, term_structure: CurveHandle) -> CurveHandle:
        if side == self.collateral_side:
            return self.collateral_curve
        return term_structure

    def discount_handles(self, term_structure: CurveHandle) -> Tuple[CurveHandle, CurveHandle]:
        """(base leg handle, quote leg handle)."""
        return (
            self.resolve(LegSide.BASE, term_structure),
            self.resolve(LegSide.QUOTE, term_structure),
        )
