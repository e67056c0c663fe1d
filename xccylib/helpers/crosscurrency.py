"""Cross-currency basis swap rate helpers.

A cross-currency basis swap exchanges floating coupons on two indices in two
currencies, with notionals exchanged at start and maturity. The market
quotes a basis spread added to the coupons of one leg. The helper prices
both legs on normalized unit notionals, discounting the collateral-currency
leg on the collateral curve and the other leg on the curve being
bootstrapped, and solves for the spread that equates the two leg values.

Leg values are linear in the spread, so the solve is closed form:

    spread = s - (PV_quote - PV_base) / bps

where ``s`` is the spread currently carried by the spread leg and ``bps``
is the quote leg's spread annuity, or minus the base leg's one when the
spread sits on the base leg.

With a notional reset strategy (mark-to-market swaps) one leg's notional is
reset at the start of every period to the FX forward implied by the two
discount curves; see :mod:`xccylib.helpers.resets`.
"""

import logging
import math
from datetime import date
from functools import partial
from typing import Dict, List, Optional, Tuple, Union

from xccylib.business_calendar import compute_maturity, get_spot_date
from xccylib.cashflows.legs import (
    Leg,
    build_cross_currency_leg,
    leg_last_payment_date,
    leg_maturity_date,
    leg_start_date,
)
from xccylib.cashflows.pv import LegPV, price_leg
from xccylib.conventions.calendars import Calendar, get_calendar
from xccylib.conventions.types import BusinessDayAdjustment, Period
from xccylib.curves.base import BaseCurve
from xccylib.curves.handles import CurveHandle
from xccylib.errors import ConfigurationError, NumericalError
from xccylib.indexes.ibor import IborIndex
from xccylib.schedule import Schedule, ScheduleGenerator

from .base import RelativeDateRateHelper
from .discounting import DiscountResolver, LegSide
from .resets import MtMNotionalReset, NotionalReset, ResetRecord
from .visitors import HelperKind

logger = logging.getLogger(__name__)


class CrossCurrencyBasisSwapRateHelper(RelativeDateRateHelper):
    """Rate helper for a cross-currency basis swap quote.

    Args:
        basis: Basis spread quote (decimal, e.g. -0.0015)
        tenor: Swap tenor, e.g. ``"5Y"``
        fixing_days: Settlement lag in business days
        calendar: Calendar (or calendar name) for schedules and settlement
        convention: Business day convention of the schedules
        end_of_month: End-of-month rule of the schedules
        base_currency_index: Index of the FX base currency leg
        quote_currency_index: Index of the FX quote currency leg
        collateral_curve: Discount curve of the collateral currency
        is_fx_base_currency_collateral_currency: Collateral is posted in the
            base currency (otherwise in the quote currency)
        is_basis_on_fx_base_currency_leg: The basis spread is paid on the
            base currency leg (otherwise on the quote currency leg)
        notional_reset: Optional notional reset strategy; ``None`` gives a
            constant-notional swap
    """

    def __init__(
        self,
        basis,
        tenor: Union[str, Period],
        fixing_days: int,
        calendar: Union[str, Calendar],
        convention: BusinessDayAdjustment,
        end_of_month: bool,
        base_currency_index: IborIndex,
        quote_currency_index: IborIndex,
        collateral_curve: Union[CurveHandle, BaseCurve],
        is_fx_base_currency_collateral_currency: bool,
        is_basis_on_fx_base_currency_leg: bool,
        notional_reset: Optional[NotionalReset] = None,
    ):
        super().__init__(basis)

        self.tenor = Period.parse(tenor)
        if self.tenor.length <= 0:
            raise ConfigurationError(f"Swap tenor must be positive: {self.tenor}")
        if isinstance(fixing_days, bool) or not isinstance(fixing_days, int) or fixing_days < 0:
            raise ConfigurationError(
                f"Fixing days must be a non-negative integer: {fixing_days!r}"
            )
        if base_currency_index is None or quote_currency_index is None:
            raise ConfigurationError("Both base and quote currency indices are required")
        for index in (base_currency_index, quote_currency_index):
            if self.tenor < index.tenor:
                raise ConfigurationError(
                    f"Swap tenor {self.tenor} is shorter than the {index.name} "
                    f"coupon frequency {index.tenor}"
                )
        if base_currency_index.currency == quote_currency_index.currency:
            logger.warning(
                "Both legs of the %s basis swap are in %s",
                self.tenor, base_currency_index.currency,
            )

        self.fixing_days = fixing_days
        self.calendar = get_calendar(calendar)
        self.convention = _to_adjustment(convention)
        self.end_of_month = bool(end_of_month)
        self.base_currency_index = base_currency_index
        self.quote_currency_index = quote_currency_index
        self.is_basis_on_fx_base_currency_leg = bool(is_basis_on_fx_base_currency_leg)
        self.notional_reset = notional_reset

        self._resolver = DiscountResolver(
            collateral_curve, is_fx_base_currency_collateral_currency
        )
        self._base_discount, self._quote_discount = self._resolver.discount_handles(
            self._term_structure
        )

        self.base_schedule: Optional[Schedule] = None
        self.quote_schedule: Optional[Schedule] = None
        self._base_leg: Leg = []
        self._quote_leg: Leg = []
        self._legs_basis_version: Optional[int] = None
        self._reset_dates: Tuple[date, ...] = ()

        self._df_cache: Dict[Tuple[LegSide, date], float] = {}
        self._cache_state: Optional[tuple] = None
        self._implied_quote: Optional[float] = None
        self._base_pv: Optional[LegPV] = None
        self._quote_pv: Optional[LegPV] = None
        self._reset_records: List[ResetRecord] = []

        self.initialize_dates()

    @classmethod
    def mark_to_market(
        cls,
        basis,
        tenor: Union[str, Period],
        fixing_days: int,
        calendar: Union[str, Calendar],
        convention: BusinessDayAdjustment,
        end_of_month: bool,
        base_currency_index: IborIndex,
        quote_currency_index: IborIndex,
        collateral_curve: Union[CurveHandle, BaseCurve],
        is_fx_base_currency_collateral_currency: bool,
        is_basis_on_fx_base_currency_leg: bool,
        fx_spot,
        is_fx_base_currency_leg_resettable: bool,
    ) -> "CrossCurrencyBasisSwapRateHelper":
        """Helper for a mark-to-market swap resetting one leg's notional."""
        return cls(
            basis,
            tenor,
            fixing_days,
            calendar,
            convention,
            end_of_month,
            base_currency_index,
            quote_currency_index,
            collateral_curve,
            is_fx_base_currency_collateral_currency,
            is_basis_on_fx_base_currency_leg,
            notional_reset=MtMNotionalReset(fx_spot, is_fx_base_currency_leg_resettable),
        )

    build_cross_currency_leg = staticmethod(build_cross_currency_leg)

    # ------------------------------------------------------------------
    # Inspectors
    # ------------------------------------------------------------------
    @property
    def kind(self) -> HelperKind:
        if self.notional_reset is None:
            return HelperKind.CONSTANT_NOTIONAL
        return HelperKind.MARK_TO_MARKET

    @property
    def is_fx_base_currency_collateral_currency(self) -> bool:
        return self._resolver.is_fx_base_currency_collateral_currency

    @property
    def collateral_curve(self) -> CurveHandle:
        return self._resolver.collateral_curve

    @property
    def base_currency_leg(self) -> Leg:
        return self._base_leg

    @property
    def quote_currency_leg(self) -> Leg:
        return self._quote_leg

    @property
    def base_currency_leg_discount_handle(self) -> CurveHandle:
        return self._base_discount

    @property
    def quote_currency_leg_discount_handle(self) -> CurveHandle:
        return self._quote_discount

    @property
    def reset_dates(self) -> Tuple[date, ...]:
        return self._reset_dates

    # ------------------------------------------------------------------
    # Dates and legs
    # ------------------------------------------------------------------
    def initialize_dates(self) -> None:
        """Build both schedules and legs on the window starting at spot."""
        start = get_spot_date(self._evaluation_date, self.calendar, self.fixing_days)
        maturity = compute_maturity(start, self.tenor)

        generator = ScheduleGenerator(self.calendar, self.convention, self.end_of_month)
        self.base_schedule = generator.generate(start, maturity, self.base_currency_index.tenor)
        self.quote_schedule = generator.generate(start, maturity, self.quote_currency_index.tenor)
        self._build_legs()

        self.earliest_date = min(leg_start_date(self._base_leg), leg_start_date(self._quote_leg))
        self.maturity_date = max(
            leg_maturity_date(self._base_leg), leg_maturity_date(self._quote_leg)
        )
        self.latest_date = max(
            leg_last_payment_date(self._base_leg), leg_last_payment_date(self._quote_leg)
        )
        self.pillar_date = self.latest_date
        self.mark_stale()

        logger.debug(
            "%s %s helper dates: start=%s maturity=%s pillar=%s",
            self.tenor, self.kind.value, start, self.maturity_date, self.pillar_date,
        )

    def _build_legs(self) -> None:
        spread = self._quote.value if self._quote.is_valid() else 0.0
        base_spread = spread if self.is_basis_on_fx_base_currency_leg else 0.0
        quote_spread = 0.0 if self.is_basis_on_fx_base_currency_leg else spread

        self._base_leg = build_cross_currency_leg(
            self.base_schedule, self.base_currency_index, 1.0, base_spread
        )
        self._quote_leg = build_cross_currency_leg(
            self.quote_schedule, self.quote_currency_index, 1.0, quote_spread
        )
        self._legs_basis_version = self._quote.version

        if self.notional_reset is not None:
            if self.notional_reset.resettable_side == LegSide.BASE:
                self._reset_dates = self.notional_reset.reset_dates(self._base_leg)
            else:
                self._reset_dates = self.notional_reset.reset_dates(self._quote_leg)

    # ------------------------------------------------------------------
    # Curve binding and staleness
    # ------------------------------------------------------------------
    def set_term_structure(self, curve: BaseCurve) -> None:
        super().set_term_structure(curve)
        self._base_discount, self._quote_discount = self._resolver.discount_handles(
            self._term_structure
        )

    def mark_stale(self) -> None:
        self._df_cache.clear()
        self._cache_state = None
        self._implied_quote = None
        self._base_pv = None
        self._quote_pv = None
        self._reset_records = []

    def _observed_state(self) -> tuple:
        reset_version = None if self.notional_reset is None else self.notional_reset.version
        return (
            self._quote.version,
            reset_version,
            self._base_discount.version,
            self._quote_discount.version,
            self.base_currency_index.forecast_curve.version,
            self.quote_currency_index.forecast_curve.version,
            self.base_currency_index.fixings_version,
            self.quote_currency_index.fixings_version,
        )

    # ------------------------------------------------------------------
    # Valuation
    # ------------------------------------------------------------------
    def implied_quote(self) -> float:
        """Basis spread equating the two leg values on the current curves.

        Raises:
            UnboundTermStructureError: If no curve was bound with
                :meth:`set_term_structure`.
            NumericalError: If discount factors or the spread annuity are
                not usable numbers.
        """
        self._require_term_structure()
        self._ensure_valued()
        return self._implied_quote

    def leg_valuations(self) -> Tuple[LegPV, LegPV]:
        """(base leg, quote leg) valuations behind the last implied quote."""
        self._require_term_structure()
        self._ensure_valued()
        return self._base_pv, self._quote_pv

    def reset_records(self) -> List[ResetRecord]:
        """Notional resets behind the last implied quote (empty if constant)."""
        self._require_term_structure()
        self._ensure_valued()
        return list(self._reset_records)

    def _ensure_valued(self) -> None:
        state = self._observed_state()
        if self._implied_quote is not None and state == self._cache_state:
            return

        self.mark_stale()
        if self._legs_basis_version != self._quote.version:
            self._build_legs()

        base_discount = partial(self._discount, LegSide.BASE)
        quote_discount = partial(self._discount, LegSide.QUOTE)

        base_leg, quote_leg = self._base_leg, self._quote_leg
        if self.notional_reset is not None:
            if self.notional_reset.resettable_side == LegSide.BASE:
                base_leg, self._reset_records = self.notional_reset.reset_leg(
                    base_leg, base_discount, quote_discount
                )
            else:
                quote_leg, self._reset_records = self.notional_reset.reset_leg(
                    quote_leg, base_discount, quote_discount
                )

        base_pv = price_leg(base_leg, base_discount, self._evaluation_date)
        quote_pv = price_leg(quote_leg, quote_discount, self._evaluation_date)

        if self.is_basis_on_fx_base_currency_leg:
            bps = -base_pv.bps
            leg_spread = self._base_leg[0].spread
        else:
            bps = quote_pv.bps
            leg_spread = self._quote_leg[0].spread
        if not math.isfinite(bps) or bps == 0.0:
            raise NumericalError(f"Unusable spread annuity {bps} for {self.tenor} helper")

        implied = leg_spread - (quote_pv.pv - base_pv.pv) / bps
        if not math.isfinite(implied):
            raise NumericalError(f"Non-finite implied quote for {self.tenor} helper")

        self._base_pv = base_pv
        self._quote_pv = quote_pv
        self._implied_quote = implied
        self._cache_state = state
        logger.debug(
            "%s %s implied quote %.10f (base pv=%.10f, quote pv=%.10f, bps=%.10f)",
            self.tenor, self.kind.value, implied, base_pv.pv, quote_pv.pv, bps,
        )

    def _discount(self, side: LegSide, target_date: date) -> float:
        key = (side, target_date)
        cached = self._df_cache.get(key)
        if cached is not None:
            return cached

        handle = self._base_discount if side == LegSide.BASE else self._quote_discount
        df = handle.current_link.df(target_date)
        if not math.isfinite(df) or df <= 0.0:
            raise NumericalError(
                f"Invalid {side.value}-leg discount factor {df} at {target_date}"
            )
        self._df_cache[key] = df
        return df

    def __repr__(self) -> str:
        return (
            f"CrossCurrencyBasisSwapRateHelper({self.tenor}, "
            f"{self.base_currency_index.name} vs {self.quote_currency_index.name}, "
            f"{self.kind.value})"
        )


def _to_adjustment(convention) -> BusinessDayAdjustment:
    if isinstance(convention, BusinessDayAdjustment):
        return convention
    try:
        return BusinessDayAdjustment(str(convention).upper())
    except ValueError:
        raise ConfigurationError(f"Unknown business day convention: {convention!r}") from None
