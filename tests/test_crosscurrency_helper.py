import logging
from datetime import date

import pytest

from xccylib.conventions.types import BusinessDayAdjustment
from xccylib.curves import CurveHandle, PiecewiseDiscountCurve, create_flat_discount_curve
from xccylib.curves.base import BaseCurve
from xccylib.errors import (
    ConfigurationError,
    MissingFixingError,
    NumericalError,
    UnboundTermStructureError,
)
from xccylib.helpers import DiscountResolver, HelperKind, LegSide
from xccylib.indexes import IborIndex
from xccylib.quotes import SimpleQuote
from xccylib.settings import evaluation_date

from conftest import EVAL_DATE


class NaNCurve(BaseCurve):
    def df(self, t):
        return float("nan")


class TestDates:
    def test_initialize_dates(self, make_helper):
        helper = make_helper()
        assert helper.kind == HelperKind.CONSTANT_NOTIONAL
        assert helper.earliest_date == date(2024, 3, 19)
        assert helper.maturity_date == date(2029, 3, 19)
        assert helper.latest_date == date(2029, 3, 19)
        assert helper.pillar_date == helper.latest_date
        assert len(helper.base_currency_leg) == 20
        assert len(helper.quote_currency_leg) == 20

    def test_semiannual_quote_leg(self, make_helper):
        eur_6m = IborIndex(
            "EURIBOR", "6M", 2, "EUR", "TARGET",
            forecast_curve=create_flat_discount_curve(EVAL_DATE, 0.02),
        )
        helper = make_helper(quote_currency_index=eur_6m)
        assert len(helper.base_currency_leg) == 20
        assert len(helper.quote_currency_leg) == 10

    def test_update_follows_evaluation_date(self, make_helper):
        helper = make_helper()
        with evaluation_date(date(2024, 3, 22)):
            helper.update()
            assert helper.earliest_date == date(2024, 3, 26)
        helper.update()
        assert helper.earliest_date == date(2024, 3, 19)

    def test_spread_sits_on_one_leg(self, make_helper):
        on_quote = make_helper()
        assert all(c.spread == -0.0015 for c in on_quote.quote_currency_leg)
        assert all(c.spread == 0.0 for c in on_quote.base_currency_leg)

        on_base = make_helper(is_basis_on_fx_base_currency_leg=True)
        assert all(c.spread == -0.0015 for c in on_base.base_currency_leg)
        assert all(c.spread == 0.0 for c in on_base.quote_currency_leg)


class TestValidation:
    def test_tenor_shorter_than_index(self, make_helper):
        with pytest.raises(ConfigurationError):
            make_helper(tenor="1M")

    @pytest.mark.parametrize("fixing_days", [-1, True, 1.5])
    def test_bad_fixing_days(self, make_helper, fixing_days):
        with pytest.raises(ConfigurationError):
            make_helper(fixing_days=fixing_days)

    def test_missing_inputs(self, make_helper):
        with pytest.raises(ConfigurationError):
            make_helper(basis=None)
        with pytest.raises(ConfigurationError):
            make_helper(collateral_curve=None)
        with pytest.raises(ConfigurationError):
            make_helper(collateral_curve=CurveHandle())
        with pytest.raises(ConfigurationError):
            make_helper(quote_currency_index=None)

    def test_unknown_convention(self, make_helper):
        with pytest.raises(ConfigurationError):
            make_helper(convention="SOMETIMES")

    def test_string_convention(self, make_helper):
        helper = make_helper(convention="modified_following")
        assert helper.convention == BusinessDayAdjustment.MODIFIED_FOLLOWING

    def test_same_currency_warns(self, make_helper, eur_index, caplog):
        other_eur = IborIndex(
            "EURIBOR", "3M", 2, "EUR", "TARGET",
            forecast_curve=eur_index.forecast_curve,
        )
        with caplog.at_level(logging.WARNING, logger="xccylib.helpers.crosscurrency"):
            make_helper(base_currency_index=other_eur)
        assert "Both legs" in caplog.text


class TestDiscounting:
    def test_resolver(self, collateral_curve):
        resolver = DiscountResolver(collateral_curve, True)
        term_structure = CurveHandle()
        base, quote = resolver.discount_handles(term_structure)
        assert resolver.collateral_side == LegSide.BASE
        assert base.current_link is collateral_curve
        assert quote is term_structure

        resolver = DiscountResolver(collateral_curve, False)
        base, quote = resolver.discount_handles(term_structure)
        assert base is term_structure
        assert quote.current_link is collateral_curve

    def test_helper_handles_follow_collateral_flag(self, make_helper, collateral_curve, foreign_curve):
        helper = make_helper(is_fx_base_currency_collateral_currency=False)
        helper.set_term_structure(foreign_curve)
        assert helper.quote_currency_leg_discount_handle.current_link is collateral_curve
        assert helper.base_currency_leg_discount_handle.current_link is foreign_curve


class TestImpliedQuote:
    def test_unbound_term_structure(self, make_helper):
        helper = make_helper()
        with pytest.raises(UnboundTermStructureError):
            helper.implied_quote()

    def test_identical_legs_imply_zero(self, make_helper, eur_index, collateral_curve):
        twin = IborIndex(
            "EURIBOR", "3M", 2, "EUR", "TARGET",
            forecast_curve=eur_index.forecast_curve,
        )
        helper = make_helper(basis=0.0, base_currency_index=twin)
        helper.set_term_structure(collateral_curve)
        assert helper.implied_quote() == pytest.approx(0.0, abs=1e-15)

    def test_deterministic(self, make_helper, foreign_curve):
        first = make_helper()
        second = make_helper()
        first.set_term_structure(foreign_curve)
        second.set_term_structure(foreign_curve)
        value = first.implied_quote()
        assert first.implied_quote() == value
        assert second.implied_quote() == value

    def test_spread_leg_flag_changes_quote(self, make_helper, foreign_curve):
        on_quote = make_helper()
        on_base = make_helper(is_basis_on_fx_base_currency_leg=True)
        on_quote.set_term_structure(foreign_curve)
        on_base.set_term_structure(foreign_curve)
        assert on_quote.implied_quote() != pytest.approx(on_base.implied_quote(), abs=1e-8)

        again = make_helper(is_basis_on_fx_base_currency_leg=True)
        again.set_term_structure(foreign_curve)
        assert again.implied_quote() == on_base.implied_quote()

    def test_implied_quote_is_independent_of_market_quote(self, make_helper, foreign_curve):
        quote = SimpleQuote(-0.0015)
        helper = make_helper(basis=quote)
        helper.set_term_structure(foreign_curve)
        before = helper.implied_quote()
        assert helper.quote_error() == pytest.approx(-0.0015 - before, abs=1e-15)

        quote.set_value(-0.0040)
        after = helper.implied_quote()
        assert helper.quote_currency_leg[0].spread == -0.0040
        assert after == pytest.approx(before, abs=1e-12)
        assert helper.quote_error() == pytest.approx(-0.0040 - after, abs=1e-15)

    def test_relinking_the_curve_reprices(self, make_helper, collateral_curve, foreign_curve):
        helper = make_helper()
        helper.set_term_structure(collateral_curve)
        before = helper.implied_quote()
        helper.set_term_structure(foreign_curve)
        assert helper.implied_quote() != pytest.approx(before, abs=1e-8)

    def test_curve_node_change_reprices(self, make_helper):
        helper = make_helper()
        curve = PiecewiseDiscountCurve(EVAL_DATE)
        curve.set_node(helper.pillar_date, 0.90)
        helper.set_term_structure(curve)
        before = helper.implied_quote()

        # Moving a node without rebinding is still observed through the handle
        curve.set_node(helper.pillar_date, 0.91)
        assert helper.implied_quote() != pytest.approx(before, abs=1e-8)

    def test_stored_fixing_reprices(self, make_helper, foreign_curve, eur_index):
        helper = make_helper()
        helper.set_term_structure(foreign_curve)
        before = helper.implied_quote()

        # The first quote-leg coupon fixes today
        eur_index.add_fixing(EVAL_DATE, 0.10)
        after = helper.implied_quote()
        assert after != pytest.approx(before, abs=1e-8)
        helper.mark_stale()
        assert helper.implied_quote() == after

        eur_index.clear_fixings()
        assert helper.implied_quote() == pytest.approx(before, abs=1e-15)

    def test_non_finite_discount_factor(self, make_helper):
        helper = make_helper()
        helper.set_term_structure(NaNCurve(EVAL_DATE, "broken"))
        with pytest.raises(NumericalError):
            helper.implied_quote()

    def test_leg_valuations(self, make_helper, foreign_curve):
        helper = make_helper()
        helper.set_term_structure(foreign_curve)
        base_pv, quote_pv = helper.leg_valuations()
        implied = helper.implied_quote()
        assert implied == pytest.approx(
            -0.0015 - (quote_pv.pv - base_pv.pv) / quote_pv.bps, abs=1e-15
        )
        assert helper.reset_records() == []
        assert helper.reset_dates == ()

    def test_past_fixing_is_required_after_the_start(self, make_helper, foreign_curve, eur_index):
        helper = make_helper()
        helper.set_term_structure(foreign_curve)
        with evaluation_date(date(2024, 3, 18)):
            # First coupons fixed on 2024-03-15 and no fixing was stored
            with pytest.raises(MissingFixingError):
                helper.implied_quote()
