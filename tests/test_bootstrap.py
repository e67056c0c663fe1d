import logging
import math
from datetime import date

import pytest

from xccylib.bootstrap import BootstrapConfig, PiecewiseCurveBootstrapper
from xccylib.errors import BootstrapError, ConfigurationError, NumericalError
from xccylib.helpers import HelperKind, RateHelper

from conftest import EVAL_DATE


class ZeroRateHelper(RateHelper):
    """Quotes the continuously compounded zero rate to its pillar."""

    def __init__(self, rate, pillar, fail_below=None):
        super().__init__(rate)
        self.tenor = f"{(pillar - EVAL_DATE).days}D"
        self.earliest_date = EVAL_DATE
        self.latest_date = self.maturity_date = self.pillar_date = pillar
        self.fail_below = fail_below

    @property
    def kind(self):
        return HelperKind.CONSTANT_NOTIONAL

    def implied_quote(self):
        curve = self._require_term_structure()
        df = curve.df(self.pillar_date)
        if self.fail_below is not None and df < self.fail_below:
            raise NumericalError(f"Discount factor {df} below {self.fail_below}")
        return -math.log(df) / curve.time_from_reference(self.pillar_date)


class TestDriver:
    def test_zero_rate_round_trip(self):
        helpers = [
            ZeroRateHelper(0.031, date(2027, 3, 15)),
            ZeroRateHelper(0.030, date(2025, 3, 15)),
            ZeroRateHelper(0.0305, date(2026, 3, 15)),
        ]
        outcome = PiecewiseCurveBootstrapper(helpers).build()

        assert [r.pillar_date for r in outcome.results] == [
            date(2025, 3, 15), date(2026, 3, 15), date(2027, 3, 15)
        ]
        for result in outcome.results:
            assert result.zero_rate == pytest.approx(result.market_quote, abs=1e-12)
            assert abs(result.quote_error) < 1e-12
        assert outcome.curve.df(date(2025, 3, 15)) == pytest.approx(math.exp(-0.030), rel=1e-12)

    def test_outcome_unpacks_and_tabulates(self):
        curve, results = PiecewiseCurveBootstrapper(
            [ZeroRateHelper(0.02, date(2025, 3, 15))]
        ).build()
        assert curve.has_node(date(2025, 3, 15))
        assert len(results) == 1

        frame = PiecewiseCurveBootstrapper([ZeroRateHelper(0.02, date(2025, 3, 15))]).build().to_frame()
        assert list(frame.index) == [date(2025, 3, 15)]
        assert frame.loc[date(2025, 3, 15), "discount_factor"] == pytest.approx(math.exp(-0.02))

    def test_numerical_failure_is_retried(self, caplog):
        helper = ZeroRateHelper(0.03, date(2025, 3, 15), fail_below=0.95)
        with caplog.at_level(logging.WARNING, logger="xccylib.bootstrap.engine"):
            outcome = PiecewiseCurveBootstrapper([helper]).build()
        assert "Numerical failure" in caplog.text
        assert outcome.results[0].discount_factor == pytest.approx(math.exp(-0.03), rel=1e-12)

    def test_numerical_failure_without_retries(self):
        helper = ZeroRateHelper(0.03, date(2025, 3, 15), fail_below=0.95)
        config = BootstrapConfig(numerical_retries=0)
        with pytest.raises(NumericalError):
            PiecewiseCurveBootstrapper([helper], config=config).build()
        # The trial node is rolled back on the curve the helper is bound to
        assert not helper.term_structure.current_link.has_node(date(2025, 3, 15))

    def test_failed_solve_keeps_earlier_nodes(self):
        first = ZeroRateHelper(0.02, date(2025, 3, 15))
        second = ZeroRateHelper(0.03, date(2026, 3, 15), fail_below=0.95)
        config = BootstrapConfig(numerical_retries=0)
        with pytest.raises(NumericalError):
            PiecewiseCurveBootstrapper([first, second], config=config).build()

        curve = second.term_structure.current_link
        assert curve.nodes()[-1][0] == date(2025, 3, 15)
        assert curve.node_value(date(2025, 3, 15)) == pytest.approx(math.exp(-0.02), rel=1e-12)

    def test_not_converged(self):
        config = BootstrapConfig(max_passes=1)
        with pytest.raises(BootstrapError):
            PiecewiseCurveBootstrapper(
                [ZeroRateHelper(0.02, date(2025, 3, 15))], config=config
            ).build()

    def test_invalid_helper_sets(self):
        with pytest.raises(ConfigurationError):
            PiecewiseCurveBootstrapper([])
        with pytest.raises(ConfigurationError):
            PiecewiseCurveBootstrapper(
                [ZeroRateHelper(0.02, date(2025, 3, 15)), ZeroRateHelper(0.021, date(2025, 3, 15))]
            ).build()
        with pytest.raises(ConfigurationError):
            PiecewiseCurveBootstrapper(
                [ZeroRateHelper(0.02, date(2025, 3, 15))], reference_date=date(2026, 1, 2)
            ).build()


class TestCrossCurrencyBootstrap:
    def test_five_year_constant_notional(self, make_helper):
        helper = make_helper(basis=-0.0015, tenor="5Y")
        outcome = PiecewiseCurveBootstrapper([helper], name="EUR-XCCY").build()

        assert outcome.curve.reference_date == EVAL_DATE
        assert abs(outcome.results[0].quote_error) < 1e-10

        # A fresh helper on the solved curve reprices the quote
        check = make_helper(basis=-0.0015, tenor="5Y")
        check.set_term_structure(outcome.curve)
        assert check.implied_quote() == pytest.approx(-0.0015, abs=1e-10)

    def test_term_structure_of_quotes(self, make_helper):
        quotes = {"1Y": -0.0010, "2Y": -0.0012, "3Y": -0.0013, "5Y": -0.0015}
        helpers = [make_helper(basis=q, tenor=t) for t, q in quotes.items()]
        outcome = PiecewiseCurveBootstrapper(helpers).build()

        assert 2 <= outcome.passes <= BootstrapConfig().max_passes
        assert [r.tenor for r in outcome.results] == list(quotes)
        for helper, result in zip(helpers, outcome.results):
            assert abs(result.quote_error) < 1e-10
            assert helper.implied_quote() == pytest.approx(helper.quote.value, abs=1e-10)

        dfs = [df for _, df in outcome.curve.nodes()]
        assert all(later < earlier for earlier, later in zip(dfs[:-1], dfs[1:]))

    def test_mark_to_market_helpers(self, make_helper):
        helpers = [
            make_helper(basis=-0.0012, tenor="2Y", fx_spot=1.08),
            make_helper(basis=-0.0015, tenor="5Y", fx_spot=1.08),
        ]
        outcome = PiecewiseCurveBootstrapper(helpers).build()
        for result in outcome.results:
            assert abs(result.quote_error) < 1e-10
        assert all(r.notional > 0.0 for r in helpers[-1].reset_records())

    def test_quote_collateral_side(self, make_helper):
        helper = make_helper(
            is_fx_base_currency_collateral_currency=False,
            is_basis_on_fx_base_currency_leg=True,
        )
        outcome = PiecewiseCurveBootstrapper([helper]).build()
        assert abs(outcome.results[0].quote_error) < 1e-10
