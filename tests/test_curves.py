import math
from datetime import date

import pytest

from xccylib.curves import (
    CurveHandle,
    InterpolatedDiscountCurve,
    PiecewiseDiscountCurve,
    create_flat_discount_curve,
)
from xccylib.errors import ConfigurationError, NumericalError, UnboundTermStructureError
from xccylib.interpolation import create_interpolator, discount_factor_to_zero_rate
from xccylib.quotes import SimpleQuote, as_quote

REF = date(2024, 3, 15)


class TestFlatCurve:
    def test_flat_zero_rate_everywhere(self):
        curve = create_flat_discount_curve(REF, 0.02)
        for t in (0.1, 1.0, 7.3, 60.0):
            assert curve.zero(t) == pytest.approx(0.02, abs=1e-14)

    def test_df_on_dates(self):
        curve = create_flat_discount_curve(REF, 0.02)
        assert curve.df(REF) == 1.0
        assert curve.df(date(2025, 3, 15)) == pytest.approx(math.exp(-0.02 * 365 / 365))

    def test_forward(self):
        curve = create_flat_discount_curve(REF, 0.02)
        start, end = date(2024, 6, 19), date(2024, 9, 19)
        expected = (math.exp(0.02 * 92 / 365) - 1.0) / (92 / 360)
        assert curve.forward(start, end, "ACT/360") == pytest.approx(expected, rel=1e-12)


class TestInterpolatedCurve:
    def test_rejects_non_positive_df(self):
        with pytest.raises(ConfigurationError):
            InterpolatedDiscountCurve(REF, [1.0, 2.0], [0.98, 0.0])

    def test_rejects_short_input(self):
        with pytest.raises(ConfigurationError):
            InterpolatedDiscountCurve(REF, [1.0], [0.98])

    def test_reproduces_pillars(self):
        curve = InterpolatedDiscountCurve(REF, [1.0, 2.0, 5.0], [0.98, 0.955, 0.89])
        assert curve.df(2.0) == pytest.approx(0.955, rel=1e-12)

    def test_parallel_shift(self):
        curve = create_flat_discount_curve(REF, 0.02)
        shifted = curve.shift_parallel(10.0)
        assert shifted.zero(3.0) == pytest.approx(0.021, abs=1e-12)


class TestPiecewiseCurve:
    def test_nodes_and_version(self):
        curve = PiecewiseDiscountCurve(REF)
        assert curve.nodes() == [(REF, 1.0)]
        assert curve.version == 0

        curve.set_node(date(2025, 3, 17), 0.98)
        assert curve.version == 1
        assert curve.has_node(date(2025, 3, 17))
        assert curve.df(date(2025, 3, 17)) == pytest.approx(0.98, rel=1e-14)

        curve.set_node(date(2025, 3, 17), 0.97)
        assert curve.version == 2
        assert curve.df(date(2025, 3, 17)) == pytest.approx(0.97, rel=1e-14)

    def test_flat_forward_between_nodes(self):
        curve = PiecewiseDiscountCurve(REF)
        curve.set_node(date(2025, 3, 15), math.exp(-0.02))
        curve.set_node(date(2026, 3, 15), math.exp(-0.05))
        t = curve.time_from_reference(date(2025, 9, 15))
        t1 = curve.time_from_reference(date(2025, 3, 15))
        t2 = curve.time_from_reference(date(2026, 3, 15))
        forward = (0.05 - 0.02) / (t2 - t1)
        expected = math.exp(-0.02) * math.exp(-forward * (t - t1))
        assert curve.df(date(2025, 9, 15)) == pytest.approx(expected, rel=1e-12)

    def test_remove_node(self):
        curve = PiecewiseDiscountCurve(REF)
        curve.set_node(date(2025, 3, 17), 0.98)
        curve.set_node(date(2026, 3, 17), 0.96)
        curve.remove_node(date(2026, 3, 17))
        assert curve.version == 3
        assert not curve.has_node(date(2026, 3, 17))
        with pytest.raises(ConfigurationError):
            curve.remove_node(REF)

    def test_invalid_nodes(self):
        curve = PiecewiseDiscountCurve(REF)
        with pytest.raises(ConfigurationError):
            curve.set_node(REF, 0.99)
        with pytest.raises(NumericalError):
            curve.set_node(date(2025, 3, 17), -0.5)
        with pytest.raises(NumericalError):
            curve.set_node(date(2025, 3, 17), float("nan"))

    def test_query_without_nodes(self):
        curve = PiecewiseDiscountCurve(REF)
        with pytest.raises(ConfigurationError):
            curve.df(date(2025, 3, 17))

    def test_zero_rate_method_rejected(self):
        with pytest.raises(ConfigurationError):
            PiecewiseDiscountCurve(REF, interpolation_method="LOGLINEAR_ZERO")


class TestCurveHandle:
    def test_unbound_handle(self):
        handle = CurveHandle(name="empty")
        assert handle.empty
        with pytest.raises(UnboundTermStructureError):
            handle.df(1.0)

    def test_version_tracks_links_and_curve(self):
        curve = PiecewiseDiscountCurve(REF)
        handle = CurveHandle()
        before = handle.version
        handle.link_to(curve)
        linked = handle.version
        assert linked != before

        curve.set_node(date(2025, 3, 17), 0.98)
        assert handle.version != linked


class TestQuotes:
    def test_simple_quote_versions(self):
        quote = SimpleQuote(-0.0015)
        assert quote.version == 1
        assert quote.set_value(-0.0020) == pytest.approx(-0.0005)
        assert quote.version == 2
        quote.set_value(-0.0020)
        assert quote.version == 2

    def test_unset_and_nan(self):
        quote = SimpleQuote(name="5Y")
        assert not quote.is_valid()
        with pytest.raises(ConfigurationError):
            quote.value
        with pytest.raises(ConfigurationError):
            quote.set_value(float("nan"))

    def test_as_quote(self):
        assert as_quote(0.01).value == 0.01
        quote = SimpleQuote(1.0)
        assert as_quote(quote) is quote
        with pytest.raises(ConfigurationError):
            as_quote(None)


class TestInterpolators:
    PILLARS = [1.0, 2.0, 5.0]
    DFS = [0.98, 0.955, 0.89]

    @pytest.mark.parametrize(
        "method", ["LINEAR_DF", "LOGLINEAR_ZERO", "PIECEWISE_CONSTANT", "STEP_FORWARD_CONTINUOUS"]
    )
    def test_methods_hit_pillars(self, method):
        curve = InterpolatedDiscountCurve(REF, self.PILLARS, self.DFS, interpolation_method=method)
        for t, df in zip(self.PILLARS, self.DFS):
            assert curve.df(t) == pytest.approx(df, rel=1e-12)

    def test_linear_df_midpoint(self):
        interpolator = create_interpolator("LINEAR_DF", self.PILLARS, self.DFS)
        assert interpolator.interpolate(1.5) == pytest.approx(0.9675)

    def test_step_forward_is_log_linear(self):
        interpolator = create_interpolator("STEP_FORWARD_CONTINUOUS", self.PILLARS, self.DFS)
        expected = math.exp(0.5 * (math.log(0.98) + math.log(0.955)))
        assert interpolator.interpolate(1.5) == pytest.approx(expected, rel=1e-12)

    def test_unknown_method(self):
        with pytest.raises(ConfigurationError):
            create_interpolator("CUBIC", self.PILLARS, self.DFS)

    def test_duplicate_pillars(self):
        with pytest.raises(ConfigurationError):
            create_interpolator("LINEAR_DF", [1.0, 1.0, 2.0], [0.99, 0.98, 0.97])

    def test_zero_rate_conversion(self):
        assert discount_factor_to_zero_rate(math.exp(-0.06), 2.0) == pytest.approx(0.03)
        with pytest.raises(ConfigurationError):
            discount_factor_to_zero_rate(0.9, 0.0)
