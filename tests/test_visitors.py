import pandas as pd
import pytest

from xccylib.helpers import CashflowReport, HelperKind, KindDispatcher
from xccylib.helpers.visitors import REPORT_COLUMNS


def test_dispatch_by_kind(make_helper):
    describe = KindDispatcher(
        {
            HelperKind.CONSTANT_NOTIONAL: lambda h: "constant",
            HelperKind.MARK_TO_MARKET: lambda h: f"mtm/{len(h.reset_dates)}",
        }
    )
    assert make_helper().accept(describe) == "constant"
    assert make_helper(fx_spot=1.08).accept(describe) == "mtm/20"


def test_default_handler(make_helper):
    count_resets = KindDispatcher(
        {HelperKind.MARK_TO_MARKET: lambda h: len(h.reset_dates)},
        default=lambda h: 0,
    )
    assert make_helper().accept(count_resets) == 0


def test_missing_handler(make_helper):
    only_mtm = KindDispatcher({HelperKind.MARK_TO_MARKET: lambda h: True})
    with pytest.raises(TypeError):
        make_helper().accept(only_mtm)


def test_constant_notional_report(make_helper, foreign_curve):
    helper = make_helper()
    helper.set_term_structure(foreign_curve)
    report = helper.accept(CashflowReport())

    assert isinstance(report, pd.DataFrame)
    assert list(report.columns) == REPORT_COLUMNS
    # 20 coupons plus two exchanges per leg
    assert len(report) == 44
    assert report["fx_forward"].isna().all()
    assert report.attrs["helper_kind"] == "CONSTANT_NOTIONAL"
    assert report.attrs["implied_quote"] == helper.implied_quote()

    base_pv, quote_pv = helper.leg_valuations()
    by_leg = report.groupby("leg")["pv"].sum()
    assert by_leg["BASE"] == pytest.approx(base_pv.pv, abs=1e-12)
    assert by_leg["QUOTE"] == pytest.approx(quote_pv.pv, abs=1e-12)


def test_mtm_report(make_helper, foreign_curve):
    helper = make_helper(fx_spot=1.08, is_fx_base_currency_leg_resettable=True)
    helper.set_term_structure(foreign_curve)
    report = helper.accept(CashflowReport())

    base_coupons = report[(report["leg"] == "BASE") & (report["kind"] == "COUPON")]
    assert base_coupons["fx_forward"].notna().all()
    assert (report["kind"] == "NOTIONAL_RESET").sum() == 38
    quote_rows = report[report["leg"] == "QUOTE"]
    assert quote_rows["fx_forward"].isna().all()
    assert report.attrs["helper_kind"] == "MARK_TO_MARKET"
