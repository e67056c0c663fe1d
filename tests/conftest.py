"""Shared market fixtures pinned to a fixed evaluation date."""

from datetime import date

import pytest

from xccylib.conventions.types import BusinessDayAdjustment
from xccylib.curves import create_flat_discount_curve
from xccylib.helpers import CrossCurrencyBasisSwapRateHelper
from xccylib.indexes import IborIndex
from xccylib.settings import evaluation_date

EVAL_DATE = date(2024, 3, 15)  # Friday; spot on TARGET is 2024-03-19


@pytest.fixture(autouse=True)
def pinned_evaluation_date():
    with evaluation_date(EVAL_DATE) as today:
        yield today


@pytest.fixture
def collateral_curve():
    return create_flat_discount_curve(EVAL_DATE, 0.02, name="USD-SOFR")


@pytest.fixture
def foreign_curve():
    return create_flat_discount_curve(EVAL_DATE, 0.03, name="EUR-XCCY")


@pytest.fixture
def usd_index():
    forecast = create_flat_discount_curve(EVAL_DATE, 0.02, name="USD-3M")
    return IborIndex("LIBOR", "3M", 2, "USD", "USNY", forecast_curve=forecast)


@pytest.fixture
def eur_index():
    forecast = create_flat_discount_curve(EVAL_DATE, 0.02, name="EUR-3M")
    return IborIndex("EURIBOR", "3M", 2, "EUR", "TARGET", forecast_curve=forecast)


@pytest.fixture
def make_helper(usd_index, eur_index, collateral_curve):
    """Factory for USD/EUR basis helpers; keyword arguments override defaults."""

    def factory(**overrides):
        mtm = {
            key: overrides.pop(key)
            for key in ("fx_spot", "is_fx_base_currency_leg_resettable")
            if key in overrides
        }
        args = dict(
            basis=-0.0015,
            tenor="5Y",
            fixing_days=2,
            calendar="TARGET",
            convention=BusinessDayAdjustment.MODIFIED_FOLLOWING,
            end_of_month=False,
            base_currency_index=usd_index,
            quote_currency_index=eur_index,
            collateral_curve=collateral_curve,
            is_fx_base_currency_collateral_currency=True,
            is_basis_on_fx_base_currency_leg=False,
        )
        args.update(overrides)
        if mtm:
            return CrossCurrencyBasisSwapRateHelper.mark_to_market(
                fx_spot=mtm.get("fx_spot", 1.08),
                is_fx_base_currency_leg_resettable=mtm.get(
                    "is_fx_base_currency_leg_resettable", True
                ),
                **args,
            )
        return CrossCurrencyBasisSwapRateHelper(**args)

    return factory
