"""Tests for working-capital and vertical analysis."""

import pytest

from mizan.analysis import (
    AGING_BUCKETS,
    cash_conversion_cycle,
    common_size,
    inventory_turnover,
    receivables_aging,
)
from mizan.compute_core import aggregate
from mizan.config import Assumptions
from mizan.schema import Totals


def test_cash_conversion_cycle(trial_balance):
    ccc = cash_conversion_cycle(aggregate(trial_balance))

    assert ccc["days_inventory"] == pytest.approx(20000 / 180000 * 365)
    assert ccc["days_receivables"] == pytest.approx(36.5)
    assert ccc["days_payables"] == pytest.approx(80000 / 180000 * 365)
    assert ccc["cash_conversion_cycle"] == pytest.approx(-85.1667, abs=1e-3)


def test_cash_conversion_cycle_without_sales():
    ccc = cash_conversion_cycle(Totals(inventory=1000, receivables=500, payables=200))
    assert ccc == {
        "days_inventory": 0.0,
        "days_receivables": 0.0,
        "days_payables": 0.0,
        "cash_conversion_cycle": 0.0,
    }


def test_inventory_turnover(trial_balance):
    assert inventory_turnover(aggregate(trial_balance)) == pytest.approx(9)
    assert inventory_turnover(Totals(cogs=100)) == 0


def test_common_size(trial_balance):
    income, balance = common_size(aggregate(trial_balance))

    pct = dict(zip(income["item"], income["percent"]))
    assert pct["revenue"] == pytest.approx(100)
    assert pct["cogs"] == pytest.approx(60)
    assert pct["net_income"] == pytest.approx(50000 / 300000 * 100)

    pct = dict(zip(balance["item"], balance["percent"]))
    assert pct["assets"] == pytest.approx(100)
    assert pct["current_assets"] + pct["fixed_assets"] == pytest.approx(100)
    assert pct["equity"] == pytest.approx(170000 / 365000 * 100)


def test_common_size_on_empty_totals():
    income, balance = common_size(Totals())
    assert (income["percent"] == 0).all()
    assert (balance["percent"] == 0).all()


def test_receivables_aging(trial_balance):
    aging = receivables_aging(aggregate(trial_balance))

    assert aging["period"].tolist() == list(AGING_BUCKETS)
    assert aging["amount"].tolist() == pytest.approx([18000, 6000, 3000, 2100, 900])
    assert aging["amount"].sum() == pytest.approx(30000)
    assert aging["percent"].sum() == pytest.approx(100)


def test_receivables_aging_custom_distribution():
    aging = receivables_aging(Totals(receivables=1000), Assumptions(aging_distribution=(0.5, 0.5)))

    assert aging["period"].tolist() == ["0-30", "31-60"]
    assert aging["amount"].tolist() == pytest.approx([500, 500])
