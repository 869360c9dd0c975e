"""Tests for the indirect-method cash-flow statement."""

import pytest

from mizan.cashflow import build_cash_flow, opening_cash
from mizan.compute_core import aggregate
from mizan.config import Assumptions
from mizan.schema import Totals


@pytest.fixture
def totals(trial_balance):
    return aggregate(trial_balance)


def test_assumed_movements(trial_balance, totals):
    cf = build_cash_flow(totals, trial_balance)

    assert cf.basis == "assumed"
    assert cf.operating.net_income == 50000
    assert cf.operating.depreciation == 10000
    assert cf.operating.receivables_change == pytest.approx(-3000)
    assert cf.operating.inventory_change == pytest.approx(-1000)
    assert cf.operating.prepaid_change == pytest.approx(-100)
    assert cf.operating.payables_change == pytest.approx(6400)
    assert cf.operating.accrued_change == pytest.approx(300)
    assert cf.operating.total == pytest.approx(62600)

    assert cf.investing.fixed_assets_purchases == pytest.approx(-20000)
    assert cf.investing.fixed_assets_sales == pytest.approx(4000)
    assert cf.investing.total == pytest.approx(-16000)

    assert cf.financing.new_loans == pytest.approx(5000)
    assert cf.financing.loan_repayments == pytest.approx(-8000)
    assert cf.financing.dividends == pytest.approx(-10000)
    assert cf.financing.total == pytest.approx(-13000)

    assert cf.net_change == pytest.approx(33600)
    assert cf.cash_beginning == 150000
    assert cf.cash_ending == pytest.approx(183600)


def test_statement_identities(trial_balance, totals):
    cf = build_cash_flow(totals, trial_balance)

    assert cf.net_change == pytest.approx(cf.operating.total + cf.investing.total + cf.financing.total)
    assert cf.cash_ending == pytest.approx(cf.cash_beginning + cf.net_change)


def test_prior_period_deltas(trial_balance, totals):
    prior = Totals(
        receivables=20000,
        inventory=25000,
        prepaid_expenses=5000,
        payables=70000,
        accrued_expenses=10000,
    )
    cf = build_cash_flow(totals, trial_balance, prior=prior)

    assert cf.basis == "prior_period"
    assert cf.operating.receivables_change == pytest.approx(-10000)
    assert cf.operating.inventory_change == pytest.approx(5000)
    assert cf.operating.prepaid_change == 0
    assert cf.operating.payables_change == pytest.approx(10000)
    assert cf.operating.accrued_change == 0
    assert cf.operating.total == pytest.approx(65000)


def test_custom_assumptions(trial_balance, totals):
    cf = build_cash_flow(totals, trial_balance, assumptions=Assumptions(dividend_payout=0.0))

    assert cf.financing.dividends == 0
    assert cf.financing.total == pytest.approx(-3000)


def test_opening_cash_ignores_fallback_estimate():
    rows = [{"category": "أصول متداولة", "debit": 100000}]
    totals = aggregate(rows)

    assert totals.cash == pytest.approx(20000)
    assert opening_cash(rows) == 0
    assert build_cash_flow(totals, rows).cash_beginning == 0


def test_empty_input_is_all_zero():
    cf = build_cash_flow(aggregate([]), [])

    assert cf.operating.total == 0
    assert cf.investing.total == 0
    assert cf.financing.total == 0
    assert cf.cash_ending == 0
