# mizan/cashflow.py
# قائمة التدفقات النقدية بالطريقة غير المباشرة
from __future__ import annotations
from typing import Optional

from mizan.classifier import bucket_sums
from mizan.config import DEFAULT_ASSUMPTIONS, DEFAULT_ENGINE_CONFIG, Assumptions, EngineConfig
from mizan.io import RowsLike, normalize_rows
from mizan.logging_config import get_logger
from mizan.schema import (
    CashFlowStatement,
    FinancingActivities,
    InvestingActivities,
    OperatingActivities,
    Totals,
)
from mizan.taxonomy import Bucket

logger = get_logger(__name__)


def opening_cash(rows: RowsLike, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> float:
    """Classified cash + bank straight from the rows (never the fallback estimate)."""
    df = normalize_rows(rows, config.colmap)
    sums = bucket_sums(df, config.taxonomy.statement)
    return sums.get(Bucket.CASH, 0.0) + sums.get(Bucket.BANK, 0.0)


def operating_activities(totals: Totals, assumptions: Assumptions = DEFAULT_ASSUMPTIONS,
                         prior: Optional[Totals] = None) -> OperatingActivities:
    if prior is not None:
        # تغيرات فعلية مقارنة بالفترة السابقة
        d_ar = totals.receivables - prior.receivables
        d_inv = totals.inventory - prior.inventory
        d_prepaid = totals.prepaid_expenses - prior.prepaid_expenses
        d_ap = totals.payables - prior.payables
        d_accrued = totals.accrued_expenses - prior.accrued_expenses
    else:
        # لا توجد بيانات فترة سابقة: تغيرات مفترضة بنسب من الرصيد الحالي
        d_ar = totals.receivables * assumptions.receivables_change
        d_inv = totals.inventory * assumptions.inventory_change
        d_prepaid = totals.prepaid_expenses * assumptions.prepaid_change
        d_ap = totals.payables * assumptions.payables_change
        d_accrued = totals.accrued_expenses * assumptions.accrued_change

    adjustments = totals.depreciation + totals.amortization
    working_capital = -d_ar - d_inv - d_prepaid + d_ap + d_accrued
    return OperatingActivities(
        net_income=totals.net_income,
        depreciation=totals.depreciation,
        amortization=totals.amortization,
        receivables_change=-d_ar,
        inventory_change=-d_inv,
        prepaid_change=-d_prepaid,
        payables_change=d_ap,
        accrued_change=d_accrued,
        total=totals.net_income + adjustments + working_capital,
    )


def investing_activities(totals: Totals, assumptions: Assumptions = DEFAULT_ASSUMPTIONS) -> InvestingActivities:
    purchases = -(totals.gross_fixed_assets * assumptions.capex_rate)
    sales = totals.gross_fixed_assets * assumptions.disposal_rate
    investments = assumptions.investments
    return InvestingActivities(
        fixed_assets_purchases=purchases,
        fixed_assets_sales=sales,
        investments=investments,
        total=purchases + sales + investments,
    )


def financing_activities(totals: Totals, assumptions: Assumptions = DEFAULT_ASSUMPTIONS) -> FinancingActivities:
    new_loans = totals.long_term_debt * assumptions.new_loan_rate
    repayments = -(totals.long_term_debt * assumptions.loan_repayment_rate)
    dividends = -(totals.net_income * assumptions.dividend_payout)
    capital_increase = assumptions.capital_increase
    return FinancingActivities(
        new_loans=new_loans,
        loan_repayments=repayments,
        dividends=dividends,
        capital_increase=capital_increase,
        total=new_loans + repayments + dividends + capital_increase,
    )


def build_cash_flow(
    totals: Totals,
    rows: RowsLike,
    assumptions: Optional[Assumptions] = None,
    prior: Optional[Totals] = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> CashFlowStatement:
    """
    Indirect-method cash flow from aggregated totals.

    Working-capital movements are assumed percentages of current balances
    unless prior-period totals are given, in which case the real deltas are
    used. Opening cash is the classified cash and bank from the raw rows.
    """
    assumptions = assumptions or config.assumptions
    operating = operating_activities(totals, assumptions, prior)
    investing = investing_activities(totals, assumptions)
    financing = financing_activities(totals, assumptions)

    net_change = operating.total + investing.total + financing.total
    cash_beginning = opening_cash(rows, config)

    statement = CashFlowStatement(
        operating=operating,
        investing=investing,
        financing=financing,
        net_change=net_change,
        cash_beginning=cash_beginning,
        cash_ending=cash_beginning + net_change,
        basis="prior_period" if prior is not None else "assumed",
    )
    logger.info(
        "cash_flow_built",
        basis=statement.basis,
        operating=operating.total,
        investing=investing.total,
        financing=financing.total,
        net_change=net_change,
    )
    return statement
