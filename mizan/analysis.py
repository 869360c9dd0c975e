# mizan/analysis.py
from __future__ import annotations
from typing import Dict, Tuple

import pandas as pd

from mizan.compute_core import safe_div
from mizan.config import DEFAULT_ASSUMPTIONS, Assumptions
from mizan.schema import Totals

DAYS_IN_YEAR = 365

AGING_BUCKETS = ("0-30", "31-60", "61-90", "91-120", "120+")


def cash_conversion_cycle(totals: Totals) -> Dict[str, float]:
    """DIO + DSO - DPO, each in days; zero where the base is missing."""
    dio = safe_div(totals.inventory, totals.cogs) * DAYS_IN_YEAR
    dso = safe_div(totals.receivables, totals.revenue) * DAYS_IN_YEAR
    dpo = safe_div(totals.payables, totals.cogs) * DAYS_IN_YEAR
    return {
        "days_inventory": dio,
        "days_receivables": dso,
        "days_payables": dpo,
        "cash_conversion_cycle": dio + dso - dpo,
    }


def inventory_turnover(totals: Totals) -> float:
    return safe_div(totals.cogs, totals.inventory)


def common_size(totals: Totals) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Vertical analysis: income statement lines as % of revenue and balance
    sheet lines as % of total assets.
    """
    income = pd.DataFrame({
        "item": ["revenue", "cogs", "gross_profit", "operating_expenses", "net_income"],
        "amount": [totals.revenue, totals.cogs, totals.gross_profit,
                   totals.operating_expenses, totals.net_income],
    })
    income["percent"] = income["amount"].map(lambda v: safe_div(v, totals.revenue) * 100)

    balance = pd.DataFrame({
        "item": ["current_assets", "fixed_assets", "assets",
                 "current_liabilities", "long_term_liabilities", "equity"],
        "amount": [totals.current_assets, totals.fixed_assets, totals.assets,
                   totals.current_liabilities, totals.long_term_liabilities, totals.equity],
    })
    balance["percent"] = balance["amount"].map(lambda v: safe_div(v, totals.assets) * 100)
    return income, balance


def receivables_aging(totals: Totals, assumptions: Assumptions = DEFAULT_ASSUMPTIONS) -> pd.DataFrame:
    # توزيع تقديري: لا توجد تواريخ فواتير في ميزان المراجعة
    shares = assumptions.aging_distribution
    df = pd.DataFrame({
        "period": list(AGING_BUCKETS[:len(shares)]),
        "share": list(shares),
    })
    df["amount"] = df["share"] * totals.receivables
    df["percent"] = df["amount"].map(lambda v: safe_div(v, totals.receivables) * 100)
    return df
