# mizan/forecasting_core.py
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

import pandas as pd

from mizan.compute_core import safe_div
from mizan.config import DEFAULT_ASSUMPTIONS, Assumptions
from mizan.schema import Totals


# ----------------------------- Trend -------------------------------------

TREND_COLUMNS = ["year", "revenue", "expenses", "net_income", "assets", "equity", "simulated"]


def build_trend(
    totals: Totals,
    assumptions: Assumptions = DEFAULT_ASSUMPTIONS,
    year: Optional[int] = None,
) -> pd.DataFrame:
    """
    Three-year trend where earlier years are simulated from the current totals
    with Assumptions.trend_multipliers. Growth columns are year-over-year %.
    """
    year = year or dt.date.today().year
    rows: List[Dict] = []
    for back, rev_m, exp_m, ni_m, assets_m, eq_m in sorted(assumptions.trend_multipliers, reverse=True):
        rows.append({
            "year": year - back,
            "revenue": totals.revenue * rev_m,
            "expenses": totals.expenses * exp_m,
            "net_income": totals.net_income * ni_m,
            "assets": totals.assets * assets_m,
            "equity": totals.equity * eq_m,
            "simulated": True,
        })
    rows.append({
        "year": year,
        "revenue": totals.revenue,
        "expenses": totals.expenses,
        "net_income": totals.net_income,
        "assets": totals.assets,
        "equity": totals.equity,
        "simulated": False,
    })
    df = pd.DataFrame(rows, columns=TREND_COLUMNS)

    for col in ("revenue", "expenses", "net_income", "assets"):
        prev = df[col].shift(1)
        df[f"{col}_growth"] = [
            0.0 if pd.isna(p) else safe_div(c - p, abs(p)) * 100
            for c, p in zip(df[col], prev)
        ]
    return df


# ----------------------------- Forecast ----------------------------------

def forecast_next_year(totals: Totals, assumptions: Assumptions = DEFAULT_ASSUMPTIONS) -> Dict[str, float]:
    g = assumptions.revenue_growth
    revenue = totals.revenue * (1 + g)
    cogs = totals.cogs * (1 + g * assumptions.cogs_growth_factor)
    opex = totals.operating_expenses * (1 + assumptions.opex_growth)
    gross = revenue - cogs
    net = gross - opex
    return {
        "revenue": revenue,
        "cogs": cogs,
        "gross_profit": gross,
        "operating_expenses": opex,
        "net_income": net,
        "profit_margin": safe_div(net, revenue) * 100,
    }


# ----------------------------- Scenarios ---------------------------------

@dataclass(frozen=True)
class Scenario:
    name: str
    revenue_change: float = 0.0   # %
    cost_change: float = 0.0      # % on cogs
    expense_change: float = 0.0   # % on operating expenses


DEFAULT_SCENARIOS = (
    Scenario("ارتفاع أسعار الوقود 20%", revenue_change=0, cost_change=20, expense_change=15),
    Scenario("انخفاض المبيعات 10%", revenue_change=-10, cost_change=-8, expense_change=0),
    Scenario("زيادة الأسعار 15%", revenue_change=15, cost_change=0, expense_change=0),
    Scenario("خفض التكاليف 10%", revenue_change=0, cost_change=-10, expense_change=-5),
)


def apply_scenario(totals: Totals, scenario: Scenario) -> Dict[str, float]:
    revenue = totals.revenue * (1 + scenario.revenue_change / 100)
    cogs = totals.cogs * (1 + scenario.cost_change / 100)
    opex = totals.operating_expenses * (1 + scenario.expense_change / 100)
    net = revenue - cogs - opex
    return {
        "scenario": scenario.name,
        "revenue": revenue,
        "cogs": cogs,
        "operating_expenses": opex,
        "net_income": net,
        "impact": net - totals.net_income,
    }


def run_scenarios(totals: Totals, scenarios: Iterable[Scenario] = DEFAULT_SCENARIOS) -> pd.DataFrame:
    cols = ["scenario", "revenue", "cogs", "operating_expenses", "net_income", "impact"]
    return pd.DataFrame([apply_scenario(totals, s) for s in scenarios], columns=cols)
