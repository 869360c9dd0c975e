# mizan/compute_core.py
from __future__ import annotations
from typing import Dict, List

from mizan.classifier import classify_frame
from mizan.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from mizan.io import RowsLike, normalize_rows
from mizan.logging_config import get_logger
from mizan.schema import Totals
from mizan.taxonomy import Bucket

logger = get_logger(__name__)


def safe_div(num: float, denom: float) -> float:
    """num / denom, or 0 when the denominator is zero or negative."""
    if denom is None or denom <= 0:
        return 0.0
    out = num / denom
    if out != out or out in (float("inf"), float("-inf")):
        return 0.0
    return float(out)


def compute_ratios(values: Dict[str, float]) -> Dict[str, float]:
    ca = values.get("current_assets", 0.0)
    cl = values.get("current_liabilities", 0.0)
    assets = values.get("assets", 0.0)
    ni = values.get("net_income", 0.0)
    return {
        "current_ratio": safe_div(ca, cl),
        "quick_ratio": safe_div(ca - values.get("inventory", 0.0), cl),
        "debt_ratio": safe_div(values.get("liabilities", 0.0), assets),
        "profit_margin": safe_div(ni, values.get("revenue", 0.0)) * 100,
        "roa": safe_div(ni, assets) * 100,
        "roe": safe_div(ni, values.get("equity", 0.0)) * 100,
    }


def aggregate(rows: RowsLike, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> Totals:
    """
    Classify trial-balance rows and derive statement totals, ratios and
    coverage diagnostics. Rows that match no rule contribute to no bucket but
    are still counted in raw_debit_total / raw_credit_total.
    """
    df = normalize_rows(rows, config.colmap)
    buckets = classify_frame(df, config.taxonomy.statement)
    amounts = df["balance"].abs()

    classified = buckets.notna()
    if classified.any():
        sums = amounts[classified].groupby(buckets[classified]).sum()
        b = {Bucket(k): float(v) for k, v in sums.items()}
    else:
        b = {}

    def s(bucket: Bucket) -> float:
        return b.get(bucket, 0.0)

    v: Dict[str, float] = {
        "cash": s(Bucket.CASH),
        "bank": s(Bucket.BANK),
        "receivables": s(Bucket.RECEIVABLES),
        "inventory": s(Bucket.INVENTORY),
        "prepaid_expenses": s(Bucket.PREPAID_EXPENSES),
        "other_current_assets": s(Bucket.CURRENT_ASSETS),
        "gross_fixed_assets": s(Bucket.FIXED_ASSETS),
        "accumulated_depreciation": s(Bucket.ACCUMULATED_DEPRECIATION),
        "payables": s(Bucket.PAYABLES),
        "accrued_expenses": s(Bucket.ACCRUED_EXPENSES),
        "short_term_debt": s(Bucket.SHORT_TERM_DEBT),
        "other_current_liabilities": s(Bucket.CURRENT_LIABILITIES),
        "long_term_debt": s(Bucket.LONG_TERM_DEBT),
        "other_long_term_liabilities": s(Bucket.LONG_TERM_LIABILITIES),
        "share_capital": s(Bucket.EQUITY),
        "retained_earnings": s(Bucket.RETAINED_EARNINGS),
        "revenue": s(Bucket.REVENUE),
        "cogs": s(Bucket.COGS),
        "depreciation": s(Bucket.DEPRECIATION),
        "amortization": s(Bucket.AMORTIZATION),
    }

    # المجاميع المركبة
    v["current_assets"] = (v["cash"] + v["bank"] + v["receivables"] + v["inventory"]
                           + v["prepaid_expenses"] + v["other_current_assets"])
    v["fixed_assets"] = v["gross_fixed_assets"] - v["accumulated_depreciation"]
    v["assets"] = v["current_assets"] + v["fixed_assets"]
    v["current_liabilities"] = (v["payables"] + v["accrued_expenses"] + v["short_term_debt"]
                                + v["other_current_liabilities"])
    v["long_term_liabilities"] = v["long_term_debt"] + v["other_long_term_liabilities"]
    v["liabilities"] = v["current_liabilities"] + v["long_term_liabilities"]
    v["equity"] = v["share_capital"] + v["retained_earnings"]
    v["operating_expenses"] = s(Bucket.OPERATING_EXPENSES) + v["depreciation"] + v["amortization"]
    v["expenses"] = v["cogs"] + v["operating_expenses"]
    v["gross_profit"] = v["revenue"] - v["cogs"]
    v["net_income"] = v["gross_profit"] - v["operating_expenses"]

    # تقديرات للبيانات غير المتوفرة (لا تؤثر على المجاميع أعلاه)
    a = config.assumptions
    estimated: List[str] = []
    if v["cash"] == 0 and v["bank"] == 0 and v["current_assets"] > 0:
        v["cash"] = v["current_assets"] * a.cash_share
        estimated.append("cash")
    if v["receivables"] == 0 and v["current_assets"] > 0:
        v["receivables"] = v["current_assets"] * a.receivables_share
        estimated.append("receivables")
    if v["inventory"] == 0 and v["current_assets"] > 0:
        v["inventory"] = v["current_assets"] * a.inventory_share
        estimated.append("inventory")
    if v["payables"] == 0 and v["current_liabilities"] > 0:
        v["payables"] = v["current_liabilities"] * a.payables_share
        estimated.append("payables")

    v.update(compute_ratios(v))

    unclassified = ~classified
    totals = Totals(
        **v,
        row_count=int(len(df)),
        classified_count=int(classified.sum()),
        unclassified_count=int(unclassified.sum()),
        unclassified_total=float(amounts[unclassified].sum()),
        raw_debit_total=float(df["debit"].sum()),
        raw_credit_total=float(df["credit"].sum()),
        estimated_fields=tuple(estimated),
    )

    if totals.unclassified_count:
        logger.debug(
            "unclassified_rows",
            count=totals.unclassified_count,
            amount=totals.unclassified_total,
            accounts=df.loc[unclassified, "account_name"].head(10).tolist(),
        )
    if estimated:
        logger.debug("estimated_detail_buckets", fields=estimated)
    return totals


calculate_totals = aggregate
