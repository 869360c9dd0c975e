# mizan/taxes.py
# حساب الزكاة: طريقة الوعاء الزكوي (المعتمدة) وطريقة الدخل (التقديرية)
from __future__ import annotations
from dataclasses import replace
from typing import Optional

import pandas as pd

from mizan.classifier import bucket_sums
from mizan.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from mizan.io import RowsLike, normalize_rows
from mizan.logging_config import get_logger
from mizan.schema import (
    AssetBasedZakat,
    DeductibleLiabilities,
    IncomeBasedZakat,
    ZakatableAssets,
    ZakatDifference,
    ZakatResult,
)
from mizan.taxonomy import IncomeLine, ZakatAsset, ZakatLiability

logger = get_logger(__name__)


def extract_zakatable_assets(df: pd.DataFrame, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> ZakatableAssets:
    sums = bucket_sums(df, config.taxonomy.zakat_assets)
    cash = sums.get(ZakatAsset.CASH, 0.0)
    bank = sums.get(ZakatAsset.BANK_ACCOUNTS, 0.0)
    ar = sums.get(ZakatAsset.RECEIVABLES, 0.0)
    inventory = sums.get(ZakatAsset.INVENTORY, 0.0)
    st_inv = sums.get(ZakatAsset.SHORT_TERM_INVESTMENTS, 0.0)
    prepaid = sums.get(ZakatAsset.PREPAID_EXPENSES, 0.0)

    # المصروفات المدفوعة مقدماً لا تدخل في الوعاء
    total = cash + bank + ar + inventory + st_inv
    return ZakatableAssets(
        cash=cash,
        bank_accounts=bank,
        receivables=ar,
        inventory=inventory,
        short_term_investments=st_inv,
        prepaid_expenses=prepaid,
        total=total,
        details={
            "النقدية في الصندوق": cash,
            "الأرصدة البنكية": bank,
            "الذمم المدينة (العملاء)": ar,
            "المخزون": inventory,
            "الاستثمارات قصيرة الأجل": st_inv,
        },
    )


def extract_deductible_liabilities(df: pd.DataFrame, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> DeductibleLiabilities:
    sums = bucket_sums(df, config.taxonomy.zakat_liabilities)
    ap = sums.get(ZakatLiability.ACCOUNTS_PAYABLE, 0.0)
    accruals = sums.get(ZakatLiability.ACCRUED_EXPENSES, 0.0)
    st_loans = sums.get(ZakatLiability.SHORT_TERM_LOANS, 0.0)
    provisions = sums.get(ZakatLiability.PROVISIONS, 0.0)
    other_cl = sums.get(ZakatLiability.OTHER_CURRENT_LIABILITIES, 0.0)

    return DeductibleLiabilities(
        accounts_payable=ap,
        accrued_expenses=accruals,
        short_term_loans=st_loans,
        provisions=provisions,
        other_current_liabilities=other_cl,
        total=ap + accruals + st_loans + provisions + other_cl,
        details={
            "الموردون (الدائنون)": ap,
            "المصروفات المستحقة": accruals,
            "القروض قصيرة الأجل": st_loans,
            "المخصصات": provisions,
            "التزامات متداولة أخرى": other_cl,
        },
    )


def estimate_income_zakat(df: pd.DataFrame, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> IncomeBasedZakat:
    rate = config.taxes.zakat_rate
    sums = bucket_sums(df, config.taxonomy.income)
    revenue = sums.get(IncomeLine.REVENUE, 0.0)
    expenses = sums.get(IncomeLine.EXPENSES, 0.0)
    net_income = revenue - expenses
    # الوعاء التقديري = صافي الدخل (مبسط)
    base = max(0.0, net_income)
    return IncomeBasedZakat(
        revenue=revenue,
        expenses=expenses,
        net_income=net_income,
        zakat_base=base,
        zakat_amount=base * rate,
        zakat_rate=rate,
    )


def compute_zakat(rows: RowsLike, config: EngineConfig = DEFAULT_ENGINE_CONFIG, rate: Optional[float] = None) -> ZakatResult:
    """
    Asset-based zakat (authoritative) plus an income-based estimate over the
    same rows. Both use their own keyword taxonomies, independent of the
    statement classifier. Empty or unclassifiable input gives zeros.
    """
    if rate is not None:
        config = replace(config, taxes=replace(config.taxes, zakat_rate=float(rate)))
    zakat_rate = config.taxes.zakat_rate

    df = normalize_rows(rows, config.colmap)
    assets = extract_zakatable_assets(df, config)
    liabilities = extract_deductible_liabilities(df, config)

    net_assets = assets.total - liabilities.total
    zakat_base = max(0.0, net_assets)
    actual = AssetBasedZakat(
        zakatable_assets=assets,
        deductible_liabilities=liabilities,
        net_zakatable_assets=net_assets,
        zakat_base=zakat_base,
        zakat_amount=zakat_base * zakat_rate,
        zakat_rate=zakat_rate,
    )

    estimated = estimate_income_zakat(df, config)
    diff = actual.zakat_amount - estimated.zakat_amount
    pct = diff / estimated.zakat_amount * 100 if estimated.zakat_amount > 0 else 0.0

    logger.info(
        "zakat_computed",
        rows=len(df),
        method=actual.method,
        zakat_base=zakat_base,
        zakat_amount=actual.zakat_amount,
        estimated_amount=estimated.zakat_amount,
    )
    return ZakatResult(
        actual=actual,
        estimated=estimated,
        difference=ZakatDifference(amount=diff, percentage=pct),
    )


def zakat_due(rows: RowsLike, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> float:
    return float(compute_zakat(rows, config).actual.zakat_amount)
