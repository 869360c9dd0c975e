from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple

from mizan.taxonomy import (
    INCOME_RULES,
    STATEMENT_RULES,
    ZAKAT_ASSET_RULES,
    ZAKAT_LIABILITY_RULES,
    Rules,
)

@dataclass(frozen=True)
class ColumnMap:
    # الأسماء بعد التوحيد: lower + strip + المسافات -> "_"
    account_name: Tuple[str, ...] = ("account_name", "accountname", "account", "name", "اسم_الحساب", "الحساب")
    category: Tuple[str, ...] = ("category", "التصنيف", "الفئة", "account_type", "type")
    debit: Tuple[str, ...] = ("debit", "dr", "مدين")
    credit: Tuple[str, ...] = ("credit", "cr", "دائن")
    balance: Tuple[str, ...] = ("balance", "الرصيد", "calculated_balance", "calculatedbalance", "book_balance", "bookbalance")

DEFAULT_COL_MAP = ColumnMap()

@dataclass(frozen=True)
class TaxConfig:
    zakat_rate: float = 0.025

DEFAULT_TAX = TaxConfig()

@dataclass(frozen=True)
class Assumptions:
    """
    Placeholder figures used wherever the trial balance alone cannot answer:
    detail-bucket fallbacks, assumed working-capital movements, investing and
    financing activity, simulated prior years and the default forecast.
    Replace them with real data when a prior period is available.
    """
    # تقديرات البنود التفصيلية عند غيابها (نسبة من البند الأم)
    cash_share: float = 0.2
    receivables_share: float = 0.4
    inventory_share: float = 0.3
    payables_share: float = 0.6

    # تغيرات رأس المال العامل المفترضة (نسبة من الرصيد الحالي)
    receivables_change: float = 0.10
    inventory_change: float = 0.05
    prepaid_change: float = 0.02
    payables_change: float = 0.08
    accrued_change: float = 0.03

    # الأنشطة الاستثمارية والتمويلية
    capex_rate: float = 0.10
    disposal_rate: float = 0.02
    investments: float = 0.0
    new_loan_rate: float = 0.05
    loan_repayment_rate: float = 0.08
    dividend_payout: float = 0.20
    capital_increase: float = 0.0

    # سنوات سابقة محاكاة: (عدد السنوات للخلف, الإيرادات, المصروفات, صافي الربح, الأصول, حقوق الملكية)
    trend_multipliers: Tuple[Tuple[int, float, float, float, float, float], ...] = (
        (2, 0.70, 0.75, 0.60, 0.75, 0.80),
        (1, 0.85, 0.88, 0.80, 0.88, 0.90),
    )

    # التنبؤ للسنة القادمة
    revenue_growth: float = 0.10
    cogs_growth_factor: float = 0.8
    opex_growth: float = 0.05

    # توزيع أعمار الذمم: 0-30، 31-60، 61-90، 91-120، أكثر من 120
    aging_distribution: Tuple[float, ...] = (0.60, 0.20, 0.10, 0.07, 0.03)

DEFAULT_ASSUMPTIONS = Assumptions()

@dataclass(frozen=True)
class Taxonomy:
    statement: Rules = STATEMENT_RULES
    zakat_assets: Rules = ZAKAT_ASSET_RULES
    zakat_liabilities: Rules = ZAKAT_LIABILITY_RULES
    income: Rules = INCOME_RULES

DEFAULT_TAXONOMY = Taxonomy()

@dataclass(frozen=True)
class EngineConfig:
    colmap: ColumnMap = field(default_factory=lambda: DEFAULT_COL_MAP)
    taxes: TaxConfig = field(default_factory=lambda: DEFAULT_TAX)
    assumptions: Assumptions = field(default_factory=lambda: DEFAULT_ASSUMPTIONS)
    taxonomy: Taxonomy = field(default_factory=lambda: DEFAULT_TAXONOMY)

DEFAULT_ENGINE_CONFIG = EngineConfig()
