from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List, Any, Dict, Tuple


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class Totals(_Frozen):
    # detail buckets (cash/receivables/inventory/payables may be estimates, see estimated_fields)
    cash: float = 0.0
    bank: float = 0.0
    receivables: float = 0.0
    inventory: float = 0.0
    prepaid_expenses: float = 0.0
    other_current_assets: float = 0.0
    gross_fixed_assets: float = 0.0
    accumulated_depreciation: float = 0.0
    payables: float = 0.0
    accrued_expenses: float = 0.0
    short_term_debt: float = 0.0
    other_current_liabilities: float = 0.0
    long_term_debt: float = 0.0
    other_long_term_liabilities: float = 0.0
    share_capital: float = 0.0
    retained_earnings: float = 0.0
    depreciation: float = 0.0
    amortization: float = 0.0

    # statement totals
    current_assets: float = 0.0
    fixed_assets: float = 0.0
    assets: float = 0.0
    current_liabilities: float = 0.0
    long_term_liabilities: float = 0.0
    liabilities: float = 0.0
    equity: float = 0.0
    revenue: float = 0.0
    cogs: float = 0.0
    operating_expenses: float = 0.0
    expenses: float = 0.0
    gross_profit: float = 0.0
    net_income: float = 0.0

    # ratios
    current_ratio: float = 0.0
    quick_ratio: float = 0.0
    debt_ratio: float = 0.0
    profit_margin: float = 0.0
    roa: float = 0.0
    roe: float = 0.0

    # diagnostics
    row_count: int = 0
    classified_count: int = 0
    unclassified_count: int = 0
    unclassified_total: float = 0.0
    raw_debit_total: float = 0.0
    raw_credit_total: float = 0.0
    estimated_fields: Tuple[str, ...] = ()

    @property
    def total_assets(self) -> float:
        return self.assets

    @property
    def total_liabilities(self) -> float:
        return self.liabilities


class ZakatableAssets(_Frozen):
    cash: float = 0.0
    bank_accounts: float = 0.0
    receivables: float = 0.0
    inventory: float = 0.0
    short_term_investments: float = 0.0
    prepaid_expenses: float = 0.0
    total: float = 0.0
    details: Dict[str, float] = Field(default_factory=dict)


class DeductibleLiabilities(_Frozen):
    accounts_payable: float = 0.0
    accrued_expenses: float = 0.0
    short_term_loans: float = 0.0
    provisions: float = 0.0
    other_current_liabilities: float = 0.0
    total: float = 0.0
    details: Dict[str, float] = Field(default_factory=dict)


class AssetBasedZakat(_Frozen):
    zakatable_assets: ZakatableAssets
    deductible_liabilities: DeductibleLiabilities
    net_zakatable_assets: float = 0.0
    zakat_base: float = 0.0
    zakat_amount: float = 0.0
    zakat_rate: float = 0.025
    method: str = "طريقة الوعاء الزكوي (الفعلية)"


class IncomeBasedZakat(_Frozen):
    revenue: float = 0.0
    expenses: float = 0.0
    net_income: float = 0.0
    zakat_base: float = 0.0
    zakat_amount: float = 0.0
    zakat_rate: float = 0.025
    method: str = "طريقة الدخل (التقديرية)"


class ZakatDifference(_Frozen):
    amount: float = 0.0
    percentage: float = 0.0


class ZakatResult(_Frozen):
    actual: AssetBasedZakat
    estimated: IncomeBasedZakat
    difference: ZakatDifference


class OperatingActivities(_Frozen):
    net_income: float = 0.0
    depreciation: float = 0.0
    amortization: float = 0.0
    receivables_change: float = 0.0
    inventory_change: float = 0.0
    prepaid_change: float = 0.0
    payables_change: float = 0.0
    accrued_change: float = 0.0
    total: float = 0.0


class InvestingActivities(_Frozen):
    fixed_assets_purchases: float = 0.0
    fixed_assets_sales: float = 0.0
    investments: float = 0.0
    total: float = 0.0


class FinancingActivities(_Frozen):
    new_loans: float = 0.0
    loan_repayments: float = 0.0
    dividends: float = 0.0
    capital_increase: float = 0.0
    total: float = 0.0


class CashFlowStatement(_Frozen):
    operating: OperatingActivities
    investing: InvestingActivities
    financing: FinancingActivities
    net_change: float = 0.0
    cash_beginning: float = 0.0
    cash_ending: float = 0.0
    basis: str = "assumed"


class CompanyScore(_Frozen):
    score: int = 100
    grade: str = "A"
    description: str = ""


class EngineOutput(_Frozen):
    totals: Totals
    zakat: ZakatResult
    cash_flow: CashFlowStatement
    score: CompanyScore
    recommendations: List[str] = Field(default_factory=list)
    rows: Optional[List[Dict[str, Any]]] = None
