# mizan/taxonomy.py
# قوائم الكلمات المفتاحية لتصنيف حسابات ميزان المراجعة (عربي/إنجليزي)
from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, Tuple, Union


class Bucket(str, Enum):
    CASH = "cash"
    BANK = "bank"
    RECEIVABLES = "receivables"
    INVENTORY = "inventory"
    PREPAID_EXPENSES = "prepaidExpenses"
    FIXED_ASSETS = "fixedAssets"
    ACCUMULATED_DEPRECIATION = "accumulatedDepreciation"
    PAYABLES = "payables"
    ACCRUED_EXPENSES = "accruedExpenses"
    SHORT_TERM_DEBT = "shortTermDebt"
    LONG_TERM_DEBT = "longTermDebt"
    EQUITY = "equity"
    RETAINED_EARNINGS = "retainedEarnings"
    REVENUE = "revenue"
    COGS = "cogs"
    OPERATING_EXPENSES = "operatingExpenses"
    DEPRECIATION = "depreciation"
    AMORTIZATION = "amortization"
    CURRENT_ASSETS = "currentAssets"
    CURRENT_LIABILITIES = "currentLiabilities"
    LONG_TERM_LIABILITIES = "longTermLiabilities"


class ZakatAsset(str, Enum):
    CASH = "cash"
    BANK_ACCOUNTS = "bankAccounts"
    RECEIVABLES = "receivables"
    INVENTORY = "inventory"
    SHORT_TERM_INVESTMENTS = "shortTermInvestments"
    PREPAID_EXPENSES = "prepaidExpenses"


class ZakatLiability(str, Enum):
    ACCOUNTS_PAYABLE = "accountsPayable"
    ACCRUED_EXPENSES = "accruedExpenses"
    SHORT_TERM_LOANS = "shortTermLoans"
    PROVISIONS = "provisions"
    OTHER_CURRENT_LIABILITIES = "otherCurrentLiabilities"


class IncomeLine(str, Enum):
    REVENUE = "revenue"
    EXPENSES = "expenses"


FIELDS = ("name", "category", "any")


@dataclass(frozen=True)
class Rule:
    """
    قاعدة تصنيف واحدة: الحساب يطابق القاعدة إذا احتوى النص على
    كلمة من any_of، وكلمة من كل مجموعة في all_of، ولا شيء من none_of.
    """
    bucket: str
    any_of: Tuple[str, ...] = ()
    all_of: Tuple[Tuple[str, ...], ...] = ()
    none_of: Tuple[str, ...] = ()
    field: str = "any"

    def __post_init__(self):
        if self.field not in FIELDS:
            raise ValueError(f"Unknown rule field: {self.field!r}")
        if not self.any_of and not self.all_of:
            raise ValueError(f"Rule for {self.bucket!r} has no keywords")


Rules = Tuple[Rule, ...]

_LOAN = ("قرض", "قروض", "loan", "borrowing")
_REVENUE = ("إيراد", "ايراد", "مبيعات", "revenue", "sales")
_INCOME_NAME = ("إيراد", "ايراد", "revenue")
_ACCRUED = ("مستحق", "accrued")
# عبارات كاملة: "إيرادات الخدمات المقدمة" إيراد عادي
_DEFERRED = ("إيرادات مقدمة", "ايرادات مقدمة", "إيرادات مؤجلة", "ايرادات مؤجلة",
             "مقبوضة مقدم", "unearned", "deferred revenue", "deferred income")
_COGS = ("تكلفة البضاعة", "تكلفة المبيعات", "تكلفة الإيرادات",
         "cost of goods", "cost of sales", "cost of revenue", "cogs")


# =========================
# تصنيف القوائم المالية (المجاميع والنسب والتدفقات)
# الترتيب = الأولوية: أول قاعدة مطابقة تفوز
# =========================
STATEMENT_RULES: Rules = (
    # مجمع/مخصص الاستهلاك قبل مصروف الاستهلاك وقبل الأصول الثابتة
    Rule(Bucket.ACCUMULATED_DEPRECIATION,
         all_of=(("مجمع", "مخصص", "accumulated"),
                 ("استهلاك", "إهلاك", "اهلاك", "depreciation"))),
    Rule(Bucket.DEPRECIATION, any_of=("استهلاك", "إهلاك", "اهلاك", "depreciation")),
    Rule(Bucket.AMORTIZATION, any_of=("إطفاء", "اطفاء", "amortization", "amortisation")),
    # تصنيف قائمة الدخل الصريح يسبق الكلمات في اسم الحساب
    # "cost of sales" تحتوي "sales"
    Rule(Bucket.COGS, any_of=_COGS, field="category"),
    Rule(Bucket.OPERATING_EXPENSES, any_of=("مصروف", "مصاريف", "expense"),
         none_of=("مقدم", "prepaid") + _ACCRUED, field="category"),
    Rule(Bucket.REVENUE, any_of=_REVENUE,
         none_of=_ACCRUED + ("مؤجل", "unearned", "deferred"), field="category"),
    Rule(Bucket.COGS, any_of=_COGS),
    # إيرادات مستحقة أصل، وإيرادات مقدمة التزام
    Rule(Bucket.RECEIVABLES, all_of=(_INCOME_NAME, _ACCRUED), field="name"),
    Rule(Bucket.CURRENT_LIABILITIES, any_of=_DEFERRED, field="name"),
    # مصروفات مدفوعة مقدماً / مستحقة قبل "مصروف" العامة
    Rule(Bucket.PREPAID_EXPENSES, any_of=("مدفوعة مقدم", "مدفوع مقدم", "مقدم", "prepaid"),
         none_of=_INCOME_NAME),
    Rule(Bucket.ACCRUED_EXPENSES, any_of=_ACCRUED),
    Rule(Bucket.REVENUE, any_of=_REVENUE),
    Rule(Bucket.OPERATING_EXPENSES, any_of=("مصروف", "مصاريف", "expense")),
    # القروض محددة الأجل قبل مطابقة القروض العامة
    Rule(Bucket.SHORT_TERM_DEBT,
         all_of=(_LOAN, ("قصير", "short", "current portion", "جاري")), field="name"),
    Rule(Bucket.LONG_TERM_DEBT, all_of=(_LOAN, ("طويل", "long")), field="name"),
    Rule(Bucket.LONG_TERM_DEBT, any_of=_LOAN, field="name"),
    Rule(Bucket.CASH, any_of=("نقد", "صندوق", "cash")),
    Rule(Bucket.BANK, any_of=("بنك", "بنوك", "مصرف", "bank")),
    Rule(Bucket.RECEIVABLES, any_of=("عملاء", "مدين", "receivable", "debtor")),
    Rule(Bucket.INVENTORY, any_of=("مخزون", "بضاعة", "inventory", "stock")),
    Rule(Bucket.PAYABLES, any_of=("مورد", "دائن", "payable", "creditor", "supplier")),
    Rule(Bucket.RETAINED_EARNINGS, any_of=("أرباح محتجزة", "ارباح محتجزة", "أرباح مبقاة",
                                           "retained")),
    Rule(Bucket.EQUITY, any_of=("رأس المال", "راس المال", "حقوق الملكية", "حقوق ملكية",
                                "capital", "equity")),
    # "non-current assets" تحتوي "current assets": غير المتداولة أولاً
    Rule(Bucket.FIXED_ASSETS, any_of=("أصول ثابتة", "اصول ثابتة", "أصول غير متداولة",
                                      "ممتلكات", "معدات", "مباني", "fixed asset",
                                      "non-current asset", "property", "equipment")),
    Rule(Bucket.CURRENT_ASSETS, any_of=("أصول متداولة", "اصول متداولة", "current asset"),
         field="category"),
    Rule(Bucket.LONG_TERM_LIABILITIES,
         any_of=("التزامات طويلة", "التزامات غير متداولة", "خصوم غير متداولة",
                 "long-term liabilit", "long term liabilit", "non-current liabilit"),
         field="category"),
    Rule(Bucket.CURRENT_LIABILITIES,
         any_of=("التزامات متداولة", "خصوم متداولة", "current liabilit"),
         field="category"),
)


# =========================
# تصنيف الزكاة: الأصول الزكوية
# =========================
ZAKAT_ASSET_RULES: Rules = (
    Rule(ZakatAsset.CASH, any_of=("نقد", "cash", "صندوق", "petty cash"), field="name"),
    Rule(ZakatAsset.BANK_ACCOUNTS, any_of=("بنك", "bank", "حساب جاري", "current account"),
         field="name"),
    Rule(ZakatAsset.RECEIVABLES, any_of=("عملاء", "مدين", "receivable", "customer", "debtor"),
         field="name"),
    # "تكلفة البضاعة المباعة" حساب نتيجة وليس مخزوناً
    Rule(ZakatAsset.INVENTORY, any_of=("مخزون", "بضاعة", "inventory", "stock", "goods"),
         none_of=("تكلفة", "cost of"), field="name"),
    Rule(ZakatAsset.SHORT_TERM_INVESTMENTS, all_of=(("استثمار",), ("قصير", "short")),
         field="name"),
    Rule(ZakatAsset.SHORT_TERM_INVESTMENTS,
         any_of=("short-term investment", "marketable securities"), field="name"),
    # تُتابع ولا تدخل في مجموع الوعاء
    Rule(ZakatAsset.PREPAID_EXPENSES, any_of=("مصروف مدفوع مقدم", "مقدم", "prepaid", "advance"),
         field="name"),
)


# =========================
# تصنيف الزكاة: الخصوم المسموح حسمها
# =========================
ZAKAT_LIABILITY_RULES: Rules = (
    Rule(ZakatLiability.ACCOUNTS_PAYABLE,
         any_of=("مورد", "دائن", "payable", "creditor", "supplier"), field="name"),
    Rule(ZakatLiability.ACCRUED_EXPENSES,
         any_of=("مصروف مستحق", "مستحق", "accrued", "expense payable"), field="name"),
    Rule(ZakatLiability.SHORT_TERM_LOANS, all_of=(("قرض",), ("قصير", "جاري")), field="name"),
    Rule(ZakatLiability.SHORT_TERM_LOANS, any_of=("short-term loan", "current portion"),
         field="name"),
    Rule(ZakatLiability.PROVISIONS, any_of=("مخصص", "provision", "allowance"), field="name"),
    Rule(ZakatLiability.OTHER_CURRENT_LIABILITIES,
         all_of=(("التزام",), ("متداول",)), none_of=("غير متداول",), field="category"),
    Rule(ZakatLiability.OTHER_CURRENT_LIABILITIES, any_of=("current liab",),
         none_of=("non-current", "non current"), field="category"),
)


# =========================
# طريقة الدخل (التقديرية)
# =========================
INCOME_RULES: Rules = (
    Rule(IncomeLine.REVENUE, any_of=("إيراد", "ايراد", "revenue", "income", "sales"),
         field="category"),
    Rule(IncomeLine.EXPENSES, any_of=("مصروف", "expense", "cost", "تكلفة"), field="category"),
)


_BUCKET_TYPES = {
    "statement": Bucket,
    "zakat_assets": ZakatAsset,
    "zakat_liabilities": ZakatLiability,
    "income": IncomeLine,
}


def rules_from_dicts(items: Iterable[Dict], kind: str = "statement") -> Rules:
    """يبني قواعد من قائمة قواميس (نفس شكل ملف JSON)."""
    enum_type = _BUCKET_TYPES.get(kind)
    if enum_type is None:
        raise ValueError(f"Unknown taxonomy kind: {kind!r}")
    out = []
    for item in items:
        try:
            bucket = enum_type(item["bucket"])
        except (KeyError, ValueError) as e:
            raise ValueError(f"Invalid bucket in {kind} rule: {item.get('bucket')!r}") from e
        out.append(Rule(
            bucket=bucket,
            any_of=tuple(item.get("any_of", ())),
            all_of=tuple(tuple(g) for g in item.get("all_of", ())),
            none_of=tuple(item.get("none_of", ())),
            field=item.get("field", "any"),
        ))
    return tuple(out)


def load_rules(path: Union[str, Path], kind: str = "statement") -> Rules:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Taxonomy file not found: {p}")
    return rules_from_dicts(json.loads(p.read_text(encoding="utf-8")), kind=kind)
