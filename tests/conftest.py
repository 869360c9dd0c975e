"""Pytest configuration and fixtures."""

import pytest


@pytest.fixture
def trial_balance():
    """A small but complete Arabic trial balance (one row left unclassified)."""
    return [
        {"accountName": "النقدية بالصندوق", "category": "أصول متداولة", "debit": 50000, "credit": 0},
        {"accountName": "البنك الأهلي", "category": "أصول متداولة", "debit": 100000, "credit": 0},
        {"accountName": "العملاء", "category": "أصول متداولة", "debit": 30000, "credit": 0},
        {"accountName": "المخزون", "category": "أصول متداولة", "debit": 20000, "credit": 0},
        {"accountName": "مصروفات مدفوعة مقدماً", "category": "أصول متداولة", "debit": 5000, "credit": 0},
        {"accountName": "المباني", "category": "أصول ثابتة", "debit": 200000, "credit": 0},
        {"accountName": "مجمع استهلاك المباني", "category": "أصول ثابتة", "debit": 0, "credit": 40000},
        {"accountName": "الموردون", "category": "التزامات متداولة", "debit": 0, "credit": 80000},
        {"accountName": "مصروفات مستحقة", "category": "التزامات متداولة", "debit": 0, "credit": 10000},
        {"accountName": "قرض قصير الأجل", "category": "التزامات متداولة", "debit": 0, "credit": 25000},
        {"accountName": "قرض طويل الأجل", "category": "التزامات طويلة الأجل", "debit": 0, "credit": 100000},
        {"accountName": "رأس المال", "category": "حقوق الملكية", "debit": 0, "credit": 150000},
        {"accountName": "أرباح محتجزة", "category": "حقوق الملكية", "debit": 0, "credit": 20000},
        {"accountName": "المبيعات", "category": "إيرادات", "debit": 0, "credit": 300000},
        {"accountName": "تكلفة البضاعة المباعة", "category": "تكلفة المبيعات", "debit": 180000, "credit": 0},
        {"accountName": "الرواتب والأجور", "category": "مصروفات تشغيلية", "debit": 60000, "credit": 0},
        {"accountName": "مصروف استهلاك المباني", "category": "مصروفات تشغيلية", "debit": 10000, "credit": 0},
        {"accountName": "حساب معلق", "category": "", "debit": 7000, "credit": 0},
    ]


@pytest.fixture
def income_only_rows():
    """Category-only rows, as produced by the simplified upload screen."""
    return [
        {"category": "إيرادات", "debit": 100000, "credit": 0},
        {"category": "تكلفة البضاعة المباعة", "debit": 60000, "credit": 0},
        {"category": "مصروفات تشغيلية", "debit": 30000, "credit": 0},
    ]


@pytest.fixture
def zakat_rows():
    """Zakat worksheet in the Balance/Account Name row shape."""
    return [
        {"Account Name": "النقدية", "Category": "أصول متداولة", "Balance": 50000},
        {"Account Name": "البنك", "Category": "أصول متداولة", "Balance": 100000},
        {"Account Name": "العملاء", "Category": "أصول متداولة", "Balance": 30000},
        {"Account Name": "المخزون", "Category": "أصول متداولة", "Balance": 20000},
        {"Account Name": "الموردون", "Category": "التزامات متداولة", "Balance": -80000},
    ]
