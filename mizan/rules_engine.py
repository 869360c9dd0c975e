# mizan/rules_engine.py
from __future__ import annotations
from typing import Dict, List

from mizan.analysis import cash_conversion_cycle, inventory_turnover
from mizan.compute_core import safe_div
from mizan.schema import CompanyScore, Totals

MAX_TIPS = 5


def company_score(totals: Totals) -> CompanyScore:
    score = 100

    # خصم نقاط حسب المؤشرات
    if totals.current_ratio < 1:
        score -= 30
    elif totals.current_ratio < 1.5:
        score -= 15

    if totals.debt_ratio > 0.7:
        score -= 25
    elif totals.debt_ratio > 0.5:
        score -= 10

    if totals.profit_margin < 0:
        score -= 30
    elif totals.profit_margin < 5:
        score -= 15

    if totals.roa < 5:
        score -= 10
    if totals.roe < 10:
        score -= 10

    if score >= 85:
        grade, description = "A", "ممتاز - شركة قوية ماليا"
    elif score >= 70:
        grade, description = "B", "جيد - وضع مالي مستقر"
    elif score >= 50:
        grade, description = "C", "مقبول - يحتاج تحسين"
    else:
        grade, description = "D", "ضعيف - يحتاج إجراءات عاجلة"
    return CompanyScore(score=score, grade=grade, description=description)


def generate_recommendations(totals: Totals) -> List[str]:
    """
    توصيات مرتبة حسب الأولوية (حتى 5). لا تُولَّد توصيات لمؤشرات قاعدتها صفر.
    """
    tips: List[tuple] = []

    # 1) هامش الربح
    if totals.revenue > 0 and totals.profit_margin < 5:
        tips.append((1, f"هامش الربح الحالي {totals.profit_margin:.2f}% أقل من المعدل الصحي (10%) — راجع التسعير وهيكل التكاليف."))

    # 2) السيولة
    if totals.current_liabilities > 0:
        if totals.current_ratio < 1:
            tips.append((1, f"نسبة التداول {totals.current_ratio:.2f} أقل من 1 — الأصول المتداولة لا تغطي الالتزامات قصيرة الأجل."))
        elif totals.current_ratio < 1.5:
            tips.append((2, f"نسبة التداول {totals.current_ratio:.2f} أقل من المعدل الصحي (1.5-2) — عزّز السيولة."))

    # 3) المديونية
    if totals.debt_ratio > 0.7:
        tips.append((1, f"نسبة المديونية {totals.debt_ratio * 100:.1f}% تتجاوز الحد الآمن (60%) — ادرس إعادة هيكلة الديون."))

    # 4) تحصيل الذمم
    dso = cash_conversion_cycle(totals)["days_receivables"]
    if dso > 60:
        tips.append((2, f"متوسط فترة التحصيل {dso:.0f} يوم (المعدل الصحي 30-45 يوم) — شدّد سياسة الائتمان."))

    # 5) دوران المخزون
    turnover = inventory_turnover(totals)
    if totals.inventory > 0 and turnover < 4:
        tips.append((3, f"معدل دوران المخزون {turnover:.1f} مرة/سنة (المعدل الصحي 6-8 مرات) — قلّل المخزون الراكد."))

    # 6) العائد على حقوق الملكية
    if totals.equity > 0 and totals.roe < 10:
        tips.append((3, f"العائد على حقوق الملكية {totals.roe:.2f}% أقل من المستهدف (15%)."))

    if not tips:
        return ["لا توجد إشارات خطرة حالياً — استمر على نفس النهج مع متابعة دورية للمؤشرات."]
    tips.sort(key=lambda t: t[0])
    return [t[1] for t in tips[:MAX_TIPS]]


def generate_alerts(totals: Totals) -> List[Dict[str, str]]:
    alerts: List[Dict[str, str]] = []

    monthly_expenses = totals.operating_expenses / 12
    cash_months = safe_div(totals.cash + totals.bank, monthly_expenses)
    if monthly_expenses > 0 and cash_months < 1:
        alerts.append({
            "type": "danger",
            "title": "النقدية لا تغطي شهراً واحداً من المصروفات",
            "action": "تدبير سيولة فورية",
        })

    dso = cash_conversion_cycle(totals)["days_receivables"]
    if dso > 90:
        alerts.append({
            "type": "danger",
            "title": f"متوسط فترة التحصيل {dso:.0f} يوم - يوجد ذمم متعثرة",
            "action": "اتخاذ إجراءات تحصيل فورية",
        })

    if totals.net_income < 0:
        alerts.append({
            "type": "danger",
            "title": f"خسائر تشغيلية بقيمة {abs(totals.net_income):,.0f}",
            "action": "خطة طوارئ لوقف الخسائر",
        })

    if totals.debt_ratio > 0.7:
        alerts.append({
            "type": "warning",
            "title": f"نسبة المديونية {totals.debt_ratio * 100:.1f}% تتجاوز الحد الآمن",
            "action": "خطة لتخفيض المديونية",
        })

    if totals.revenue > 0 and totals.profit_margin < 5:
        alerts.append({
            "type": "warning",
            "title": f"هامش الربح {totals.profit_margin:.2f}% أقل من المستهدف",
            "action": "مراجعة استراتيجية التسعير والتكاليف",
        })
    return alerts
