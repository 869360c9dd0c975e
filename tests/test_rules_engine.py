"""Tests for scoring, recommendations and alerts."""

from mizan.compute_core import aggregate
from mizan.rules_engine import MAX_TIPS, company_score, generate_alerts, generate_recommendations
from mizan.schema import Totals


def _loss_making():
    return aggregate([
        {"category": "إيرادات", "credit": 100000},
        {"category": "تكلفة المبيعات", "debit": 90000},
        {"category": "مصروفات تشغيلية", "debit": 30000},
    ])


def test_score_healthy_company(trial_balance):
    score = company_score(aggregate(trial_balance))

    # debt ratio 0.59 costs 10 points
    assert score.score == 90
    assert score.grade == "A"


def test_score_empty_totals():
    score = company_score(Totals())

    assert score.score == 35
    assert score.grade == "D"


def test_no_recommendations_for_healthy_company(trial_balance):
    tips = generate_recommendations(aggregate(trial_balance))

    assert len(tips) == 1
    assert tips[0].startswith("لا توجد إشارات خطرة")


def test_recommendations_are_prioritised_and_capped():
    totals = Totals(
        revenue=100000,
        cogs=20000,
        receivables=50000,
        inventory=10000,
        equity=50000,
        current_liabilities=100000,
        current_ratio=0.5,
        debt_ratio=0.9,
        profit_margin=2,
        roe=4,
    )
    tips = generate_recommendations(totals)

    assert len(tips) == MAX_TIPS
    assert "هامش الربح" in tips[0]
    assert "نسبة التداول" in tips[1]
    assert "نسبة المديونية" in tips[2]


def test_zero_base_ratios_do_not_trigger_tips():
    tips = generate_recommendations(Totals())
    assert tips[0].startswith("لا توجد إشارات خطرة")


def test_alerts_for_loss_making_company():
    alerts = generate_alerts(_loss_making())
    titles = [a["title"] for a in alerts]

    assert len(alerts) == 3
    assert titles[0].startswith("النقدية")
    assert "خسائر تشغيلية" in titles[1]
    assert "هامش الربح" in titles[2]


def test_no_alerts_for_healthy_company(trial_balance):
    assert generate_alerts(aggregate(trial_balance)) == []
