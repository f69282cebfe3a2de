import asyncio

import pytest

from advisor.core.insight_facts import build_insight_facts
from advisor.core.pipeline import run_full_analysis
from cashflow.sample_payloads import EXAMPLES
from cashflow.validate import ValidationError


@pytest.fixture()
def analysis():
    return asyncio.run(run_full_analysis(EXAMPLES["bad"]))


def test_common_facts(analysis):
    facts = build_insight_facts("stress", analysis)
    assert facts == {
        "monthlyBalance": -30.0,
        "stressScore": 71.7,
        "pressureSources": ["Rent", "Food"],
        "riskFlags": {"lowBuffer": True, "highDebt": False, "expensesOverIncome": True},
    }


def test_dashboard_facts(analysis):
    facts = build_insight_facts("dashboard", analysis)
    assert facts["survivalMonths"] == 0.33
    assert facts["topOptimizations"][0] == {
        "title": "Move Further Out (Lower Rent, Higher Transport)",
        "type": "housing",
        "potentialSavings": 450.0,
    }
    assert facts["profile"]["rentMonthly"] == 1500


def test_recommendation_facts(analysis):
    rec = analysis.recommendations[0]
    facts = build_insight_facts("recommendation", analysis, rec)
    assert facts["title"] == rec.title
    assert facts["delta"]["monthlyBalance"] == 450.0
    prediction = facts["recommendation"]["prediction"]
    assert prediction["newBalance"] == 420.0
    assert prediction["stressDelta"] == f"{rec.simulation_result.delta.stress_score:.2f}"


def test_analysis_total_savings(analysis):
    assert analysis.total_savings == 570.0


def test_full_analysis_rejects_invalid_input():
    with pytest.raises(ValidationError):
        asyncio.run(run_full_analysis({"incomeMonthly": -100}))
