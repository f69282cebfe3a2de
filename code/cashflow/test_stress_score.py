import math
from dataclasses import replace

import pytest

from cashflow.sample_payloads import EXAMPLES
from cashflow.schemas import MonthlyInputs
from cashflow.stress_score import (
    calculate_stress,
    risk_level_from_score,
    score_buffer_months,
    score_debt_ratio,
    score_expense_ratio,
)
from cashflow.validate import normalize_or_raise


def _inputs(name: str) -> MonthlyInputs:
    return normalize_or_raise(EXAMPLES[name])


def test_overspending_household_is_high_risk():
    r = calculate_stress(_inputs("bad"))
    assert r.expense_ratio == pytest.approx(1.01)
    assert r.debt_ratio == pytest.approx(0.1)
    assert r.buffer_months == pytest.approx(0.33)
    assert r.stress_score == pytest.approx(71.7)
    assert r.risk_level == "High"
    assert r.pressure_sources == ["Rent", "Food"]


def test_zero_income_is_high_and_bounded():
    r = calculate_stress(_inputs("zeroIncome"))
    assert r.risk_level == "High"
    assert r.expense_ratio == 999
    assert r.debt_ratio == 999
    assert 0 <= r.stress_score <= 100


def test_zero_expenses_is_low_with_full_buffer():
    r = calculate_stress(_inputs("zeroExpenses"))
    assert r.risk_level == "Low"
    assert r.stress_score == 0.0
    assert r.buffer_months == 12
    assert r.pressure_sources == []


def test_rent_increase_never_lowers_stress():
    base = _inputs("tight")
    r1 = calculate_stress(base)
    r2 = calculate_stress(replace(base, rent_monthly=base.rent_monthly + 300))
    assert r2.stress_score >= r1.stress_score


def test_debt_increase_never_lowers_stress():
    base = _inputs("tight")
    r1 = calculate_stress(base)
    r2 = calculate_stress(replace(base, debt_monthly=base.debt_monthly + 400))
    assert r2.stress_score >= r1.stress_score


def test_savings_increase_never_raises_stress():
    base = _inputs("bad")
    r1 = calculate_stress(base)
    r2 = calculate_stress(replace(base, savings_balance=base.savings_balance + 5000))
    assert r2.stress_score <= r1.stress_score


def test_rent_heavy_profile_lists_rent():
    r = calculate_stress(_inputs("rentHeavy"))
    assert "Rent" in r.pressure_sources
    assert r.pressure_sources[0] == "Rent"
    assert len(r.pressure_sources) <= 2


def test_small_categories_are_not_pressure_sources():
    r = calculate_stress(MonthlyInputs(income_monthly=2000, rent_monthly=960, subscriptions_monthly=40))
    assert r.pressure_sources == ["Rent"]


def test_extreme_inputs_stay_in_range():
    crazy = MonthlyInputs(
        income_monthly=1,
        rent_monthly=1_000_000,
        utilities_monthly=1_000_000,
        transport_monthly=1_000_000,
        food_monthly=1_000_000,
        debt_monthly=1_000_000,
        subscriptions_monthly=1_000_000,
        savings_balance=0,
    )
    r = calculate_stress(crazy)
    assert r.stress_score == 100.0
    assert r.risk_level == "High"


@pytest.mark.parametrize("name", sorted(EXAMPLES))
def test_outputs_are_finite_and_band_consistent(name):
    r = calculate_stress(_inputs(name))
    for value in (r.stress_score, r.expense_ratio, r.buffer_months, r.debt_ratio):
        assert math.isfinite(value)
    assert 0 <= r.stress_score <= 100
    assert r.risk_level == risk_level_from_score(r.stress_score)


def test_curves_interpolate_and_clamp():
    assert score_expense_ratio(0.6) == pytest.approx(20.0)
    assert score_expense_ratio(1.1) == pytest.approx(92.5)
    assert score_expense_ratio(5.0) == 100.0
    assert score_debt_ratio(0.15) == pytest.approx(22.5)
    assert score_debt_ratio(0.9) == 100.0
    assert score_buffer_months(2.0) == pytest.approx(52.5)
    assert score_buffer_months(0.0) == 100.0
    assert score_buffer_months(24.0) == 0.0


def test_risk_band_boundaries():
    assert risk_level_from_score(33) == "Low"
    assert risk_level_from_score(33.1) == "Moderate"
    assert risk_level_from_score(66) == "Moderate"
    assert risk_level_from_score(66.1) == "High"
    assert risk_level_from_score(250) == "High"


def test_exact_decimal_ties_round_up():
    # 1000 / 8000 = 0.125 and 100 / 1600 = 0.0625 are exact binary ties
    assert calculate_stress(MonthlyInputs(rent_monthly=8000, savings_balance=1000)).buffer_months == 0.13
    ratios = calculate_stress(MonthlyInputs(income_monthly=1600, rent_monthly=100, debt_monthly=100))
    assert ratios.expense_ratio == 0.125
    assert ratios.debt_ratio == 0.063
