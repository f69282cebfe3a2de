from typing import List

from .constants import (
    BUFFER_MONTHS_CURVE,
    DEBT_RATIO_CURVE,
    EXPENSE_RATIO_CURVE,
    NO_EXPENSES_BUFFER_MONTHS,
    NO_INCOME_RATIO,
    PRESSURE_MIN_SHARE,
    PRESSURE_TOP_N,
    RISK_BANDS,
    WEIGHT_BUFFER,
    WEIGHT_DEBT,
    WEIGHT_EXPENSE,
)
from .schemas import EXPENSE_CATEGORIES, MonthlyInputs, StressResult
from .utils import clamp, interpolate, round_places, safe_ratio


def score_expense_ratio(ratio: float) -> float:
    return interpolate(ratio, EXPENSE_RATIO_CURVE)


def score_debt_ratio(ratio: float) -> float:
    return interpolate(ratio, DEBT_RATIO_CURVE)


def score_buffer_months(months: float) -> float:
    # higher buffer is healthier, so the curve descends
    return interpolate(months, BUFFER_MONTHS_CURVE)


def risk_level_from_score(score: float) -> str:
    for max_score, level in RISK_BANDS:
        if score <= max_score:
            return level
    return "High"


def top_pressure_sources(inputs: MonthlyInputs, total_expenses: float) -> List[str]:
    if total_expenses <= 0:
        return []
    shares = [
        (name, getattr(inputs, attr) / total_expenses)
        for name, attr in EXPENSE_CATEGORIES.items()
    ]
    kept = [item for item in shares if item[1] >= PRESSURE_MIN_SHARE]
    kept.sort(key=lambda item: item[1], reverse=True)
    return [name for name, _ in kept[:PRESSURE_TOP_N]]


def calculate_stress(inputs: MonthlyInputs) -> StressResult:
    income = inputs.income_monthly
    total_expenses = inputs.total_expenses()

    expense_ratio = safe_ratio(total_expenses, income, NO_INCOME_RATIO)
    debt_ratio = safe_ratio(inputs.debt_monthly, income, NO_INCOME_RATIO)
    if total_expenses > 0:
        buffer_months = inputs.savings_balance / total_expenses
    else:
        buffer_months = NO_EXPENSES_BUFFER_MONTHS

    raw = (
        WEIGHT_EXPENSE * score_expense_ratio(expense_ratio)
        + WEIGHT_BUFFER * score_buffer_months(buffer_months)
        + WEIGHT_DEBT * score_debt_ratio(debt_ratio)
    )
    stress_score = round_places(clamp(raw, 0.0, 100.0), 1)

    return StressResult(
        stress_score=stress_score,
        risk_level=risk_level_from_score(stress_score),
        expense_ratio=round_places(expense_ratio, 3),
        buffer_months=round_places(buffer_months, 2),
        debt_ratio=round_places(debt_ratio, 3),
        pressure_sources=top_pressure_sources(inputs, total_expenses),
    )
