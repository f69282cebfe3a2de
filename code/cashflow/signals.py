from .constants import (
    EXPENSES_OVER_INCOME_RATIO,
    HIGH_DEBT_RATIO,
    LOW_BUFFER_MONTHS,
    OVERSPEND_FOOD_SHARE,
    OVERSPEND_SUBSCRIPTIONS_SHARE,
    OVERSPEND_TRANSPORT_SHARE,
)
from .schemas import MonthlyInputs, RiskFlags, SignalNumbers, SignalResult, StressResult
from .utils import round_places, safe_ratio


def compute_signals(inputs: MonthlyInputs, stress: StressResult) -> SignalResult:
    income = inputs.income_monthly

    # no income means every category counts as fully overspent
    food_share = safe_ratio(inputs.food_monthly, income, 1.0)
    transport_share = safe_ratio(inputs.transport_monthly, income, 1.0)
    subscriptions_share = safe_ratio(inputs.subscriptions_monthly, income, 1.0)

    return SignalResult(
        overspending={
            "Food": food_share > OVERSPEND_FOOD_SHARE,
            "Transport": transport_share > OVERSPEND_TRANSPORT_SHARE,
            "Subscriptions": subscriptions_share > OVERSPEND_SUBSCRIPTIONS_SHARE,
        },
        risk_flags=RiskFlags(
            low_buffer=stress.buffer_months < LOW_BUFFER_MONTHS,
            high_debt=stress.debt_ratio > HIGH_DEBT_RATIO,
            expenses_over_income=stress.expense_ratio > EXPENSES_OVER_INCOME_RATIO,
        ),
        # savings_potential stays 0 until it is derived from recommendations
        numbers=SignalNumbers(monthly_balance=round_places(inputs.monthly_balance(), 2), savings_potential=0.0),
    )
