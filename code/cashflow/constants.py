from typing import List, Tuple

RISK_BANDS: List[Tuple[float, str]] = [
    (33.0, "Low"),
    (66.0, "Moderate"),
    (100.0, "High"),
]

WEIGHT_EXPENSE = 0.55
WEIGHT_BUFFER = 0.25
WEIGHT_DEBT = 0.20

# (ratio, sub-score) breakpoints; lower sub-score is healthier
EXPENSE_RATIO_CURVE: List[Tuple[float, float]] = [
    (0.0, 0.0),
    (0.5, 10.0),
    (0.7, 30.0),
    (0.85, 60.0),
    (1.0, 85.0),
    (1.2, 100.0),
]
DEBT_RATIO_CURVE: List[Tuple[float, float]] = [
    (0.0, 0.0),
    (0.1, 10.0),
    (0.2, 35.0),
    (0.35, 70.0),
    (0.5, 100.0),
]
BUFFER_MONTHS_CURVE: List[Tuple[float, float]] = [
    (0.0, 100.0),
    (1.0, 70.0),
    (3.0, 35.0),
    (6.0, 10.0),
    (12.0, 0.0),
]

NO_INCOME_RATIO = 999.0
NO_EXPENSES_BUFFER_MONTHS = 12.0
SURVIVAL_SAFE_MONTHS = 999.0

PRESSURE_MIN_SHARE = 0.05
PRESSURE_TOP_N = 2

OVERSPEND_FOOD_SHARE = 0.25
OVERSPEND_TRANSPORT_SHARE = 0.18
OVERSPEND_SUBSCRIPTIONS_SHARE = 0.08

LOW_BUFFER_MONTHS = 2.0
HIGH_DEBT_RATIO = 0.2
EXPENSES_OVER_INCOME_RATIO = 1.0
