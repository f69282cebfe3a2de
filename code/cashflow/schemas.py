from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# wire key -> attribute name, in canonical order
PAYLOAD_FIELDS: Dict[str, str] = {
    "incomeMonthly": "income_monthly",
    "rentMonthly": "rent_monthly",
    "utilitiesMonthly": "utilities_monthly",
    "transportMonthly": "transport_monthly",
    "foodMonthly": "food_monthly",
    "debtMonthly": "debt_monthly",
    "subscriptionsMonthly": "subscriptions_monthly",
    "savingsBalance": "savings_balance",
}
ATTRIBUTE_FIELDS: Dict[str, str] = {attr: key for key, attr in PAYLOAD_FIELDS.items()}

# pressure-source name -> attribute name
EXPENSE_CATEGORIES: Dict[str, str] = {
    "Rent": "rent_monthly",
    "Utilities": "utilities_monthly",
    "Transport": "transport_monthly",
    "Food": "food_monthly",
    "Debt": "debt_monthly",
    "Subscriptions": "subscriptions_monthly",
}

ChangeSet = Dict[str, float]


@dataclass(frozen=True)
class MonthlyInputs:
    income_monthly: float = 0.0
    rent_monthly: float = 0.0
    utilities_monthly: float = 0.0
    transport_monthly: float = 0.0
    food_monthly: float = 0.0
    debt_monthly: float = 0.0
    subscriptions_monthly: float = 0.0
    savings_balance: float = 0.0

    def total_expenses(self) -> float:
        return sum(getattr(self, attr) for attr in EXPENSE_CATEGORIES.values())

    def monthly_balance(self) -> float:
        return self.income_monthly - self.total_expenses()

    def to_payload(self) -> Dict[str, float]:
        return {key: getattr(self, attr) for key, attr in PAYLOAD_FIELDS.items()}


@dataclass(frozen=True)
class NormalizeResult:
    ok: bool
    clean_inputs: Optional[MonthlyInputs] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class StressResult:
    stress_score: float
    risk_level: str
    expense_ratio: float
    buffer_months: float
    debt_ratio: float
    pressure_sources: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class RiskFlags:
    low_buffer: bool
    high_debt: bool
    expenses_over_income: bool


@dataclass(frozen=True)
class SignalNumbers:
    monthly_balance: float
    savings_potential: float = 0.0


@dataclass(frozen=True)
class SignalResult:
    overspending: Dict[str, bool]
    risk_flags: RiskFlags
    numbers: SignalNumbers


@dataclass(frozen=True)
class SimulationDelta:
    stress_score: float
    monthly_balance: float
    survival_months: float


@dataclass(frozen=True)
class SimulationResult:
    base: StressResult
    after: StressResult
    delta: SimulationDelta


@dataclass(frozen=True)
class Recommendation:
    type: str
    title: str
    changes: ChangeSet
    simulation_result: SimulationResult
    potential_savings: float
    reason: str


@dataclass(frozen=True)
class HousingOption:
    rent_monthly: float = 0.0
    transport_monthly: float = 0.0
    commute_time_mins: float = 0.0


@dataclass(frozen=True)
class TradeoffResult:
    cheaper_option: str
    monthly_cost_difference: float
    commute_time_difference: float
    insight: str


def to_payload_keys(changes: ChangeSet) -> Dict[str, float]:
    return {ATTRIBUTE_FIELDS.get(name, name): value for name, value in changes.items()}


def from_payload_keys(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {PAYLOAD_FIELDS[key]: value for key, value in payload.items() if key in PAYLOAD_FIELDS}
