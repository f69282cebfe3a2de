from dataclasses import replace
from typing import Optional

from .constants import SURVIVAL_SAFE_MONTHS
from .schemas import ChangeSet, MonthlyInputs, SimulationDelta, SimulationResult
from .stress_score import calculate_stress
from .utils import round_places


def _compute_survival_months(inputs: MonthlyInputs) -> float:
    balance = inputs.monthly_balance()
    if balance >= 0:
        return SURVIVAL_SAFE_MONTHS
    burn = abs(balance)
    return inputs.savings_balance / burn


def apply_changes(base: MonthlyInputs, changes: Optional[ChangeSet]) -> MonthlyInputs:
    # shallow replacement: fields absent from changes keep the base value
    if not changes:
        return base
    return replace(base, **changes)


def simulate_scenario(base: MonthlyInputs, changes: Optional[ChangeSet] = None) -> SimulationResult:
    after_inputs = apply_changes(base, changes)

    base_stress = calculate_stress(base)
    after_stress = calculate_stress(after_inputs)

    return SimulationResult(
        base=base_stress,
        after=after_stress,
        delta=SimulationDelta(
            stress_score=round_places(after_stress.stress_score - base_stress.stress_score, 2),
            monthly_balance=round_places(after_inputs.monthly_balance() - base.monthly_balance(), 2),
            survival_months=round_places(_compute_survival_months(after_inputs), 2),
        ),
    )
