import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, List, Optional

from .schemas import ChangeSet, MonthlyInputs, Recommendation, StressResult
from .simulation import simulate_scenario
from .utils import round_half_up, round_places

logger = logging.getLogger(__name__)

DEFAULT_ENRICH_TIMEOUT = 8.0
PERSONALIZED_SUFFIX = " (AI Personalized)"
RENT_BURDEN_RATIO = 0.3

Explainer = Callable[[str, Dict[str, Any]], Dict[str, Any]]


@dataclass(frozen=True)
class CandidateRule:
    category: str
    title: str
    reason: str
    trigger: Callable[[MonthlyInputs, StressResult], bool]
    generate: Callable[[MonthlyInputs], ChangeSet]


def _rent_burden(inputs: MonthlyInputs) -> float:
    if inputs.income_monthly <= 0:
        return float("inf") if inputs.rent_monthly > 0 else 0.0
    return inputs.rent_monthly / inputs.income_monthly


def _housing_trigger(inputs: MonthlyInputs, stress: StressResult) -> bool:
    return "Rent" in stress.pressure_sources or _rent_burden(inputs) > RENT_BURDEN_RATIO


def _transport_trigger(inputs: MonthlyInputs, stress: StressResult) -> bool:
    return inputs.transport_monthly > 400 or "Transport" in stress.pressure_sources


def _subscriptions_trigger(inputs: MonthlyInputs, stress: StressResult) -> bool:
    return inputs.subscriptions_monthly > 50 or "Subscriptions" in stress.pressure_sources


def _food_trigger(inputs: MonthlyInputs, stress: StressResult) -> bool:
    return inputs.food_monthly > 800 or "Food" in stress.pressure_sources


def _debt_trigger(inputs: MonthlyInputs, stress: StressResult) -> bool:
    return (inputs.debt_monthly > 0 and stress.debt_ratio > 0.15) or "Debt" in stress.pressure_sources


CANDIDATE_RULES: List[CandidateRule] = [
    CandidateRule(
        category="housing",
        title="Move to Cheaper Unit / Get Housemate",
        reason="Rent consumes a large portion of your income. Reducing it by 25% has the biggest impact.",
        trigger=_housing_trigger,
        generate=lambda i: {"rent_monthly": round_half_up(i.rent_monthly * 0.75)},
    ),
    CandidateRule(
        category="housing",
        title="Move Further Out (Lower Rent, Higher Transport)",
        reason="Moving to a cheaper area can save significantly on rent, even with slightly higher transport costs.",
        trigger=_housing_trigger,
        generate=lambda i: {
            "rent_monthly": round_half_up(i.rent_monthly * 0.6),
            "transport_monthly": i.transport_monthly + 150,
        },
    ),
    CandidateRule(
        category="transport",
        title="Optimize Commute (Public Transit pass)",
        reason="Switching to monthly passes or carpooling can reduce transport costs by ~30%.",
        trigger=_transport_trigger,
        generate=lambda i: {"transport_monthly": round_half_up(i.transport_monthly * 0.7)},
    ),
    CandidateRule(
        category="lifestyle",
        title="Audit Subscriptions",
        reason="Cutting unused subscriptions is an easy win for immediate cash flow.",
        trigger=_subscriptions_trigger,
        generate=lambda i: {"subscriptions_monthly": round_half_up(i.subscriptions_monthly * 0.5)},
    ),
    CandidateRule(
        category="lifestyle",
        title="Cook More Often",
        reason="Reducing dining out frequency can save ~20% on food costs.",
        trigger=_food_trigger,
        generate=lambda i: {"food_monthly": round_half_up(i.food_monthly * 0.8)},
    ),
    CandidateRule(
        category="debt",
        title="Refinance High-Interest Debt",
        reason="Lowering monthly debt obligations improves cash flow stability.",
        trigger=_debt_trigger,
        generate=lambda i: {"debt_monthly": round_half_up(i.debt_monthly * 0.85)},
    ),
]


def generate_candidates(
    base_inputs: MonthlyInputs,
    stress: StressResult,
    rules: Optional[List[CandidateRule]] = None,
) -> List[Recommendation]:
    candidates: List[Recommendation] = []
    for rule in rules if rules is not None else CANDIDATE_RULES:
        if not rule.trigger(base_inputs, stress):
            continue
        changes = rule.generate(base_inputs)
        result = simulate_scenario(base_inputs, changes)
        candidates.append(
            Recommendation(
                type=rule.category,
                title=rule.title,
                changes=changes,
                simulation_result=result,
                potential_savings=result.delta.monthly_balance,
                reason=rule.reason,
            )
        )
    return candidates


def is_improvement(rec: Recommendation) -> bool:
    delta = rec.simulation_result.delta
    return delta.stress_score < 0 or delta.monthly_balance > 0


def rank_recommendations(recs: List[Recommendation]) -> List[Recommendation]:
    return sorted(recs, key=lambda r: (r.simulation_result.delta.stress_score, -r.potential_savings))


def dedupe_by_category(recs: List[Recommendation]) -> List[Recommendation]:
    seen = set()
    out: List[Recommendation] = []
    for rec in recs:
        if rec.type not in seen:
            out.append(rec)
            seen.add(rec.type)
    return out


def select_recommendations(
    base_inputs: MonthlyInputs,
    stress: StressResult,
    rules: Optional[List[CandidateRule]] = None,
) -> List[Recommendation]:
    """Deterministic part of the search: generate, filter, rank, dedupe."""
    candidates = generate_candidates(base_inputs, stress, rules)
    accepted = [rec for rec in candidates if is_improvement(rec)]
    return dedupe_by_category(rank_recommendations(accepted))


async def _personalize(
    best: Recommendation,
    stress: StressResult,
    explain: Explainer,
    timeout: float,
) -> Recommendation:
    facts = {
        "title": best.title,
        "savings": best.potential_savings,
        "currentStress": stress.stress_score,
        "projectedStress": best.simulation_result.after.stress_score,
        "type": best.type,
    }
    # shut down without waiting: a stalled explainer must not delay asyncio.run() returning
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="enrich")
    loop = asyncio.get_running_loop()
    try:
        explanation = await asyncio.wait_for(loop.run_in_executor(executor, explain, "optimize", facts), timeout)
    except asyncio.TimeoutError:
        logger.warning("Recommendation personalization timed out after %.1fs", timeout)
        return best
    except Exception:
        logger.warning("Failed to personalize recommendation", exc_info=True)
        return best
    finally:
        executor.shutdown(wait=False)

    if isinstance(explanation, dict) and explanation.get("reason"):
        return replace(best, reason=f"{explanation['reason']}{PERSONALIZED_SUFFIX}")
    return best


async def optimize(
    base_inputs: MonthlyInputs,
    stress: StressResult,
    explain: Optional[Explainer] = None,
    timeout: float = DEFAULT_ENRICH_TIMEOUT,
) -> List[Recommendation]:
    recs = select_recommendations(base_inputs, stress)
    if recs and explain is not None:
        recs[0] = await _personalize(recs[0], stress, explain, timeout)
    return recs


def total_savings(recs: List[Recommendation]) -> float:
    return round_places(sum(rec.potential_savings for rec in recs), 2)
