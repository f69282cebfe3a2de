from typing import Any, Dict, Optional

from cashflow.schemas import Recommendation
from cashflow.utils import round_places

from .pipeline import Analysis


def _base_facts(analysis: Analysis) -> Dict[str, Any]:
    flags = analysis.signals.risk_flags
    return {
        "monthlyBalance": analysis.signals.numbers.monthly_balance,
        "stressScore": analysis.stress.stress_score,
        "pressureSources": list(analysis.stress.pressure_sources),
        "riskFlags": {
            "lowBuffer": flags.low_buffer,
            "highDebt": flags.high_debt,
            "expensesOverIncome": flags.expenses_over_income,
        },
    }


def build_insight_facts(
    kind: str,
    analysis: Analysis,
    recommendation: Optional[Recommendation] = None,
) -> Dict[str, Any]:
    """Compact, deterministic fact bundle handed to the explanation service.

    Only computed numbers go in; the LLM is told not to invent any others.
    """
    facts = _base_facts(analysis)

    if kind == "dashboard":
        facts["topOptimizations"] = [
            {"title": r.title, "type": r.type, "potentialSavings": r.potential_savings}
            for r in analysis.recommendations[:3]
        ]
        facts["survivalMonths"] = analysis.stress.buffer_months
        facts["profile"] = analysis.inputs.to_payload()
        return facts

    if kind == "recommendation" and recommendation is not None:
        delta = recommendation.simulation_result.delta
        facts.update(
            {
                "title": recommendation.title,
                "type": recommendation.type,
                "reason": recommendation.reason,
                "savings": recommendation.potential_savings,
                "delta": {"monthlyBalance": delta.monthly_balance, "stressScore": delta.stress_score},
                "profile": analysis.inputs.to_payload(),
                "recommendation": {
                    "title": recommendation.title,
                    "type": recommendation.type,
                    "savings": recommendation.potential_savings,
                    "prediction": {
                        "newBalance": round_places(analysis.signals.numbers.monthly_balance + recommendation.potential_savings, 2),
                        "stressDelta": f"{delta.stress_score:.2f}",
                    },
                },
            }
        )
    return facts

