from typing import Any, Dict

from cashflow.constants import SURVIVAL_SAFE_MONTHS


def _scenario_fallback(facts: Dict[str, Any]) -> Dict[str, Any]:
    ds = facts.get("deltaStressScore") or 0
    dm = facts.get("deltaMonthlyBalance") or 0
    sm = facts.get("survivalMonths", SURVIVAL_SAFE_MONTHS)
    if sm == SURVIVAL_SAFE_MONTHS:
        tradeoff = "Cashflow is non-negative in this scenario."
    else:
        tradeoff = f"Estimated survival: {sm} months if income stops."
    return {
        "headline": f"Stress increases by {ds}" if ds > 0 else f"Stress changes by {ds}",
        "reason": f"Monthly balance changes by RM{dm}.",
        "tradeoff": tradeoff,
        "confidence": 60,
    }


def _stress_fallback(facts: Dict[str, Any]) -> Dict[str, Any]:
    score = facts.get("stressScore") or 0
    sources = facts.get("pressureSources")
    drivers = " + ".join(sources) if isinstance(sources, list) and sources else "key expenses"
    return {
        "headline": f"Stress score is {score}",
        "reason": f"Main pressure comes from {drivers}.",
        "tradeoff": "Reducing top pressure categories improves score fastest.",
        "confidence": 60,
    }


def _recommendation_fallback(facts: Dict[str, Any]) -> Dict[str, Any]:
    delta = facts.get("delta") or {}
    savings = delta.get("monthlyBalance") or facts.get("savings") or 0
    title = facts.get("title") or "budget"
    return {
        "context": (
            f"Optimizing your *{title}* is a proven way to free up cash. "
            f"Given your profile, this could save you *RM {savings}* monthly."
        ),
        "highlight_box": {
            "title": "KEY INSIGHT",
            "tags": ["Savings Potential", "Actionable"],
            "description": f"Moving to a more affordable option or reducing this expense saves *RM {savings}* per month.",
        },
        "outcome_headline": f"Estimated *RM {savings}* increase in monthly cash flow",
        "outcome_bullets": [
            f"Increased monthly cash buffer by RM {savings}",
            "Reduced financial stress score instantly",
            "Improved long-term savings rate",
        ],
        "tradeoff": "May require a one-time adjustment or slightly longer commute.",
        "confidence": 50,
    }


def fallback_explain(kind: str, facts: Dict[str, Any]) -> Dict[str, Any]:
    """Deterministic explanation used whenever the LLM is unavailable or its output is unusable."""
    facts = facts or {}
    if kind == "scenario":
        return _scenario_fallback(facts)
    if kind == "stress":
        return _stress_fallback(facts)
    if kind in ("recommendation", "optimize"):
        return _recommendation_fallback(facts)
    return {
        "headline": "Recommendation summary",
        "reason": f"Optimizing {facts.get('type') or 'expenses'} can increase your monthly balance by RM {facts.get('savings') or '...'}",
        "tradeoff": "Higher savings usually requires reducing discretionary spending.",
        "confidence": 55,
    }
