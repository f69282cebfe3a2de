import json
from typing import Any, Callable, Dict


def format_currency(value: float) -> str:
    return f"RM {value:,.0f}"


def _facts_json(value: Any) -> str:
    return json.dumps(value, default=str)


def build_dashboard_prompt(facts: Dict[str, Any]) -> str:
    return f"""
Type: Dashboard Insight
Context: User overview.
Facts: {_facts_json(facts)}

Output JSON:
{{
  "headline": "Short, punchy summary of financial health (e.g., 'Stable but Low Buffer').",
  "top_drivers": [{{ "name": "Category", "value": "Amount or %", "why": "Brief reason" }}],
  "next_moves": [{{ "title": "Action", "impact_rm": 0, "difficulty": "Easy/Med/Hard", "steps": ["Step 1", "Step 2"] }}],
  "warnings": ["Specific risk 1", "Specific risk 2"]
}}
""".strip()


def build_recommendation_prompt(facts: Dict[str, Any]) -> str:
    delta = facts.get("delta") or {}
    savings = delta.get("monthlyBalance", facts.get("savings"))
    savings_text = format_currency(savings) if isinstance(savings, (int, float)) else "RM ..."
    stress_line = ""
    if "currentStress" in facts and "projectedStress" in facts:
        stress_line = f"Stress score moves from {facts['currentStress']} to {facts['projectedStress']} (0-100, lower is better)."
    return f"""
Type: Recommendation Specific
Context: Deep dive into a specific optimization for a user with these profile details: {_facts_json(facts.get('profile') or {})}.
The optimization is: {facts.get('title', 'budget optimization')}
The category is: {facts.get('type', 'expenses')}
The deterministic reason is: {facts.get('reason', 'n/a')}
Financial Impact: {savings_text} per month. {stress_line}

Output JSON with specific structure for a rich UI card:
{{
  "context": "A very brief (max 2 sentences) personalized explanation. Use *single asterisks* for key terms.",
  "highlight_box": {{
    "title": "KEY INSIGHT",
    "tags": ["Savings Potential", "Actionable"],
    "description": "A punchy, actionable 1-sentence insight."
  }},
  "outcome_headline": "Estimated *{savings_text}* increase in monthly cash flow",
  "outcome_bullets": ["Increased monthly cash buffer by {savings_text}", "Reduced financial stress score", "Enhanced financial resilience"],
  "tradeoff": "The downside, like 'Tradeoff: Increased travel time by 20 mins.'",
  "reason": "One sentence explaining why this change fits the user."
}}
IMPORTANT:
- EXTREME BREVITY. Max 2 sentences total in 'context'.
- FORMATTING: Use *single asterisks* for bolding. Do NOT use double asterisks.
""".strip()


PROMPT_BUILDERS: Dict[str, Callable[[Dict[str, Any]], str]] = {
    "dashboard": build_dashboard_prompt,
    "recommendation": build_recommendation_prompt,
}


def build_explain_prompt(prompt_type: str, facts: Dict[str, Any]) -> str:
    body = PROMPT_BUILDERS[prompt_type](facts)
    return f"""
You are a financial assistant for cost-of-living planning.
Your goal is to provide actionable, personalized insights about household cash flow.
Do NOT invent numbers. Use only the provided facts.
Do NOT provide investment advice, stock picks, or promises of returns.
Use "RM" for currency.

{body}

Return ONLY valid JSON.
""".strip()
