import json
import logging
from typing import Any, Dict, List, Optional

from openai import RateLimitError

from advisor.ai import llm_client
from advisor.core.fallback import fallback_explain
from advisor.core.prompts import PROMPT_BUILDERS, build_explain_prompt

logger = logging.getLogger(__name__)

TYPE_ALIASES = {"optimize": "recommendation"}

REQUIRED_KEYS: Dict[str, List[str]] = {
    "dashboard": ["headline", "top_drivers", "next_moves", "warnings"],
    "recommendation": ["context", "outcome_headline", "outcome_bullets", "tradeoff"],
}


def parse_and_validate(text: str, prompt_type: str) -> Optional[Dict[str, Any]]:
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end < start:
        return None
    try:
        parsed = json.loads(text[start : end + 1])
    except json.JSONDecodeError:
        return None
    if not isinstance(parsed, dict):
        return None
    for key in REQUIRED_KEYS.get(prompt_type, []):
        if key not in parsed:
            return None
    return parsed


def explain(kind: str, facts: Dict[str, Any]) -> Dict[str, Any]:
    if not llm_client.has_api_key():
        logger.warning("LLM API key missing, using fallback explanation")
        return fallback_explain(kind, facts)

    prompt_type = TYPE_ALIASES.get(kind, kind)
    if prompt_type not in PROMPT_BUILDERS:
        logger.info("No prompt for explain type %r, using fallback explanation", kind)
        return fallback_explain(kind, facts)

    try:
        response = llm_client.query_llm(build_explain_prompt(prompt_type, facts))
    except RateLimitError:
        logger.warning("LLM rate limit exceeded, using fallback explanation")
        return fallback_explain(kind, facts)
    except Exception:
        logger.warning("LLM call failed, using fallback explanation", exc_info=True)
        return fallback_explain(kind, facts)

    parsed = parse_and_validate(llm_client.extract_text(response), prompt_type)
    if parsed is None:
        logger.warning("LLM returned unusable output for %r, using fallback explanation", kind)
        return fallback_explain(kind, facts)
    return parsed
