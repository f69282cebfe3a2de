import json

import requests

from advisor.ai import explainer, llm_client
from advisor.core.fallback import fallback_explain
from advisor.core.prompts import build_explain_prompt

RECOMMENDATION_FACTS = {
    "title": "Audit Subscriptions",
    "type": "lifestyle",
    "savings": 40,
    "delta": {"monthlyBalance": 40},
}

GOOD_CARD = {
    "context": "Cancel the streaming bundle you rarely use.",
    "highlight_box": {"title": "KEY INSIGHT", "tags": ["Savings"], "description": "Save *RM 40*."},
    "outcome_headline": "Estimated *RM 40* increase in monthly cash flow",
    "outcome_bullets": ["a", "b", "c"],
    "tradeoff": "Fewer shows.",
    "reason": "Two of your subscriptions overlap.",
}


def _completion(content: str):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def _use_fake_llm(monkeypatch, content=None, error=None):
    calls = []

    def fake_query(prompt, max_tokens=None, temperature=None):
        calls.append(prompt)
        if error is not None:
            raise error
        return _completion(content)

    monkeypatch.setattr(llm_client, "LLM_API_KEY", "test-key")
    monkeypatch.setattr(llm_client, "query_llm", fake_query)
    return calls


def test_missing_key_uses_fallback():
    out = explainer.explain("optimize", RECOMMENDATION_FACTS)
    assert out == fallback_explain("optimize", RECOMMENDATION_FACTS)


def test_valid_llm_json_is_returned(monkeypatch):
    calls = _use_fake_llm(monkeypatch, content="```json\n" + json.dumps(GOOD_CARD) + "\n```")
    out = explainer.explain("optimize", RECOMMENDATION_FACTS)
    assert out == GOOD_CARD
    assert "Type: Recommendation Specific" in calls[0]
    assert "Audit Subscriptions" in calls[0]


def test_missing_required_key_uses_fallback(monkeypatch):
    card = {k: v for k, v in GOOD_CARD.items() if k != "tradeoff"}
    _use_fake_llm(monkeypatch, content=json.dumps(card))
    out = explainer.explain("recommendation", RECOMMENDATION_FACTS)
    assert out == fallback_explain("recommendation", RECOMMENDATION_FACTS)


def test_unparseable_output_uses_fallback(monkeypatch):
    _use_fake_llm(monkeypatch, content="Sorry, I cannot help with that {not json}")
    out = explainer.explain("dashboard", {"stressScore": 40})
    assert out == fallback_explain("dashboard", {"stressScore": 40})


def test_llm_error_uses_fallback(monkeypatch):
    _use_fake_llm(monkeypatch, error=RuntimeError("connection reset"))
    out = explainer.explain("optimize", RECOMMENDATION_FACTS)
    assert out["confidence"] == 50


def test_types_without_prompt_skip_the_llm(monkeypatch):
    calls = _use_fake_llm(monkeypatch, content=json.dumps(GOOD_CARD))
    out = explainer.explain("stress", {"stressScore": 50, "pressureSources": ["Rent"]})
    assert calls == []
    assert out["headline"] == "Stress score is 50"


def test_parse_and_validate_extracts_outer_object():
    text = 'Here you go: {"headline": "Stable", "top_drivers": [], "next_moves": [], "warnings": []} Thanks!'
    assert explainer.parse_and_validate(text, "dashboard")["headline"] == "Stable"
    assert explainer.parse_and_validate("no braces here", "dashboard") is None
    assert explainer.parse_and_validate('{"headline": "x"}', "dashboard") is None
    assert explainer.parse_and_validate('{"anything": 1}', "other") == {"anything": 1}


def test_prompt_mentions_currency_and_json_only():
    prompt = build_explain_prompt("dashboard", {"stressScore": 61.2})
    assert '"stressScore": 61.2' in prompt
    assert 'Use "RM" for currency.' in prompt
    assert prompt.endswith("Return ONLY valid JSON.")


def test_extract_text_shapes():
    assert llm_client.extract_text(_completion("  hi  ")) == "hi"
    assert llm_client.extract_text({"choices": [{"text": "legacy"}]}) == "legacy"
    assert llm_client.extract_text({"choices": []}) == ""


def test_check_llm_online(monkeypatch):
    class FakeResponse:
        status_code = 404

    monkeypatch.setattr(llm_client.requests, "get", lambda *args, **kwargs: FakeResponse())
    assert llm_client.check_llm_online(timeout=0.1) is True

    def refuse(*args, **kwargs):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(llm_client.requests, "get", refuse)
    assert llm_client.check_llm_online(timeout=0.1) is False
