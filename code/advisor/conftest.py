import pytest

from advisor.ai import llm_client


@pytest.fixture(autouse=True)
def no_llm_key(monkeypatch):
    # tests never reach a real model; individual tests opt back in with a fake key
    monkeypatch.setattr(llm_client, "LLM_API_KEY", None)
