"""
Tests for the provider client, its retry policy and the batch runner.
"""

import asyncio

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from agents.ai_model_tester_agent import LLMQueryClient, query_provider_batch, run_ai_model_testing_workflow
from agents.ai_model_tester_agent.utils import is_rate_limit_error, response_text
from config.settings import settings
from tests.helpers import FakeQueryClient, ScriptedChatModel
from utils.exceptions import (
    ProviderError,
    ProviderRateLimited,
    ProviderTimeout,
    ProviderUnconfigured
)


@pytest.fixture(autouse=True)
def no_retry_delay(monkeypatch):
    monkeypatch.setattr(settings, "RETRY_DELAY", 0.0)


def test_query_returns_answer_text():
    client = LLMQueryClient("chatgpt", chat_model=FakeListChatModel(responses=["1. Asana\n2. Zylo"]))
    assert asyncio.run(client.query("Best project management tools?")) == "1. Asana\n2. Zylo"


def test_rate_limited_call_is_not_retried():
    model = ScriptedChatModel([Exception("Error code: 429 - rate limit exceeded"), "never reached"])
    client = LLMQueryClient("chatgpt", chat_model=model)
    with pytest.raises(ProviderRateLimited):
        asyncio.run(client.query("q"))
    assert model.calls == 1


def test_transient_failure_is_retried_once():
    model = ScriptedChatModel([Exception("connection reset"), "Asana is great"])
    client = LLMQueryClient("claude", chat_model=model)
    assert asyncio.run(client.query("q")) == "Asana is great"
    assert model.calls == 2


def test_persistent_failure_raises_after_one_retry():
    model = ScriptedChatModel([Exception("server error")])
    client = LLMQueryClient("claude", chat_model=model)
    with pytest.raises(ProviderError):
        asyncio.run(client.query("q"))
    assert model.calls == 2


def test_slow_answer_times_out():
    model = ScriptedChatModel([1.0])
    client = LLMQueryClient("chatgpt", chat_model=model, timeout=0.01)
    with pytest.raises(ProviderTimeout):
        asyncio.run(client.query("q"))


def test_empty_answer_is_an_error():
    model = ScriptedChatModel(["   "])
    client = LLMQueryClient("chatgpt", chat_model=model)
    with pytest.raises(ProviderError):
        asyncio.run(client.query("q"))


def test_missing_key_means_unconfigured(monkeypatch):
    monkeypatch.setattr(settings, "OPENAI_API_KEY", None)
    client = LLMQueryClient("chatgpt")
    assert not client.is_configured
    with pytest.raises(ProviderUnconfigured):
        asyncio.run(client.query("q"))


def test_rate_limit_detection():
    assert is_rate_limit_error(Exception("429 Too Many Requests"))
    assert is_rate_limit_error(Exception("You exceeded your current quota"))
    assert not is_rate_limit_error(Exception("connection reset"))


def test_response_text_flattens_content_blocks():
    assert response_text("plain") == "plain"
    assert response_text([{"type": "text", "text": "a"}, {"type": "tool_use"}, "b"]) == "ab"
    assert response_text(None) == ""


def test_batch_keeps_query_order_and_marks_failures():
    def answer(text):
        if text == "bad":
            raise ValueError("boom")
        return f"answer to {text}"

    client = FakeQueryClient("chatgpt", answers=answer)
    responses = asyncio.run(query_provider_batch(client, ["one", "bad", "two"]))
    assert responses == ["answer to one", None, "answer to two"]


def test_batch_cancels_queries_past_the_overall_timeout():
    client = FakeQueryClient("claude", answers="late", delay=5.0, overall_timeout=0.05)
    responses = asyncio.run(query_provider_batch(client, ["a", "b", "c"]))
    assert responses == [None, None, None]
    assert client.cancelled == 3


def test_workflow_skips_unconfigured_providers():
    clients = {
        "chatgpt": FakeQueryClient("chatgpt", answers="Asana and Zylo"),
        "claude": FakeQueryClient("claude", configured=False),
    }
    result = asyncio.run(run_ai_model_testing_workflow(["q1", "q2"], clients=clients))
    assert result["model_responses"]["chatgpt"] == ["Asana and Zylo", "Asana and Zylo"]
    assert result["model_responses"]["claude"] == [None, None]
    assert result["skipped_providers"] == ["claude"]
    assert clients["claude"].calls == []
