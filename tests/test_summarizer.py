import asyncio
from types import SimpleNamespace

import pytest

from mindvault.deployment.circuit_breaker import CircuitOpenError
from mindvault.shared.config import SummarizerConfig
from mindvault.shared.errors import SummarizationError
from mindvault.summarization import summarizer as summarizer_module
from mindvault.summarization.summarizer import LLMSummarizer


class FakeCompletions:
    def __init__(self, content="Acme sells widgets.", error=None):
        self.content = content
        self.error = error
        self.requests = []

    async def create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def fake_client(completions):
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


@pytest.fixture(autouse=True)
def no_truncation(monkeypatch):
    monkeypatch.setattr(summarizer_module, "truncate_for_summary", lambda text, *args: text)


def make_summarizer(completions, **config):
    config.setdefault("api_key", "test-key")
    return LLMSummarizer(config=SummarizerConfig(**config), client=fake_client(completions))


def test_summarize_returns_completion_text():
    completions = FakeCompletions(content="  Acme sells widgets.  ")
    summarizer = make_summarizer(completions, model="test-model")

    summary = asyncio.run(summarizer.summarize("Acme Corp document text"))

    assert summary == "Acme sells widgets."
    request = completions.requests[0]
    assert request["model"] == "test-model"
    assert "Acme Corp document text" in request["messages"][-1]["content"]


def test_empty_completion_raises():
    summarizer = make_summarizer(FakeCompletions(content=""))

    with pytest.raises(SummarizationError):
        asyncio.run(summarizer.summarize("text"))


def test_missing_api_key_raises():
    summarizer = LLMSummarizer(config=SummarizerConfig(api_key=""))

    with pytest.raises(SummarizationError):
        asyncio.run(summarizer.summarize("text"))


def test_repeated_failures_open_the_circuit():
    completions = FakeCompletions(error=ConnectionError("unreachable"))
    summarizer = make_summarizer(completions, failure_threshold=2)

    for _ in range(2):
        with pytest.raises(ConnectionError):
            asyncio.run(summarizer.summarize("text"))

    with pytest.raises(CircuitOpenError):
        asyncio.run(summarizer.summarize("text"))
    assert len(completions.requests) == 2


def test_truncation_uses_configured_encoding(monkeypatch):
    seen = []

    def record(text, max_tokens, encoding_name):
        seen.append((max_tokens, encoding_name))
        return text

    monkeypatch.setattr(summarizer_module, "truncate_for_summary", record)
    summarizer = make_summarizer(
        FakeCompletions(), encoding_name="o200k_base", max_input_tokens=500
    )

    asyncio.run(summarizer.summarize("text"))

    assert seen == [(500, "o200k_base")]
