import asyncio

import pytest

from mindvault.processing.document_processor import DocumentProcessor
from mindvault.shared.config import DocumentConfig


class WordTokenizer:
    """One token per whitespace-separated word, times ``cost``."""

    def __init__(self, cost: int = 1):
        self.cost = cost

    def encode(self, text):
        return [0] * (len(text.split()) * self.cost)


class CharTokenizer:
    """One token per non-whitespace character."""

    def encode(self, text):
        return [ord(c) for c in text if not c.isspace()]


class FakeSummarizer:
    def __init__(self, summary="short summary", error=None, delay=0.0):
        self.summary = summary
        self.error = error
        self.delay = delay
        self.calls = []
        self.cancelled = False

    async def summarize(self, content):
        self.calls.append(content)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        if self.error is not None:
            raise self.error
        return self.summary


def words(n, prefix="w"):
    return " ".join(f"{prefix}{i}" for i in range(n))


@pytest.fixture
def word_tokenizer():
    return WordTokenizer()


@pytest.fixture
def summarizer():
    return FakeSummarizer()


@pytest.fixture
def processor(summarizer, word_tokenizer):
    return DocumentProcessor(
        summarizer=summarizer,
        tokenizer=word_tokenizer,
        config=DocumentConfig(max_tokens_per_chunk=1000, max_total_tokens=4000),
        summary_timeout=1.0,
    )
