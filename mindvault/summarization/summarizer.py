"""
LLM summarization of oversized documents.

When a document is larger than the whole context budget, the engine keeps
a condensed version alongside its chunks. The summary comes from an
OpenAI-compatible chat-completions endpoint (Groq by default).
"""

import asyncio
import logging
from typing import Optional, Protocol, runtime_checkable

from openai import AsyncOpenAI

from mindvault.deployment.circuit_breaker import CircuitBreaker
from mindvault.shared.config import SummarizerConfig, get_settings
from mindvault.shared.errors import SummarizationError
from mindvault.shared.tokens import get_encoding

logger = logging.getLogger(__name__)


SUMMARY_SYSTEM_PROMPT = (
    "You are an investment analyst assistant. You write faithful, compact "
    "summaries of company documents for later question answering."
)

SUMMARY_PROMPT = """Summarize the document below so it can stand in for the full text when answering questions about it.

Document:
{content}

Instructions:
- Keep company names, figures, dates and metrics exactly as written
- Cover financials, market, team, product and risks when present
- Do not add information that is not in the document

Summary:"""


@runtime_checkable
class Summarizer(Protocol):
    """Produces a condensed representation of a document."""

    async def summarize(self, content: str) -> str:
        ...


def truncate_for_summary(text: str, max_tokens: int, encoding_name: str = "cl100k_base") -> str:
    """
    Keep the start and end of a document that exceeds the summarizer input.

    Args:
        text: Document text
        max_tokens: Maximum input tokens
        encoding_name: tiktoken encoding used for measuring

    Returns:
        Text of at most ~max_tokens tokens
    """
    enc = get_encoding(encoding_name)
    tokens = enc.encode(text, disallowed_special=())

    if len(tokens) <= max_tokens:
        return text

    # Keep first 60%, last 40%, skip middle
    head = int(max_tokens * 0.6)
    tail = max_tokens - head
    return (
        f"{enc.decode(tokens[:head])}\n\n[...content truncated...]\n\n"
        f"{enc.decode(tokens[-tail:])}"
    )


class LLMSummarizer:
    """
    Summarizer backed by a chat-completions model.

    The circuit breaker belongs to this instance, so one failing provider
    only fast-fails callers that share the same summarizer.

    Usage:
        summarizer = LLMSummarizer()
        summary = await summarizer.summarize(document_text)
    """

    def __init__(
        self,
        config: Optional[SummarizerConfig] = None,
        client: Optional[AsyncOpenAI] = None,
        breaker: Optional[CircuitBreaker] = None,
    ):
        """
        Args:
            config: Summarizer settings (from environment if None)
            client: Pre-built async OpenAI client
            breaker: Circuit breaker guarding the endpoint
        """
        self.config = config or get_settings().summarizer
        self._client = client
        self.breaker = breaker or CircuitBreaker(
            name="summarizer",
            failure_threshold=self.config.failure_threshold,
            reset_timeout=self.config.reset_timeout,
        )

    @property
    def client(self) -> AsyncOpenAI:
        """Lazily build the API client."""
        if self._client is None:
            if not self.config.api_key:
                raise SummarizationError("No API key configured for the summarizer")
            self._client = AsyncOpenAI(
                api_key=self.config.api_key,
                base_url=self.config.base_url,
                timeout=self.config.timeout,
            )
        return self._client

    async def summarize(self, content: str) -> str:
        """
        Summarize document content.

        Raises:
            SummarizationError: Provider returned no usable summary
            CircuitOpenError: Provider is failing and the circuit is open
        """
        # CPU-bound on large documents
        truncated = await asyncio.to_thread(
            truncate_for_summary,
            content,
            self.config.max_input_tokens,
            self.config.encoding_name,
        )
        prompt = SUMMARY_PROMPT.format(content=truncated)
        return await self.breaker.call(self._complete, prompt)

    async def _complete(self, prompt: str) -> str:
        response = await self.client.chat.completions.create(
            model=self.config.model,
            messages=[
                {"role": "system", "content": SUMMARY_SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=self.config.temperature,
            max_tokens=self.config.max_tokens,
        )

        if not response.choices or not response.choices[0].message.content:
            raise SummarizationError("Summarizer returned an empty completion")

        summary = response.choices[0].message.content.strip()
        logger.debug(f"Summary generated with {self.config.model} ({len(summary)} chars)")
        return summary
