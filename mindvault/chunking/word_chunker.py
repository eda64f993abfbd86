"""
Token-budget word chunking.

Packs space-delimited words greedily into chunks that stay under a
per-chunk token budget. No structure (markdown, sentences) is inspected;
the budget is the only boundary rule.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from mindvault.shared.tokens import TiktokenTokenizer, Tokenizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Chunk:
    """A contiguous piece of a document's normalized text."""

    content: str
    token_count: int


def chunk_text(
    text: str,
    max_tokens: int = 1000,
    tokenizer: Optional[Tokenizer] = None,
) -> List[Chunk]:
    """
    Split normalized text into chunks of at most ``max_tokens`` tokens.

    Each word is costed as ``word + " "``. A word is appended to the open
    buffer unless that would push the buffer past ``max_tokens``, in which
    case the buffer is closed and the word starts the next one. A word that
    alone costs more than ``max_tokens`` becomes its own oversized chunk.

    Args:
        text: Normalized text
        max_tokens: Token budget per chunk
        tokenizer: Token counter (cl100k_base by default)

    Returns:
        Chunks in document order; empty for empty text
    """
    tokenizer = tokenizer or TiktokenTokenizer()

    chunks: List[Chunk] = []
    current: List[str] = []
    current_tokens = 0

    for word in text.split(" "):
        if not word:
            continue

        word_tokens = len(tokenizer.encode(word + " "))

        if current and current_tokens + word_tokens > max_tokens:
            chunks.append(_finalize_chunk(current, tokenizer))
            current = []
            current_tokens = 0

        current.append(word)
        current_tokens += word_tokens

    if current:
        chunks.append(_finalize_chunk(current, tokenizer))

    oversized = sum(1 for c in chunks if c.token_count > max_tokens)
    if oversized:
        logger.debug(f"{oversized} chunk(s) hold a single word over {max_tokens} tokens")

    return chunks


def _finalize_chunk(words: List[str], tokenizer: Tokenizer) -> Chunk:
    """Create a Chunk from buffered words."""
    content = " ".join(words).strip()
    return Chunk(content=content, token_count=len(tokenizer.encode(content)))
