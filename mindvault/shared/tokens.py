"""
Token counting.

Every budget in MindVault is measured in tokens of a tiktoken encoding.
The encoding is loaded on first use, not at import time, because tiktoken
fetches the BPE ranks the first time an encoding is requested.
"""

from functools import lru_cache
from typing import Optional, Protocol, Sequence, runtime_checkable

import tiktoken


@runtime_checkable
class Tokenizer(Protocol):
    """Anything with a deterministic ``encode``; only the length is used."""

    def encode(self, text: str) -> Sequence[int]:
        ...


@lru_cache(maxsize=None)
def get_encoding(encoding_name: str = "cl100k_base") -> tiktoken.Encoding:
    """Load (once) and return a tiktoken encoding."""
    return tiktoken.get_encoding(encoding_name)


class TiktokenTokenizer:
    """Tokenizer backed by a named tiktoken encoding."""

    def __init__(self, encoding_name: str = "cl100k_base"):
        self.encoding_name = encoding_name

    def encode(self, text: str) -> Sequence[int]:
        # Special-token text inside user documents is counted as plain text
        return get_encoding(self.encoding_name).encode(text, disallowed_special=())


def num_tokens(text: str, tokenizer: Optional[Tokenizer] = None) -> int:
    """Count tokens in text (cl100k_base unless a tokenizer is given)."""
    tokenizer = tokenizer or TiktokenTokenizer()
    return len(tokenizer.encode(text))
