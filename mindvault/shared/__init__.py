"""
Shared settings, schemas, errors and token counting.
"""

from .config import ChunkingConfig, DocumentConfig, Settings, SummarizerConfig, get_settings
from .errors import DocumentProcessingError, MindVaultError, SummarizationError
from .tokens import TiktokenTokenizer, Tokenizer, num_tokens

__all__ = [
    "Settings",
    "DocumentConfig",
    "ChunkingConfig",
    "SummarizerConfig",
    "get_settings",
    "MindVaultError",
    "DocumentProcessingError",
    "SummarizationError",
    "Tokenizer",
    "TiktokenTokenizer",
    "num_tokens",
]
