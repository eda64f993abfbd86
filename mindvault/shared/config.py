"""
Configuration module for MindVault.
Manages all environment variables and settings with validation.
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional


@dataclass
class DocumentConfig:
    """Token budgets for document processing and context selection."""
    max_tokens_per_chunk: int = field(
        default_factory=lambda: int(os.getenv("MAX_TOKENS_PER_CHUNK", "1000"))
    )
    max_total_tokens: int = field(
        default_factory=lambda: int(os.getenv("MAX_TOTAL_TOKENS", "4000"))
    )
    encoding_name: str = field(
        default_factory=lambda: os.getenv("TOKENIZER_ENCODING", "cl100k_base")
    )

    def __post_init__(self):
        if self.max_tokens_per_chunk <= 0:
            raise ValueError("max_tokens_per_chunk must be positive")
        if self.max_total_tokens <= 0:
            raise ValueError("max_total_tokens must be positive")


@dataclass
class ChunkingConfig:
    """Character-window chunking used for question-focused preparation."""
    max_chunk_size: int = 5000
    overlap_size: int = 200
    prepare_threshold: int = 10000


@dataclass
class SummarizerConfig:
    """LLM summarizer configuration (any OpenAI-compatible endpoint)."""
    model: str = field(
        default_factory=lambda: os.getenv("SUMMARIZER_MODEL", "llama-3.1-8b-instant")
    )
    base_url: Optional[str] = field(
        default_factory=lambda: os.getenv("SUMMARIZER_BASE_URL", "https://api.groq.com/openai/v1")
    )
    api_key: str = field(
        default_factory=lambda: os.getenv("SUMMARIZER_API_KEY", os.getenv("GROQ_API_KEY", ""))
    )
    timeout: float = field(
        default_factory=lambda: float(os.getenv("SUMMARIZER_TIMEOUT", "30"))
    )
    max_tokens: int = 1024
    max_input_tokens: int = 12000
    encoding_name: str = field(
        default_factory=lambda: os.getenv("TOKENIZER_ENCODING", "cl100k_base")
    )
    temperature: float = 0.2

    # Circuit breaker
    failure_threshold: int = 3
    reset_timeout: float = 30.0


@dataclass
class Settings:
    """Main application settings loaded from environment."""

    DEBUG: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    LOG_LEVEL: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    # Nested configs
    documents: DocumentConfig = field(default_factory=DocumentConfig)
    chunking: ChunkingConfig = field(default_factory=ChunkingConfig)
    summarizer: SummarizerConfig = field(default_factory=SummarizerConfig)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
