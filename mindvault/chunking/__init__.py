"""
Chunking Module.

Two strategies, for two consumers:
- Token-budget word chunking: feeds context selection, every chunk is
  measured with the tokenizer
- Character windows with overlap: feeds keyword-focused preparation of
  large uploads

Usage:
    from mindvault.chunking import chunk_text, chunk_document

    chunks = chunk_text(normalized_text, max_tokens=1000)
    windows = chunk_document(raw_document, max_chunk_size=5000, overlap_size=200)
"""

from .overlap_chunker import DocumentChunk, chunk_document
from .word_chunker import Chunk, chunk_text

__all__ = [
    "Chunk",
    "chunk_text",
    "DocumentChunk",
    "chunk_document",
]
