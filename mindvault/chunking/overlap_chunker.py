"""
Character-window chunking with overlap.

Used when preparing large uploads for a specific question: documents are
cut into fixed-size character windows that prefer to end on a sentence
or line boundary, and consecutive windows share a short overlap so facts
that straddle a boundary survive in at least one chunk.
"""

import logging
from dataclasses import dataclass
from typing import List

from mindvault.ingestion.normalize import RawDocument

logger = logging.getLogger(__name__)

# A window only breaks early at a boundary found past this fraction of it
BOUNDARY_MIN_RATIO = 0.8


@dataclass(frozen=True)
class DocumentChunk:
    """A character window of a document with its position."""

    content: str
    document_name: str
    document_type: str
    chunk_index: int
    start_char: int
    end_char: int


def chunk_document(
    document: RawDocument,
    max_chunk_size: int = 5000,
    overlap_size: int = 200,
) -> List[DocumentChunk]:
    """
    Chunk a document into overlapping character windows.

    Args:
        document: Document to split
        max_chunk_size: Maximum characters per window
        overlap_size: Characters shared between consecutive windows

    Returns:
        Chunks in document order
    """
    if max_chunk_size <= 0:
        raise ValueError("max_chunk_size must be positive")
    if overlap_size < 0:
        raise ValueError("overlap_size must not be negative")

    content = document.content or ""
    total_length = len(content)

    if total_length <= max_chunk_size:
        return [
            DocumentChunk(
                content=content,
                document_name=document.name,
                document_type=document.type,
                chunk_index=0,
                start_char=0,
                end_char=total_length,
            )
        ]

    chunks: List[DocumentChunk] = []
    start = 0

    while start < total_length:
        end = min(start + max_chunk_size, total_length)
        window = content[start:end]

        # Try to break at sentence boundaries
        if end < total_length:
            break_point = max(window.rfind("."), window.rfind("\n"))
            if break_point > max_chunk_size * BOUNDARY_MIN_RATIO:
                window = window[: break_point + 1]

        window_end = start + len(window)
        text = window.strip()
        if text:
            chunks.append(
                DocumentChunk(
                    content=text,
                    document_name=document.name,
                    document_type=document.type,
                    chunk_index=len(chunks),
                    start_char=start,
                    end_char=window_end,
                )
            )

        next_start = window_end
        if next_start < total_length and overlap_size > 0:
            next_start = max(0, next_start - overlap_size)
        # Overlap may never stall the scan
        start = next_start if next_start > start else window_end

    logger.debug(f"{document.name} split into {len(chunks)} overlapping chunks")
    return chunks
