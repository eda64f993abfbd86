"""
Document Processing Module.

Usage:
    from mindvault.processing import DocumentProcessor

    processor = DocumentProcessor()
    processed = await processor.process_many(documents)
"""

from .document_processor import (
    BatchResult,
    DocumentProcessor,
    ProcessedDocument,
    ProcessingStats,
)

__all__ = [
    "DocumentProcessor",
    "ProcessedDocument",
    "ProcessingStats",
    "BatchResult",
]
