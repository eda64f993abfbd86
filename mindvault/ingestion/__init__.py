"""
Document Ingestion Module.

Turns uploaded documents into canonical text ready for token counting:
- Raw document model
- Content extraction (text pass-through)
- Whitespace and line-break normalization

Usage:
    from mindvault.ingestion import RawDocument, extract_content, normalize_text

    doc = RawDocument(name="memo.txt", content=uploaded_text)
    text = normalize_text(extract_content(doc))
"""

from .normalize import RawDocument, extract_content, normalize_text

__all__ = [
    "RawDocument",
    "extract_content",
    "normalize_text",
]
