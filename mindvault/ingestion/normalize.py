"""
Document normalization.

Uploads reach the engine as already-extracted text (the upload pipeline
handles PDF and spreadsheet parsing). This module holds the raw document
type and the whitespace normalization applied before any token counting.

Pipeline: Uploaded file -> RawDocument -> extract_content -> normalize_text
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

# A run of line breaks together with any whitespace touching it
_LINE_BREAKS = re.compile(r"[^\S\r\n]*[\r\n]\s*")
# Whitespace other than newlines
_HORIZONTAL_SPACE = re.compile(r"[^\S\n]+")


@dataclass(frozen=True)
class RawDocument:
    """An uploaded document as received from the upload pipeline."""

    name: str
    type: str = "text/plain"
    content: Optional[str] = None


def normalize_text(text: str) -> str:
    """
    Collapse whitespace into a canonical form.

    - Any run of line breaks (and whitespace adjacent to it) -> one "\\n"
    - Any other run of whitespace -> one space
    - Leading and trailing whitespace removed

    Example:
        >>> normalize_text("  Revenue:\\t 4.2M \\r\\n\\r\\n  ARR  grew ")
        'Revenue: 4.2M\\nARR grew'
    """
    text = _LINE_BREAKS.sub("\n", text)
    text = _HORIZONTAL_SPACE.sub(" ", text)
    return text.strip()


def extract_content(document: RawDocument) -> str:
    """
    Return the text carried by a document.

    Text-bearing uploads pass through; documents with no extracted
    content yield an empty string.
    """
    if document.content is None:
        logger.debug(f"No extractable content in {document.name} ({document.type})")
        return ""
    if not isinstance(document.content, str):
        raise TypeError(
            f"Expected text content for {document.name}, got {type(document.content).__name__}"
        )
    return document.content
