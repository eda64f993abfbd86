"""
Greedy context selection.

Given processed documents and a question, pick the chunks or summaries
that fit the context budget, in document order then chunk order.
"Relevant" here only means "fits": no semantic scoring happens.

Rules:
- The question is charged to the budget first
- An oversized document with a summary contributes its summary or nothing
- Otherwise chunks are taken in order until the first one that does not fit
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from mindvault.processing.document_processor import ProcessedDocument
from mindvault.shared.tokens import TiktokenTokenizer, Tokenizer

from .context_budgeting import ContextBudget

logger = logging.getLogger(__name__)


@dataclass
class ContextSelection:
    """Selected context plus what was left out."""

    chunks: List[str] = field(default_factory=list)
    token_count: int = 0
    documents_skipped: int = 0
    chunks_dropped: int = 0


def select_context(
    documents: Sequence[ProcessedDocument],
    question: str,
    max_total_tokens: int = 4000,
    tokenizer: Optional[Tokenizer] = None,
) -> ContextSelection:
    """
    Fit document chunks and summaries into the context budget.

    Args:
        documents: Processed documents, in priority order
        question: The pending question
        max_total_tokens: Budget for question plus selected context
        tokenizer: Token counter (cl100k_base by default)

    Returns:
        ContextSelection; ``token_count`` includes the question
    """
    tokenizer = tokenizer or TiktokenTokenizer()
    budget = ContextBudget(limit=max_total_tokens, consumed=len(tokenizer.encode(question)))
    selection = ContextSelection()

    for doc in documents:
        # If we have a summary and the content is large, use the summary
        if doc.summary and doc.total_tokens > max_total_tokens:
            if budget.try_consume(len(tokenizer.encode(doc.summary))):
                selection.chunks.append(doc.summary)
            else:
                selection.documents_skipped += 1
                logger.info(
                    f"Summary of {doc.name} does not fit "
                    f"({budget.remaining} tokens left), document skipped"
                )
            continue

        for i, chunk in enumerate(doc.chunks):
            if not budget.try_consume(chunk.token_count):
                selection.chunks_dropped += len(doc.chunks) - i
                break
            selection.chunks.append(chunk.content)

    selection.token_count = budget.consumed

    if selection.documents_skipped or selection.chunks_dropped:
        logger.info(
            f"Context budget {budget.consumed}/{max_total_tokens}: "
            f"{selection.documents_skipped} document(s) skipped, "
            f"{selection.chunks_dropped} chunk(s) dropped"
        )

    return selection


def select_relevant_chunks(
    documents: Sequence[ProcessedDocument],
    question: str,
    max_total_tokens: int = 4000,
    tokenizer: Optional[Tokenizer] = None,
) -> List[str]:
    """Return only the selected context strings, in order."""
    return select_context(documents, question, max_total_tokens, tokenizer).chunks
