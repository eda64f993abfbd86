"""
Context Assembly Module.

Treat prompt context as a resource with a budget.

This module handles:
- Per-request token budgets
- Greedy selection of chunks and summaries under the budget
- Keyword-focused preparation of large uploads

Usage:
    from mindvault.context import select_relevant_chunks

    context = select_relevant_chunks(processed_docs, question, max_total_tokens=4000)
"""

from .context_budgeting import ContextBudget
from .context_selector import ContextSelection, select_context, select_relevant_chunks
from .relevance import (
    prepare_documents_for_question,
    score_chunk_relevance,
    select_top_chunks,
)

__all__ = [
    "ContextBudget",
    "ContextSelection",
    "select_context",
    "select_relevant_chunks",
    "score_chunk_relevance",
    "select_top_chunks",
    "prepare_documents_for_question",
]
