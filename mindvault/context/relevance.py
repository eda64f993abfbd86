"""
Keyword relevance for question-focused document preparation.

Large uploads are cut into character windows and only the windows that
best match the question's keywords are kept. Financial and market
questions get a boost for windows that use the vocabulary of that domain.
"""

import logging
import re
from typing import List, Sequence

from mindvault.chunking.overlap_chunker import DocumentChunk, chunk_document
from mindvault.ingestion.normalize import RawDocument

logger = logging.getLogger(__name__)

QUESTION_STOP_WORDS = {"what", "who", "where", "when", "why", "how", "the", "and", "or", "but"}

FINANCIAL_TRIGGERS = ("revenue", "arr", "financial")
FINANCIAL_TERMS = [
    "revenue",
    "arr",
    "financial",
    "million",
    "billion",
    "dollar",
    "usd",
    "aud",
    "eur",
    "growth",
    "profit",
]

MARKET_TRIGGERS = ("market", "tam", "competitor")
MARKET_TERMS = ["market", "tam", "sam", "som", "competitor", "customer", "segment", "growth"]

KEYWORD_WEIGHT = 2
DOMAIN_TERM_BOOST = 3

CHUNK_SEPARATOR = "\n\n---\n\n"


def extract_keywords(question: str) -> List[str]:
    """Lower-cased question words longer than three characters, minus stop words."""
    return [
        word
        for word in question.lower().split()
        if len(word) > 3 and word not in QUESTION_STOP_WORDS
    ]


def score_chunk_relevance(chunk: DocumentChunk, question: str) -> int:
    """
    Score how well a chunk matches a question.

    - Each occurrence of a question keyword: +2
    - Financial question: +3 per financial term present in the chunk
    - Market question: +3 per market term present in the chunk
    """
    question_lower = question.lower()
    content_lower = chunk.content.lower()

    score = 0
    for word in extract_keywords(question):
        score += len(re.findall(re.escape(word), content_lower)) * KEYWORD_WEIGHT

    if any(trigger in question_lower for trigger in FINANCIAL_TRIGGERS):
        score += sum(DOMAIN_TERM_BOOST for term in FINANCIAL_TERMS if term in content_lower)

    if any(trigger in question_lower for trigger in MARKET_TRIGGERS):
        score += sum(DOMAIN_TERM_BOOST for term in MARKET_TERMS if term in content_lower)

    return score


def select_top_chunks(
    chunks: Sequence[DocumentChunk],
    question: str,
    max_chunks: int = 5,
) -> List[DocumentChunk]:
    """Highest-scoring chunks first; ties keep document order."""
    scored = sorted(
        chunks,
        key=lambda chunk: score_chunk_relevance(chunk, question),
        reverse=True,
    )
    return scored[:max_chunks]


def prepare_documents_for_question(
    documents: Sequence[RawDocument],
    question: str,
    max_chunk_size: int = 5000,
    overlap_size: int = 200,
    size_threshold: int = 10000,
    chunks_per_document: int = 3,
) -> List[RawDocument]:
    """
    Reduce large uploads to the windows that best match a question.

    Small uploads (total characters within ``max_chunk_size`` or
    ``size_threshold``) are returned unchanged. Otherwise each document's
    content is replaced by its top windows, each labelled with its position.

    Args:
        documents: Uploaded documents
        question: The pending question
        max_chunk_size: Characters per window
        overlap_size: Characters shared between windows
        size_threshold: Total size below which nothing is cut
        chunks_per_document: Windows kept per document

    Returns:
        Documents to send to answer generation
    """
    if not documents:
        return []

    total_size = sum(len(doc.content or "") for doc in documents)
    if total_size <= max_chunk_size or total_size <= size_threshold:
        return list(documents)

    prepared: List[RawDocument] = []
    for doc in documents:
        chunks = chunk_document(doc, max_chunk_size=max_chunk_size, overlap_size=overlap_size)
        top = select_top_chunks(chunks, question, max_chunks=chunks_per_document)
        if not top:
            continue

        combined = CHUNK_SEPARATOR.join(
            f"[Chunk {chunk.chunk_index + 1} from {doc.name}]\n{chunk.content}" for chunk in top
        )
        prepared.append(RawDocument(name=doc.name, type=doc.type, content=combined))

    logger.info(
        f"Prepared {len(prepared)}/{len(documents)} document(s) for question "
        f"({total_size} chars before chunking)"
    )
    return prepared or list(documents)
