"""
Document processing pipeline.

Orchestrates the per-document workflow:
RawDocument -> extract -> normalize -> count tokens -> (chunk + summarize | single chunk)

Documents are independent, so batches are processed concurrently; results
always come back in input order.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from mindvault.chunking.word_chunker import Chunk, chunk_text
from mindvault.ingestion.normalize import RawDocument, extract_content, normalize_text
from mindvault.shared.config import DocumentConfig, get_settings
from mindvault.shared.errors import DocumentProcessingError
from mindvault.shared.tokens import TiktokenTokenizer, Tokenizer
from mindvault.summarization.summarizer import LLMSummarizer, Summarizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessedDocument:
    """A document ready for context selection. Immutable once built."""

    name: str
    original_content: str
    chunks: Tuple[Chunk, ...]
    total_tokens: int
    summary: Optional[str] = None


@dataclass
class ProcessingStats:
    """Statistics across processing runs."""

    total_docs: int = 0
    successful: int = 0
    failed: int = 0
    summaries_requested: int = 0
    summaries_degraded: int = 0


@dataclass
class BatchResult:
    """Outcome of a skip-and-continue batch."""

    documents: List[ProcessedDocument] = field(default_factory=list)
    errors: List[DocumentProcessingError] = field(default_factory=list)


class DocumentProcessor:
    """
    Turns uploaded documents into chunked, token-counted documents.

    Documents over the total context budget are chunked AND summarized;
    smaller ones become a single chunk with no summary. A failing
    summarizer never fails the document: the summary degrades to "".

    Usage:
        processor = DocumentProcessor()

        # Single document
        processed = await processor.process(RawDocument(name="memo.txt", content=text))

        # Batch, fail on first bad document
        processed = await processor.process_many(documents)

        # Batch, keep going and report failures
        result = await processor.process_batch(documents)
    """

    def __init__(
        self,
        summarizer: Optional[Summarizer] = None,
        tokenizer: Optional[Tokenizer] = None,
        config: Optional[DocumentConfig] = None,
        summary_timeout: Optional[float] = None,
    ):
        """
        Args:
            summarizer: Summarizer for oversized documents
            tokenizer: Token counter
            config: Token budgets (from environment if None)
            summary_timeout: Seconds to wait for a summary before degrading
        """
        settings = get_settings()
        self.config = config or settings.documents
        self.tokenizer = tokenizer or TiktokenTokenizer(self.config.encoding_name)
        self.summarizer = summarizer or LLMSummarizer(settings.summarizer)
        self.summary_timeout = (
            summary_timeout if summary_timeout is not None else settings.summarizer.timeout
        )
        self.stats = ProcessingStats()

    def count_tokens(self, text: str) -> int:
        return len(self.tokenizer.encode(text))

    async def process(self, document: RawDocument) -> ProcessedDocument:
        """
        Process a single document.

        Raises:
            DocumentProcessingError: Extraction, normalization or chunking failed
        """
        self.stats.total_docs += 1
        max_total = self.config.max_total_tokens

        try:
            content = extract_content(document)
            cleaned = normalize_text(content)
            total_tokens = self.count_tokens(cleaned)

            if total_tokens > max_total:
                chunks = chunk_text(
                    cleaned,
                    max_tokens=self.config.max_tokens_per_chunk,
                    tokenizer=self.tokenizer,
                )
            else:
                chunks = [Chunk(content=cleaned, token_count=total_tokens)]
        except Exception as e:
            self.stats.failed += 1
            logger.exception(f"Error processing document {document.name}")
            raise DocumentProcessingError(document.name) from e

        summary = None
        if total_tokens > max_total:
            summary = await self._summarize(document.name, cleaned)

        self.stats.successful += 1
        logger.info(
            f"Processed {document.name}: {total_tokens} tokens, {len(chunks)} chunk(s)"
            + (", summarized" if summary else "")
        )

        return ProcessedDocument(
            name=document.name,
            original_content=cleaned,
            chunks=tuple(chunks),
            total_tokens=total_tokens,
            summary=summary,
        )

    async def _summarize(self, name: str, content: str) -> str:
        """Summary of ``content``, or "" if the summarizer fails or times out."""
        self.stats.summaries_requested += 1

        try:
            summary = await asyncio.wait_for(
                self.summarizer.summarize(content), timeout=self.summary_timeout
            )
        except asyncio.TimeoutError:
            self.stats.summaries_degraded += 1
            logger.warning(
                f"Summarization degraded for {name}: timed out after {self.summary_timeout}s"
            )
            return ""
        except Exception as e:
            self.stats.summaries_degraded += 1
            logger.warning(f"Summarization degraded for {name}: {e}")
            return ""

        return summary or ""

    async def process_many(self, documents: Sequence[RawDocument]) -> List[ProcessedDocument]:
        """
        Process documents concurrently, preserving input order.

        Every document runs to completion; the first failure in input order
        is then raised.

        Raises:
            DocumentProcessingError: If any document failed
        """
        results = await asyncio.gather(
            *(self.process(doc) for doc in documents), return_exceptions=True
        )

        for result in results:
            if isinstance(result, BaseException):
                raise result

        return list(results)

    async def process_batch(self, documents: Sequence[RawDocument]) -> BatchResult:
        """
        Process documents concurrently, skipping failures.

        Returns:
            BatchResult with successful documents in input order and one
            error per failed document
        """
        results = await asyncio.gather(
            *(self.process(doc) for doc in documents), return_exceptions=True
        )

        batch = BatchResult()
        for result in results:
            if isinstance(result, DocumentProcessingError):
                batch.errors.append(result)
            elif isinstance(result, BaseException):
                raise result
            else:
                batch.documents.append(result)

        logger.info(
            f"Batch complete: {len(batch.documents)}/{len(results)} successful, "
            f"{len(batch.errors)} failed"
        )
        return batch

    def get_stats(self) -> Dict:
        """Get processing statistics."""
        return {
            "total_docs": self.stats.total_docs,
            "successful": self.stats.successful,
            "failed": self.stats.failed,
            "summaries_requested": self.stats.summaries_requested,
            "summaries_degraded": self.stats.summaries_degraded,
        }

    def reset_stats(self) -> None:
        """Reset statistics for a new run."""
        self.stats = ProcessingStats()
