"""
FastAPI application for MindVault document processing.

Exposes the chunking and context budgeting engine to the frontend:
- Document processing (normalize, count, chunk, summarize)
- Context selection under the token budget
- Keyword-focused preparation of large uploads
- Request tracing and health checks

Long-lived collaborators (processor, tokenizer) are created once per app
and reached through dependencies, never through module globals.
"""

import logging
import time
import uuid
from typing import List, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mindvault import __version__
from mindvault.chunking.word_chunker import Chunk
from mindvault.context.context_selector import select_context
from mindvault.context.relevance import prepare_documents_for_question
from mindvault.ingestion.normalize import RawDocument
from mindvault.processing.document_processor import DocumentProcessor, ProcessedDocument
from mindvault.shared.config import Settings, get_settings
from mindvault.shared.errors import DocumentProcessingError
from mindvault.shared.schemas import (
    ChunkModel,
    DocumentIn,
    HealthResponse,
    PrepareRequest,
    PrepareResponse,
    ProcessedDocumentModel,
    ProcessingErrorInfo,
    ProcessRequest,
    ProcessResponse,
    SelectContextRequest,
    SelectContextResponse,
)
from mindvault.shared.tokens import TiktokenTokenizer, Tokenizer, num_tokens
from mindvault.summarization.summarizer import LLMSummarizer

logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_processor(request: Request) -> DocumentProcessor:
    return request.app.state.processor


def get_tokenizer(request: Request) -> Tokenizer:
    return request.app.state.tokenizer


def to_model(doc: ProcessedDocument) -> ProcessedDocumentModel:
    return ProcessedDocumentModel(
        name=doc.name,
        original_content=doc.original_content,
        chunks=[ChunkModel(content=c.content, token_count=c.token_count) for c in doc.chunks],
        total_tokens=doc.total_tokens,
        summary=doc.summary,
    )


def from_model(model: ProcessedDocumentModel, tokenizer: Tokenizer) -> ProcessedDocument:
    """Rebuild a client-supplied document, recounting tokens with ``tokenizer``."""
    return ProcessedDocument(
        name=model.name,
        original_content=model.original_content,
        chunks=tuple(
            Chunk(content=c.content, token_count=num_tokens(c.content, tokenizer))
            for c in model.chunks
        ),
        total_tokens=num_tokens(model.original_content, tokenizer),
        summary=model.summary,
    )


def to_raw(doc: DocumentIn) -> RawDocument:
    return RawDocument(name=doc.name, type=doc.type, content=doc.content)


def create_app(
    settings: Optional[Settings] = None,
    processor: Optional[DocumentProcessor] = None,
    tokenizer: Optional[Tokenizer] = None,
) -> FastAPI:
    """
    Build the API application.

    Args:
        settings: Application settings (from environment if None)
        processor: Document processor shared by all requests
        tokenizer: Tokenizer used for context selection

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()
    tokenizer = tokenizer or TiktokenTokenizer(settings.documents.encoding_name)

    app = FastAPI(
        title="MindVault",
        description="Document chunking and context budgeting for document Q&A",
        version=__version__,
    )
    app.state.settings = settings
    app.state.tokenizer = tokenizer
    app.state.processor = processor or DocumentProcessor(
        summarizer=LLMSummarizer(settings.summarizer),
        tokenizer=tokenizer,
        config=settings.documents,
        summary_timeout=settings.summarizer.timeout,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        """Add request ID for tracing."""
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id

        start_time = time.time()
        response = await call_next(request)

        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            f"[{request_id}] {request.method} {request.url.path} "
            f"- {response.status_code} - {duration_ms:.1f}ms"
        )

        response.headers["X-Request-ID"] = request_id
        return response

    @app.exception_handler(DocumentProcessingError)
    async def processing_error_handler(request: Request, exc: DocumentProcessingError):
        return JSONResponse(
            status_code=422,
            content={
                "error": "Failed to process document",
                "document": exc.document_name,
                "detail": str(exc.__cause__ or exc),
            },
        )

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        return HealthResponse(status="healthy", version=__version__)

    @app.post("/documents/process", response_model=ProcessResponse)
    async def process_documents(
        body: ProcessRequest,
        request: Request,
        strict: bool = False,
        processor: DocumentProcessor = Depends(get_processor),
    ):
        """
        Process uploaded documents.

        By default failed documents are reported in ``errors`` and the rest
        are returned. With ``strict=true`` the first failure fails the request.
        """
        request_id = getattr(request.state, "request_id", "unknown")
        raw = [to_raw(doc) for doc in body.documents]

        if strict:
            processed = await processor.process_many(raw)
            return ProcessResponse(documents=[to_model(doc) for doc in processed])

        batch = await processor.process_batch(raw)
        errors: List[ProcessingErrorInfo] = []
        for error in batch.errors:
            logger.warning(f"[{request_id}] {error}")
            errors.append(
                ProcessingErrorInfo(
                    document=error.document_name, detail=str(error.__cause__ or error)
                )
            )

        return ProcessResponse(
            documents=[to_model(doc) for doc in batch.documents],
            errors=errors,
        )

    @app.post("/context/select", response_model=SelectContextResponse)
    async def select_context_endpoint(
        body: SelectContextRequest,
        settings: Settings = Depends(get_app_settings),
        tokenizer: Tokenizer = Depends(get_tokenizer),
    ):
        """Pick the chunks and summaries that fit the context budget."""
        selection = select_context(
            [from_model(doc, tokenizer) for doc in body.documents],
            body.question,
            max_total_tokens=settings.documents.max_total_tokens,
            tokenizer=tokenizer,
        )
        return SelectContextResponse(
            chunks=selection.chunks,
            token_count=selection.token_count,
            documents_skipped=selection.documents_skipped,
            chunks_dropped=selection.chunks_dropped,
        )

    @app.post("/documents/prepare", response_model=PrepareResponse)
    async def prepare_documents(
        body: PrepareRequest,
        settings: Settings = Depends(get_app_settings),
    ):
        """Reduce large uploads to the windows that best match the question."""
        prepared = prepare_documents_for_question(
            [to_raw(doc) for doc in body.documents],
            body.question,
            max_chunk_size=settings.chunking.max_chunk_size,
            overlap_size=settings.chunking.overlap_size,
            size_threshold=settings.chunking.prepare_threshold,
        )
        return PrepareResponse(
            documents=[DocumentIn(name=d.name, type=d.type, content=d.content) for d in prepared]
        )

    return app


def main():
    import uvicorn

    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info(f"Starting MindVault v{__version__}")
    uvicorn.run(create_app(settings), host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
