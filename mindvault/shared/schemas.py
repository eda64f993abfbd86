"""
Pydantic schemas for API request/response models.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class DocumentIn(BaseModel):
    """An uploaded document with its extracted text."""

    name: str = Field(..., description="File name as uploaded")
    type: str = Field(default="text/plain", description="MIME type or type tag")
    content: Optional[str] = Field(default=None, description="Extracted text content")


class ChunkModel(BaseModel):
    content: str
    token_count: int = Field(..., ge=0)


class ProcessedDocumentModel(BaseModel):
    """A processed document, as returned to and sent back by the client."""

    name: str
    original_content: str
    chunks: List[ChunkModel]
    total_tokens: int = Field(..., ge=0)
    summary: Optional[str] = None


class ProcessRequest(BaseModel):
    """Request model for document processing."""

    documents: List[DocumentIn] = Field(..., description="Documents to process")


class ProcessingErrorInfo(BaseModel):
    document: str
    detail: str


class ProcessResponse(BaseModel):
    """Response model for document processing."""

    documents: List[ProcessedDocumentModel]
    errors: List[ProcessingErrorInfo] = Field(default_factory=list)


class SelectContextRequest(BaseModel):
    """Request model for context selection."""

    question: str = Field(..., min_length=1, description="The user's question")
    documents: List[ProcessedDocumentModel] = Field(
        ..., description="Processed documents in priority order"
    )


class SelectContextResponse(BaseModel):
    """Response model for context selection."""

    chunks: List[str]
    token_count: int
    documents_skipped: int = 0
    chunks_dropped: int = 0


class PrepareRequest(BaseModel):
    """Request model for question-focused document preparation."""

    question: str = Field(..., min_length=1)
    documents: List[DocumentIn]


class PrepareResponse(BaseModel):
    documents: List[DocumentIn]


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
