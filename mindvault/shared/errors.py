"""
Exception types shared across MindVault.

Only failures that make a document unusable are raised to callers.
Summarizer trouble and budget skips are recorded in the data instead.
"""


class MindVaultError(Exception):
    """Base class for MindVault errors."""

    pass


class DocumentProcessingError(MindVaultError):
    """Extraction, normalization or chunking failed for one document."""

    def __init__(self, document_name: str, message: str = "Failed to process document"):
        self.document_name = document_name
        self.message = message
        super().__init__(f"{message}: {document_name}")


class SummarizationError(MindVaultError):
    """The summarizer could not produce a summary."""

    pass
