"""
Custom exceptions for the docsum package.

These exceptions provide more specific error handling and better debugging
information than generic Python exceptions.
"""


class DocsumError(Exception):
    """Base exception for all docsum package errors."""
    pass


class ValidationError(DocsumError):
    """Data validation errors (bad parameters, file type or size)."""
    pass


class ConfigurationError(DocsumError):
    """Configuration-related errors (missing credentials, invalid settings)."""
    pass


class ProviderUnavailableError(ConfigurationError):
    """Requested provider was never registered or failed its availability probe."""

    def __init__(self, provider: str, message: str | None = None):
        self.provider = provider
        super().__init__(message or f"AI service provider '{provider}' is not available")


class ChunkingError(DocsumError):
    """Chunking-related errors (invalid parameters, processing failures)."""
    pass


class SummarizationError(DocsumError):
    """
    Run-level summarization failure.

    Raised for an empty chunk sequence and for any failed model call. The
    failed call is identified by ``chunk_index`` (None for the
    reconciliation call) and the underlying exception is chained as
    ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        chunk_index: int | None = None,
        calls_made: int = 0,
    ):
        self.provider = provider
        self.chunk_index = chunk_index
        self.calls_made = calls_made
        super().__init__(message)


class ExtractionError(DocsumError):
    """PDF text extraction errors (unreadable or corrupt documents)."""
    pass


class StorageError(DocsumError):
    """Summary persistence errors (the summary exists but was not saved)."""
    pass


class TemplateError(DocsumError):
    """Prompt template storage errors (system template edits, unknown ids)."""
    pass
