"""
Exception hierarchy for Legal Search application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class LegalSearchException(Exception):
    """Base exception for all Legal Search application errors."""

    status_code: int = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging

        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidRequestError(LegalSearchException):
    """Raised when a search request is missing its query or is malformed."""

    status_code = 400

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize invalid request error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class CorpusNotFoundError(LegalSearchException):
    """Raised when the requested corpus collection does not exist."""

    status_code = 404

    def __init__(
        self,
        collection: str,
        corpus: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize corpus not found error.

        Args:
            collection: Name of the missing collection
            corpus: Corpus configuration name that resolved to the collection
            details: Additional context
        """
        details = details or {}
        details["collection"] = collection
        if corpus and corpus != collection:
            details["corpus"] = corpus
        details["hint"] = "Run the ingestion/migration step to provision the collection first"
        self.collection = collection
        super().__init__(f"Collection '{collection}' not found", details)


class EmbeddingProviderError(LegalSearchException):
    """Raised when an embedding provider is unreachable or returns a bad payload."""

    status_code = 502

    def __init__(
        self,
        message: str,
        provider: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize embedding provider error.

        Args:
            message: Error message
            provider: Provider name (voyage, bm25)
            status_code: HTTP status returned by the provider, if any
            details: Additional context
        """
        details = details or {}
        details["provider"] = provider
        if status_code is not None:
            details["provider_status"] = status_code
        self.provider = provider
        self.provider_status = status_code
        super().__init__(message, details)


class VectorStoreError(LegalSearchException):
    """Raised when vector store operations fail."""

    status_code = 502

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (query, scroll, list_collections)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class ExpansionError(LegalSearchException):
    """Raised when fetching every chunk of the top documents fails."""

    status_code = 502

    def __init__(
        self,
        message: str,
        collection: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize expansion error.

        Args:
            message: Error message
            collection: Collection the bulk retrieval ran against
            details: Additional context
        """
        details = details or {}
        if collection:
            details["collection"] = collection
        super().__init__(message, details)
