"""
Core business logic module.

Contains domain business logic, exception hierarchy, and core components.
All business rules and domain-specific logic reside here.
"""

from legal_search.core.exceptions import (
    LegalSearchException,
    InvalidRequestError,
    CorpusNotFoundError,
    EmbeddingProviderError,
    VectorStoreError,
    ExpansionError,
)

__all__ = [
    # Exceptions
    "LegalSearchException",
    "InvalidRequestError",
    "CorpusNotFoundError",
    "EmbeddingProviderError",
    "VectorStoreError",
    "ExpansionError",
]
