"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    ServiceContainer,
    get_container,
    get_dense_embedder,
    get_search_service,
    get_settings_dependency,
    get_sparse_embedder,
    get_vector_store,
)

__all__ = [
    "ServiceContainer",
    "get_container",
    "get_dense_embedder",
    "get_search_service",
    "get_settings_dependency",
    "get_sparse_embedder",
    "get_vector_store",
]
