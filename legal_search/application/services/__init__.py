"""Service orchestrators."""

from .search_service import SearchService, corpora_from_settings

__all__ = [
    "SearchService",
    "corpora_from_settings",
]
