"""
Configuration management module.

pydantic-settings classes for Qdrant (QDRANT_), Voyage AI (VOYAGE_), the
BM25 service (EMBEDDING_SERVICE_) and the retrieval pipeline (RETRIEVAL_).
"""

from legal_search.configs.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
