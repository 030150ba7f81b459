"""
Unified application settings.

Groups the Qdrant, embedding provider and retrieval settings under one
object. Each group reads its own env prefix when Settings is instantiated.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from legal_search.configs.base import BaseSettings
from legal_search.configs.embeddings import SparseEmbeddingSettings, VoyageSettings
from legal_search.configs.retrieval import RetrievalSettings
from legal_search.configs.vector_store import VectorStoreSettings


class Settings(BaseSettings):
    """Application settings."""

    vector_store: VectorStoreSettings = Field(default_factory=VectorStoreSettings)
    voyage: VoyageSettings = Field(default_factory=VoyageSettings)
    sparse_embedding: SparseEmbeddingSettings = Field(default_factory=SparseEmbeddingSettings)
    retrieval: RetrievalSettings = Field(default_factory=RetrievalSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Environment variables and .env are read on first call only; call
    get_settings.cache_clear() to reload.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
