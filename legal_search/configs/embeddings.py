"""
Embedding provider configuration settings.

Settings for the Voyage AI dense embedding API and the BM25 sparse
embedding microservice.

Dependencies: pydantic_settings
System role: Embedding provider configuration for query encoding
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VoyageSettings(BaseSettings):
    """Voyage AI dense embedding configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VOYAGE_",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str | None = Field(default=None, description="Voyage AI API key")
    base_url: str = Field(
        default="https://api.voyageai.com/v1",
        description="Voyage AI REST API base URL",
    )
    model: str = Field(default="voyage-3.5-lite", description="Voyage embedding model")
    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    health_probe: bool = Field(
        default=True,
        description="Health checks send a real (billed) embedding request",
    )


class SparseEmbeddingSettings(BaseSettings):
    """BM25 embedding microservice configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="EMBEDDING_SERVICE_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str = Field(default="http://localhost:8000", description="Embedding service base URL")
    model: str = Field(default="bm25", description="Sparse model served by the service")
    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    health_timeout: float = Field(default=5.0, description="Health check timeout in seconds")
