"""
Vector store configuration settings.

Manages the Qdrant connection and the named vectors / payload fields
the chunk collections are built with.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for hybrid retrieval
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorStoreSettings(BaseSettings):
    """Qdrant configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="QDRANT_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str = Field(default="http://localhost:6333", description="Qdrant server URL")
    api_key: str | None = Field(default=None, description="Qdrant API key (Qdrant Cloud)")
    timeout: int = Field(default=30, description="Request timeout in seconds")

    dense_vector_name: str = Field(
        default="dense",
        description="Named vector holding the Voyage dense embedding",
    )
    sparse_vector_name: str = Field(
        default="sparse",
        description="Named sparse vector holding the BM25 embedding",
    )
    doc_id_field: str = Field(
        default="doc_id",
        description="Payload field identifying the owning document of a chunk",
    )
