"""
Retrieval pipeline configuration settings.

Widths, caps and corpus configurations for the hybrid retrieval and
document reconstruction pipeline.

Dependencies: pydantic, pydantic_settings
System role: Retrieval tuning and corpus registry configuration
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RetrievalSettings(BaseSettings):
    """Hybrid retrieval configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RETRIEVAL_",
        case_sensitive=False,
        extra="ignore",
    )

    prefetch_width: int = Field(default=100, description="Top-k of each dense/sparse prefetch")
    ranked_width: int = Field(default=100, description="Chunks kept after fusion")
    document_cap: int = Field(default=30, description="Maximum documents expanded per run")
    expansion_page_size: int = Field(
        default=400,
        description="Scroll page size when fetching every chunk of the capped documents",
    )
    expansion_max_pages: int = Field(
        default=10,
        description="Upper bound on scroll pages followed during expansion",
    )

    fusion_strategy: Literal["delegated", "local"] = Field(
        default="delegated",
        description="'delegated' uses Qdrant's RRF fusion, 'local' fuses in-process",
    )
    rrf_k: int = Field(default=60, description="RRF rank constant for local fusion")

    default_limit: int = Field(default=30, description="Default number of documents returned")
    default_corpus: str = Field(default="primary", description="Corpus used when none is given")

    primary_collection: str = Field(default="tjsc-voyage-512-chunks")
    primary_dimension: int = Field(default=512)
    alternate_collection: str = Field(default="tjsc-voyage-1024-chunks")
    alternate_dimension: int = Field(default=1024)
