"""
Reconstructed document model.

A transient view over a group of chunks sharing one doc_id.
Never persisted.

Dependencies: pydantic, legal_search.models.chunk
System role: Document-level search result structure
"""

from typing import Any

from pydantic import BaseModel, Field

from legal_search.models.chunk import Chunk


class Document(BaseModel):
    """Document rebuilt from its chunks."""

    doc_id: str = Field(description="Document identifier")
    full_text: str = Field(description="Chunk texts joined in chunk_index order")
    score: float = Field(description="Best fusion score among the document's chunks")
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Metadata of the lowest-index chunk",
    )
    total_chunks: int | None = Field(default=None, description="Declared chunk count")
    chunk_count: int = Field(description="Number of chunks reassembled")
    chunks: list[Chunk] = Field(default_factory=list, description="Chunks ordered by chunk_index")
