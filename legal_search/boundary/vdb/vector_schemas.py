"""
Vector database schemas.

Pydantic models for vector store results, independent of the
Qdrant client types.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from typing import Any

from pydantic import BaseModel, Field


class VectorSearchResult(BaseModel):
    """Single point returned by a ranked query or a scroll."""

    id: str = Field(description="Point identifier")
    score: float | None = Field(default=None, description="Ranking score, None for scroll results")
    payload: dict[str, Any] = Field(default_factory=dict, description="Point payload")
