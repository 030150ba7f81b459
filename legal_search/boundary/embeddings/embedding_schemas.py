"""
Embedding schemas.

Pydantic models for provider payloads.

Dependencies: pydantic
System role: Type definitions for query embeddings
"""

from pydantic import BaseModel, Field, model_validator


class SparseVector(BaseModel):
    """Explicit sparse vector (term indices with weights)."""

    indices: list[int] = Field(description="Term indices")
    values: list[float] = Field(description="Term weights, aligned with indices")

    @model_validator(mode="after")
    def _check_alignment(self) -> "SparseVector":
        if len(self.indices) != len(self.values):
            raise ValueError(
                f"indices and values differ in length ({len(self.indices)} != {len(self.values)})"
            )
        return self
