"""
Chunk domain model.

Represents a retrieved slice of a legal document together with its
fusion score. Maps to and from the vector store payload layout.

Dependencies: pydantic
System role: Document chunk data structure
"""

from typing import Any

from pydantic import BaseModel, Field

DOC_ID_KEY = "doc_id"
CHUNK_INDEX_KEY = "chunk_index"
TOTAL_CHUNKS_KEY = "total_chunks"
TEXT_KEY = "chunk_text"

RESERVED_PAYLOAD_KEYS = frozenset({DOC_ID_KEY, CHUNK_INDEX_KEY, TOTAL_CHUNKS_KEY, TEXT_KEY})

# Score carried by chunks that were pulled in by document expansion only
UNRANKED_SCORE = 0.0


class Chunk(BaseModel):
    """Document chunk model."""

    id: str = Field(description="Chunk identifier within the corpus")
    doc_id: str = Field(description="Owning document identifier")
    chunk_index: int = Field(description="Zero-based position of the chunk in its document")
    total_chunks: int | None = Field(default=None, description="Declared chunk count of the document")
    text: str = Field(default="", description="Chunk text content")
    score: float = Field(default=UNRANKED_SCORE, description="Fusion score, 0 when not ranked")
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Extra payload attributes (process number, event date, model tag, ...)",
    )

    @classmethod
    def from_payload(
        cls,
        chunk_id: Any,
        payload: dict[str, Any],
        score: float = UNRANKED_SCORE,
    ) -> "Chunk":
        """
        Build a chunk from a vector store point.

        Args:
            chunk_id: Point id (int or UUID in Qdrant)
            payload: Point payload
            score: Fusion score for ranked points

        Returns:
            Chunk: Parsed chunk

        Raises:
            KeyError: If doc_id or chunk_index is missing from the payload
        """
        return cls(
            id=str(chunk_id),
            doc_id=str(payload[DOC_ID_KEY]),
            chunk_index=int(payload[CHUNK_INDEX_KEY]),
            total_chunks=payload.get(TOTAL_CHUNKS_KEY),
            text=payload.get(TEXT_KEY) or "",
            score=score,
            metadata={k: v for k, v in payload.items() if k not in RESERVED_PAYLOAD_KEYS},
        )
