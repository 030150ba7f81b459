"""
Document expansion for ranked chunks.

Turns the fused chunk ranking into every chunk of the top documents:
de-duplicate doc_ids in rank order, cap them, and fetch all their chunks
with one filtered scroll. Chunks that were not ranked score 0.

Dependencies: pydantic, legal_search.boundary.vdb, legal_search.core.exceptions
System role: Second stage of the retrieval pipeline
"""

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from legal_search.core.exceptions import ExpansionError, VectorStoreError
from legal_search.models.chunk import UNRANKED_SCORE, Chunk

if TYPE_CHECKING:
    from legal_search.boundary.vdb.vector_store_client import QdrantVectorStore

logger = logging.getLogger(__name__)

DEFAULT_DOCUMENT_CAP = 30
# Sized for ~30 documents averaging 10-13 chunks each
DEFAULT_SCROLL_LIMIT = 400


def top_document_ids(ranked: list[Chunk], cap: int) -> list[str]:
    """Distinct doc_ids in first-seen rank order, truncated to ``cap``."""
    seen: dict[str, None] = {}
    for chunk in ranked:
        seen.setdefault(chunk.doc_id)
    return list(seen)[:cap]


class DocumentExpander:
    """Fetches all chunks of the best-ranked documents."""

    def __init__(
        self,
        vector_store: "QdrantVectorStore",
        document_cap: int = DEFAULT_DOCUMENT_CAP,
        scroll_limit: int = DEFAULT_SCROLL_LIMIT,
        max_pages: int = 1,
        doc_id_field: str = "doc_id",
    ) -> None:
        """
        Initialize expander.

        Args:
            vector_store: Qdrant store
            document_cap: Maximum number of documents expanded
            scroll_limit: Scroll page size
            max_pages: Scroll pages followed before giving up on the remainder
            doc_id_field: Payload field holding the document id
        """
        self.vector_store = vector_store
        self.document_cap = document_cap
        self.scroll_limit = scroll_limit
        self.max_pages = max_pages
        self.doc_id_field = doc_id_field

    async def expand(
        self,
        collection: str,
        ranked: list[Chunk],
        document_cap: int | None = None,
    ) -> list[Chunk]:
        """
        Expand ranked chunks into the full chunk sets of their documents.

        Args:
            collection: Collection to scroll
            ranked: Chunks from the hybrid retriever, best first
            document_cap: Per-call cap, never above the configured cap

        Returns:
            list[Chunk]: Chunks of the capped documents grouped in document rank
                order; ranked ones keep their fusion score, the rest score 0

        Raises:
            ExpansionError: If the bulk retrieval fails or returns malformed payloads
        """
        if not ranked:
            return []

        cap = self.document_cap if document_cap is None else min(document_cap, self.document_cap)
        doc_ids = top_document_ids(ranked, cap)
        logger.info(
            f"{__name__}:expand - fetching all chunks of {len(doc_ids)} documents from {collection}"
        )

        try:
            points = await self.vector_store.filtered_scroll(
                collection,
                field=self.doc_id_field,
                values=doc_ids,
                limit=self.scroll_limit,
                max_pages=self.max_pages,
            )
        except VectorStoreError as e:
            raise ExpansionError(
                f"Failed to fetch document chunks: {e.message}",
                collection=collection,
                details={**e.details, "document_count": len(doc_ids)},
            ) from e

        score_by_id = {chunk.id: chunk.score for chunk in ranked}

        try:
            chunks = [
                Chunk.from_payload(
                    point.id,
                    point.payload,
                    score=score_by_id.get(point.id, UNRANKED_SCORE),
                )
                for point in points
            ]
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            raise ExpansionError(
                "Malformed chunk payload returned by document expansion",
                collection=collection,
                details={"error": str(e)},
            ) from e

        # Seed chunks the scroll did not return still belong to their document
        returned = {chunk.id for chunk in chunks}
        capped = set(doc_ids)
        missing = [c for c in ranked if c.doc_id in capped and c.id not in returned]
        if missing:
            logger.warning(
                f"{__name__}:expand - {len(missing)} ranked chunks missing from scroll, kept as seeds"
            )
            chunks.extend(missing)

        # Scroll order is point-id order; documents must follow fusion rank
        doc_rank = {doc_id: rank for rank, doc_id in enumerate(doc_ids)}
        chunks.sort(key=lambda c: doc_rank.get(c.doc_id, len(doc_ids)))

        logger.info(
            f"{__name__}:expand - {len(chunks)} chunks across {len(doc_ids)} documents"
        )
        return chunks
