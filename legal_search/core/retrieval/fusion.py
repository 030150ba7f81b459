"""
Ranking strategies for hybrid retrieval.

DelegatedFusionRanking hands both prefetches and the RRF directive to Qdrant
in one query. LocalRRFRanking runs the dense and sparse queries separately
and fuses them in-process, for stores without native fusion.

Dependencies: asyncio, legal_search.boundary.vdb
System role: Swappable rank-combination step of the hybrid retriever
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from legal_search.boundary.vdb.vector_schemas import VectorSearchResult

if TYPE_CHECKING:
    from legal_search.boundary.embeddings.embedding_schemas import SparseVector
    from legal_search.boundary.vdb.vector_store_client import QdrantVectorStore

logger = logging.getLogger(__name__)

DEFAULT_RRF_K = 60


def reciprocal_rank_fusion(
    ranked_lists: list[list[VectorSearchResult]],
    k: int = DEFAULT_RRF_K,
    limit: int | None = None,
) -> list[VectorSearchResult]:
    """Fuse ranked lists with Reciprocal Rank Fusion.

    Each point scores sum(1 / (k + rank)) over the lists containing it, with
    1-based ranks. Lists missing a point contribute nothing. Output is in
    descending fused score; equal scores keep first-seen order.

    Args:
        ranked_lists: Ranked result lists, best first
        k: Rank constant
        limit: Maximum number of fused points returned

    Returns:
        list[VectorSearchResult]: Points carrying their fused score
    """
    scores: dict[str, float] = {}
    first_seen: dict[str, VectorSearchResult] = {}

    for ranked in ranked_lists:
        for rank, point in enumerate(ranked, start=1):
            if point.id not in first_seen:
                first_seen[point.id] = point
                scores[point.id] = 0.0
            scores[point.id] += 1.0 / (k + rank)

    # sorted() is stable, dict order is first-seen order
    fused = sorted(first_seen, key=lambda point_id: scores[point_id], reverse=True)
    if limit is not None:
        fused = fused[:limit]

    return [
        first_seen[point_id].model_copy(update={"score": scores[point_id]})
        for point_id in fused
    ]


class RankingStrategy(ABC):
    """Combines dense and sparse similarity into one ranked point list."""

    @abstractmethod
    async def rank(
        self,
        collection: str,
        dense_vector: list[float],
        sparse_vector: "SparseVector",
        prefetch_width: int,
        ranked_width: int,
    ) -> list[VectorSearchResult]:
        """Return up to ``ranked_width`` points in descending fusion score."""


class DelegatedFusionRanking(RankingStrategy):
    """RRF computed by the vector store in a single query."""

    def __init__(self, vector_store: "QdrantVectorStore") -> None:
        self.vector_store = vector_store

    async def rank(
        self,
        collection: str,
        dense_vector: list[float],
        sparse_vector: "SparseVector",
        prefetch_width: int,
        ranked_width: int,
    ) -> list[VectorSearchResult]:
        return await self.vector_store.fused_query(
            collection,
            dense_vector=dense_vector,
            sparse_vector=sparse_vector,
            prefetch_width=prefetch_width,
            ranked_width=ranked_width,
        )


class LocalRRFRanking(RankingStrategy):
    """Two independent queries fused in-process."""

    def __init__(self, vector_store: "QdrantVectorStore", k: int = DEFAULT_RRF_K) -> None:
        self.vector_store = vector_store
        self.k = k

    async def rank(
        self,
        collection: str,
        dense_vector: list[float],
        sparse_vector: "SparseVector",
        prefetch_width: int,
        ranked_width: int,
    ) -> list[VectorSearchResult]:
        dense_hits, sparse_hits = await asyncio.gather(
            self.vector_store.vector_query(collection, dense_vector, limit=prefetch_width),
            self.vector_store.vector_query(collection, sparse_vector, limit=prefetch_width),
        )
        logger.debug(
            f"{__name__}:rank - dense={len(dense_hits)} sparse={len(sparse_hits)} k={self.k}"
        )
        return reciprocal_rank_fusion([dense_hits, sparse_hits], k=self.k, limit=ranked_width)
