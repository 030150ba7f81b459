"""
Hybrid retriever.

Encodes the query into dense and sparse vectors, checks the corpus exists,
and asks the ranking strategy for the fused top chunks.

Dependencies: asyncio, pydantic, legal_search.boundary, legal_search.core.exceptions
System role: First stage of the retrieval pipeline
"""

import asyncio
import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from legal_search.core.exceptions import CorpusNotFoundError, VectorStoreError
from legal_search.core.retrieval.fusion import DelegatedFusionRanking, RankingStrategy
from legal_search.models.chunk import Chunk
from legal_search.models.search import CorpusConfig

if TYPE_CHECKING:
    from legal_search.boundary.embeddings.embedding_schemas import SparseVector
    from legal_search.boundary.embeddings.sparse_client import SparseEmbeddingClient
    from legal_search.boundary.embeddings.voyage_client import VoyageEmbeddingClient
    from legal_search.boundary.vdb.vector_store_client import QdrantVectorStore

logger = logging.getLogger(__name__)

DEFAULT_PREFETCH_WIDTH = 100
DEFAULT_RANKED_WIDTH = 100


class HybridRetriever:
    """Dense + sparse retrieval fused into one chunk ranking."""

    def __init__(
        self,
        vector_store: "QdrantVectorStore",
        dense_embedder: "VoyageEmbeddingClient",
        sparse_embedder: "SparseEmbeddingClient",
        ranking: RankingStrategy | None = None,
        prefetch_width: int = DEFAULT_PREFETCH_WIDTH,
        ranked_width: int = DEFAULT_RANKED_WIDTH,
        doc_id_field: str = "doc_id",
    ) -> None:
        """
        Initialize retriever.

        Args:
            vector_store: Qdrant store
            dense_embedder: Voyage client
            sparse_embedder: BM25 client
            ranking: Rank-combination strategy (Qdrant-side RRF by default)
            prefetch_width: Top-k of each dense/sparse prefetch
            ranked_width: Number of fused chunks kept
            doc_id_field: Payload field expansion filters on
        """
        self.vector_store = vector_store
        self.dense_embedder = dense_embedder
        self.sparse_embedder = sparse_embedder
        self.ranking = ranking or DelegatedFusionRanking(vector_store)
        self.prefetch_width = prefetch_width
        self.ranked_width = ranked_width
        self.doc_id_field = doc_id_field

    async def ensure_corpus(self, corpus: CorpusConfig) -> None:
        """
        Verify the corpus collection exists.

        Raises:
            CorpusNotFoundError: If the collection is absent
            VectorStoreError: If the collection list cannot be fetched
        """
        collections = await self.vector_store.list_collections()
        if corpus.collection not in collections:
            raise CorpusNotFoundError(corpus.collection, corpus=corpus.name)

        if not await self.vector_store.has_payload_index(corpus.collection, self.doc_id_field):
            logger.warning(
                f"{__name__}:ensure_corpus - '{corpus.collection}' has no payload index on "
                f"{self.doc_id_field}; document expansion will be rejected until it is created",
            )

    async def encode(self, query: str, dimension: int) -> tuple[list[float], "SparseVector"]:
        """Dense and sparse embeddings of the query, requested concurrently."""
        dense, sparse = await asyncio.gather(
            self.dense_embedder.embed(query, dimension=dimension),
            self.sparse_embedder.embed(query),
        )
        return dense, sparse

    async def retrieve(self, query: str, corpus: CorpusConfig) -> list[Chunk]:
        """
        Retrieve the fused top chunks for a query.

        Args:
            query: Query text
            corpus: Corpus configuration (collection and dense dimension)

        Returns:
            list[Chunk]: Up to ranked_width chunks in descending fusion score

        Raises:
            CorpusNotFoundError: Collection missing (checked before any embedding call)
            EmbeddingProviderError: Either embedding provider failed
            VectorStoreError: Qdrant query failed or returned a malformed payload
        """
        await self.ensure_corpus(corpus)

        logger.info(
            f"{__name__}:retrieve - encoding query for {corpus.collection} "
            f"({corpus.dense_dimension}d dense + sparse)"
        )
        dense, sparse = await self.encode(query, corpus.dense_dimension)

        points = await self.ranking.rank(
            corpus.collection,
            dense_vector=dense,
            sparse_vector=sparse,
            prefetch_width=self.prefetch_width,
            ranked_width=self.ranked_width,
        )

        try:
            chunks = [
                Chunk.from_payload(point.id, point.payload, score=point.score or 0.0)
                for point in points
            ]
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            raise VectorStoreError(
                message=f"Malformed chunk payload in '{corpus.collection}'",
                operation="query",
                details={"error": str(e)},
            ) from e

        logger.info(f"{__name__}:retrieve - {len(chunks)} ranked chunks from {corpus.collection}")
        return chunks
