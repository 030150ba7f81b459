"""
Qdrant client wrapper.

Provides high-level interface for the collection checks, hybrid queries
and filtered scrolls the retrieval pipeline needs.

Dependencies: qdrant_client, legal_search.core.exceptions
System role: Vector store client for hybrid retrieval
"""

import logging
from typing import Any

from qdrant_client import AsyncQdrantClient, models
from qdrant_client.http.exceptions import ApiException

from legal_search.boundary.embeddings.embedding_schemas import SparseVector
from legal_search.boundary.vdb.vector_schemas import VectorSearchResult
from legal_search.core.exceptions import VectorStoreError

logger = logging.getLogger(__name__)


def _to_results(points: list[Any]) -> list[VectorSearchResult]:
    return [
        VectorSearchResult(
            id=str(point.id),
            score=getattr(point, "score", None),
            payload=dict(point.payload or {}),
        )
        for point in points
    ]


class QdrantVectorStore:
    """
    Qdrant client for hybrid retrieval.

    Wraps AsyncQdrantClient; every Qdrant failure is re-raised as
    VectorStoreError with the failing operation attached.
    """

    def __init__(
        self,
        client: AsyncQdrantClient,
        dense_vector_name: str = "dense",
        sparse_vector_name: str = "sparse",
    ) -> None:
        """
        Initialize the store.

        Args:
            client: Async Qdrant client constructed at startup
            dense_vector_name: Named dense vector in the collections
            sparse_vector_name: Named sparse vector in the collections
        """
        self.client = client
        self.dense_vector_name = dense_vector_name
        self.sparse_vector_name = sparse_vector_name

    async def list_collections(self) -> list[str]:
        """
        List collection names.

        Raises:
            VectorStoreError: If Qdrant is unreachable or rejects the call
        """
        try:
            response = await self.client.get_collections()
        except ApiException as e:
            raise VectorStoreError(
                message="Failed to list Qdrant collections",
                operation="list_collections",
                details={"error": str(e)},
            ) from e
        return [collection.name for collection in response.collections]

    async def has_payload_index(self, collection: str, field: str) -> bool:
        """
        Check whether a payload index exists on ``field``.

        Args:
            collection: Collection name
            field: Payload field name

        Raises:
            VectorStoreError: If collection info cannot be fetched
        """
        try:
            info = await self.client.get_collection(collection)
        except ApiException as e:
            raise VectorStoreError(
                message=f"Failed to get collection info for '{collection}'",
                operation="get_collection",
                details={"error": str(e)},
            ) from e
        return field in (info.payload_schema or {})

    async def fused_query(
        self,
        collection: str,
        dense_vector: list[float],
        sparse_vector: SparseVector,
        prefetch_width: int,
        ranked_width: int,
    ) -> list[VectorSearchResult]:
        """
        Dense + sparse prefetch combined by Qdrant's Reciprocal Rank Fusion.

        Args:
            collection: Collection name
            dense_vector: Dense query vector
            sparse_vector: Sparse query vector
            prefetch_width: Top-k of each prefetch
            ranked_width: Number of fused points returned

        Returns:
            list[VectorSearchResult]: Points in descending fusion score

        Raises:
            VectorStoreError: If the query fails
        """
        try:
            response = await self.client.query_points(
                collection_name=collection,
                prefetch=[
                    models.Prefetch(
                        query=dense_vector,
                        using=self.dense_vector_name,
                        limit=prefetch_width,
                    ),
                    models.Prefetch(
                        query=models.SparseVector(
                            indices=sparse_vector.indices,
                            values=sparse_vector.values,
                        ),
                        using=self.sparse_vector_name,
                        limit=prefetch_width,
                    ),
                ],
                query=models.FusionQuery(fusion=models.Fusion.RRF),
                limit=ranked_width,
                with_payload=True,
            )
        except ApiException as e:
            raise VectorStoreError(
                message=f"Hybrid query failed on '{collection}'",
                operation="query",
                details={"error": str(e)},
            ) from e
        return _to_results(response.points)

    async def vector_query(
        self,
        collection: str,
        vector: list[float] | SparseVector,
        limit: int,
    ) -> list[VectorSearchResult]:
        """
        Single-signal similarity query against the dense or sparse named vector.

        A SparseVector argument is routed to the sparse vector, a list of
        floats to the dense one.

        Raises:
            VectorStoreError: If the query fails
        """
        if isinstance(vector, SparseVector):
            query: Any = models.SparseVector(indices=vector.indices, values=vector.values)
            using = self.sparse_vector_name
        else:
            query = vector
            using = self.dense_vector_name

        try:
            response = await self.client.query_points(
                collection_name=collection,
                query=query,
                using=using,
                limit=limit,
                with_payload=True,
            )
        except ApiException as e:
            raise VectorStoreError(
                message=f"{using} query failed on '{collection}'",
                operation="query",
                details={"error": str(e), "using": using},
            ) from e
        return _to_results(response.points)

    async def filtered_scroll(
        self,
        collection: str,
        field: str,
        values: list[Any],
        limit: int,
        max_pages: int = 1,
    ) -> list[VectorSearchResult]:
        """
        Fetch every point whose ``field`` matches any of ``values``.

        Follows ``next_page_offset`` for up to ``max_pages`` pages of
        ``limit`` points. Result order is not meaningful.

        Args:
            collection: Collection name
            field: Payload field to filter on (needs a keyword index)
            values: Accepted values
            limit: Page size
            max_pages: Maximum number of pages to follow

        Returns:
            list[VectorSearchResult]: Matching points (score is None)

        Raises:
            VectorStoreError: If a scroll page fails
        """
        scroll_filter = models.Filter(
            must=[models.FieldCondition(key=field, match=models.MatchAny(any=values))]
        )
        results: list[VectorSearchResult] = []
        offset = None

        for page in range(1, max_pages + 1):
            try:
                points, offset = await self.client.scroll(
                    collection_name=collection,
                    scroll_filter=scroll_filter,
                    limit=limit,
                    offset=offset,
                    with_payload=True,
                    with_vectors=False,
                )
            except ApiException as e:
                raise VectorStoreError(
                    message=f"Filtered scroll failed on '{collection}'",
                    operation="scroll",
                    details={"error": str(e), "field": field, "page": page},
                ) from e

            results.extend(_to_results(points))
            if offset is None:
                break
            logger.warning(
                f"{__name__}:filtered_scroll - page {page} full ({limit} points) on '{collection}'",
            )
        else:
            logger.warning(
                f"{__name__}:filtered_scroll - stopped after {max_pages} pages, "
                f"more points match {field} on '{collection}'",
            )

        return results

    async def ensure_payload_index(self, collection: str, field: str) -> bool:
        """
        Create a keyword payload index on ``field`` if it is missing.

        Returns:
            bool: True if the index was created, False if it already existed

        Raises:
            VectorStoreError: If index creation fails
        """
        if await self.has_payload_index(collection, field):
            return False
        try:
            await self.client.create_payload_index(
                collection_name=collection,
                field_name=field,
                field_schema=models.PayloadSchemaType.KEYWORD,
                wait=True,
            )
        except ApiException as e:
            raise VectorStoreError(
                message=f"Failed to create payload index on '{field}'",
                operation="create_payload_index",
                details={"error": str(e), "collection": collection},
            ) from e
        logger.info(f"{__name__}:ensure_payload_index - keyword index created on {collection}.{field}")
        return True

    async def close(self) -> None:
        """Close the underlying client."""
        await self.client.close()
