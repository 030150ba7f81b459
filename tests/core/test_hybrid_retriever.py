"""
Test suite for HybridRetriever.

Tests corpus existence checks, concurrent query encoding and payload
parsing. Uses mocked vector store and embedding clients.

System role: Verification of the retrieval stage
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from legal_search.boundary.embeddings.embedding_schemas import SparseVector
from legal_search.boundary.vdb.vector_schemas import VectorSearchResult
from legal_search.core.exceptions import (
    CorpusNotFoundError,
    EmbeddingProviderError,
    VectorStoreError,
)
from legal_search.core.retrieval.hybrid_retriever import HybridRetriever
from legal_search.models.search import CorpusConfig


@pytest.fixture
def retriever(
    mock_vector_store: AsyncMock,
    mock_dense_embedder: AsyncMock,
    mock_sparse_embedder: AsyncMock,
) -> HybridRetriever:
    """Provide HybridRetriever with mocked collaborators and delegated fusion."""
    return HybridRetriever(
        vector_store=mock_vector_store,
        dense_embedder=mock_dense_embedder,
        sparse_embedder=mock_sparse_embedder,
    )


class TestHybridRetrieverEnsureCorpus:
    """Test suite for HybridRetriever.ensure_corpus."""

    @pytest.mark.asyncio
    async def test_missing_collection_should_fail_before_embedding(
        self,
        retriever: HybridRetriever,
        mock_dense_embedder: AsyncMock,
        mock_sparse_embedder: AsyncMock,
    ) -> None:
        """Test CorpusNotFoundError is raised with no embedding call made."""
        corpus = CorpusConfig(name="tjsp", collection="tjsp-chunks", dense_dimension=512)

        with pytest.raises(CorpusNotFoundError) as exc_info:
            await retriever.retrieve("dano moral", corpus)

        assert exc_info.value.details["collection"] == "tjsp-chunks"
        assert exc_info.value.status_code == 404
        mock_dense_embedder.embed.assert_not_awaited()
        mock_sparse_embedder.embed.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_payload_index_should_only_warn(
        self,
        retriever: HybridRetriever,
        mock_vector_store: AsyncMock,
        primary_corpus: CorpusConfig,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test a collection without doc_id index is still searched."""
        mock_vector_store.has_payload_index.return_value = False

        await retriever.ensure_corpus(primary_corpus)

        assert "no payload index" in caplog.text


class TestHybridRetrieverRetrieve:
    """Test suite for HybridRetriever.retrieve."""

    @pytest.mark.asyncio
    async def test_retrieve_should_encode_with_corpus_dimension(
        self,
        retriever: HybridRetriever,
        mock_vector_store: AsyncMock,
        mock_dense_embedder: AsyncMock,
        alternate_corpus: CorpusConfig,
    ) -> None:
        """Test dense vector size follows the corpus configuration."""
        # Act
        await retriever.retrieve("usucapião", alternate_corpus)

        # Assert
        mock_dense_embedder.embed.assert_awaited_once_with("usucapião", dimension=1024)
        kwargs = mock_vector_store.fused_query.await_args.kwargs
        assert len(kwargs["dense_vector"]) == 1024
        assert kwargs["prefetch_width"] == 100
        assert kwargs["ranked_width"] == 100

    @pytest.mark.asyncio
    async def test_retrieve_should_return_chunks_in_fusion_order(
        self,
        retriever: HybridRetriever,
        mock_vector_store: AsyncMock,
        primary_corpus: CorpusConfig,
        make_point,
    ) -> None:
        """Test fused points become chunks carrying their score and metadata."""
        # Arrange
        mock_vector_store.fused_query.return_value = [
            make_point("c1", "D1", 0, score=0.9, process_number="123"),
            make_point("c3", "D2", 4, score=0.5),
        ]

        # Act
        chunks = await retriever.retrieve("dano moral", primary_corpus)

        # Assert
        assert [(c.id, c.doc_id, c.chunk_index, c.score) for c in chunks] == [
            ("c1", "D1", 0, 0.9),
            ("c3", "D2", 4, 0.5),
        ]
        assert chunks[0].metadata == {"process_number": "123"}

    @pytest.mark.asyncio
    async def test_encode_should_run_dense_and_sparse_concurrently(
        self,
        retriever: HybridRetriever,
        mock_dense_embedder: AsyncMock,
        mock_sparse_embedder: AsyncMock,
    ) -> None:
        """Test both providers are in flight at the same time."""
        # Arrange
        both_started = asyncio.Event()
        in_flight = 0

        async def wait_for_sibling():
            nonlocal in_flight
            in_flight += 1
            if in_flight == 2:
                both_started.set()
            # Times out unless the other provider call is already running
            await asyncio.wait_for(both_started.wait(), timeout=1)

        async def dense_embed(text, dimension=512):
            await wait_for_sibling()
            return [0.0] * dimension

        async def sparse_embed(text):
            await wait_for_sibling()
            return SparseVector(indices=[1], values=[1.0])

        mock_dense_embedder.embed.side_effect = dense_embed
        mock_sparse_embedder.embed.side_effect = sparse_embed

        # Act
        dense, sparse = await retriever.encode("query", 512)

        # Assert
        assert len(dense) == 512
        assert sparse.indices == [1]
        assert in_flight == 2

    @pytest.mark.asyncio
    async def test_embedding_failure_should_propagate(
        self,
        retriever: HybridRetriever,
        mock_sparse_embedder: AsyncMock,
        primary_corpus: CorpusConfig,
    ) -> None:
        """Test provider errors are not retried or swallowed."""
        mock_sparse_embedder.embed.side_effect = EmbeddingProviderError("down", provider="bm25")

        with pytest.raises(EmbeddingProviderError):
            await retriever.retrieve("query", primary_corpus)

        assert mock_sparse_embedder.embed.await_count == 1

    @pytest.mark.asyncio
    async def test_malformed_payload_should_raise_vector_store_error(
        self,
        retriever: HybridRetriever,
        mock_vector_store: AsyncMock,
        primary_corpus: CorpusConfig,
    ) -> None:
        """Test a ranked point without doc_id is rejected."""
        mock_vector_store.fused_query.return_value = [
            VectorSearchResult(id="c1", score=0.4, payload={"chunk_index": 0})
        ]

        with pytest.raises(VectorStoreError, match="Malformed"):
            await retriever.retrieve("query", primary_corpus)
