"""
Shared test fixtures and configuration for entire test suite.

Provides: chunk/point factories, vector store and embedding client mocks
Dependencies: pytest, unittest.mock
System role: Test infrastructure and fixture management
"""

from unittest.mock import AsyncMock

import pytest

from legal_search.boundary.embeddings.embedding_schemas import SparseVector
from legal_search.boundary.vdb.vector_schemas import VectorSearchResult
from legal_search.models.chunk import Chunk
from legal_search.models.search import CorpusConfig


def build_chunk(
    chunk_id: str,
    doc_id: str,
    chunk_index: int,
    score: float = 0.0,
    text: str | None = None,
    **metadata,
) -> Chunk:
    """Chunk with predictable text ("<doc_id>#<index>" unless given)."""
    return Chunk(
        id=chunk_id,
        doc_id=doc_id,
        chunk_index=chunk_index,
        text=f"{doc_id}#{chunk_index}" if text is None else text,
        score=score,
        metadata=metadata,
    )


def build_point(
    point_id: str,
    doc_id: str,
    chunk_index: int,
    score: float | None = None,
    text: str | None = None,
    **extra,
) -> VectorSearchResult:
    """Vector store point with a chunk payload."""
    return VectorSearchResult(
        id=point_id,
        score=score,
        payload={
            "doc_id": doc_id,
            "chunk_index": chunk_index,
            "chunk_text": f"{doc_id}#{chunk_index}" if text is None else text,
            **extra,
        },
    )


@pytest.fixture
def primary_corpus() -> CorpusConfig:
    """Provide the 512d primary corpus configuration."""
    return CorpusConfig(name="primary", collection="tjsc-voyage-512-chunks", dense_dimension=512)


@pytest.fixture
def alternate_corpus() -> CorpusConfig:
    """Provide the 1024d alternate corpus configuration."""
    return CorpusConfig(name="alternate", collection="tjsc-voyage-1024-chunks", dense_dimension=1024)


@pytest.fixture
def mock_vector_store() -> AsyncMock:
    """
    Create mock QdrantVectorStore.

    Both corpora exist and carry a doc_id payload index; queries return nothing.
    """
    store = AsyncMock()
    store.list_collections = AsyncMock(
        return_value=["tjsc-voyage-512-chunks", "tjsc-voyage-1024-chunks"]
    )
    store.has_payload_index = AsyncMock(return_value=True)
    store.fused_query = AsyncMock(return_value=[])
    store.vector_query = AsyncMock(return_value=[])
    store.filtered_scroll = AsyncMock(return_value=[])
    store.ensure_payload_index = AsyncMock(return_value=True)
    return store


@pytest.fixture
def mock_dense_embedder() -> AsyncMock:
    """Create mock Voyage client returning a vector of the requested size."""
    embedder = AsyncMock()
    embedder.embed = AsyncMock(side_effect=lambda text, dimension=512: [0.1] * dimension)
    embedder.check_health = AsyncMock(return_value=True)
    return embedder


@pytest.fixture
def mock_sparse_embedder() -> AsyncMock:
    """Create mock BM25 client."""
    embedder = AsyncMock()
    embedder.embed = AsyncMock(return_value=SparseVector(indices=[3, 17], values=[0.4, 1.2]))
    embedder.check_health = AsyncMock(return_value=True)
    return embedder


@pytest.fixture
def make_chunk():
    """Provide the chunk factory."""
    return build_chunk


@pytest.fixture
def make_point():
    """Provide the vector store point factory."""
    return build_point
