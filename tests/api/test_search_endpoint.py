"""
Test suite for the search and collection endpoints.

The search service is built from the real pipeline components over mocked
boundary clients and injected through dependency_overrides.

System role: Verification of search HTTP API
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from legal_search.api.deps import get_search_service, get_settings_dependency, get_vector_store
from legal_search.api.main import create_app
from legal_search.application.services.search_service import SearchService
from legal_search.configs import Settings, get_settings
from legal_search.core.exceptions import EmbeddingProviderError
from legal_search.core.retrieval import DocumentExpander, HybridRetriever


@pytest.fixture
def search_service(
    mock_vector_store: AsyncMock,
    mock_dense_embedder: AsyncMock,
    mock_sparse_embedder: AsyncMock,
    primary_corpus,
    alternate_corpus,
    make_point,
) -> SearchService:
    mock_vector_store.fused_query.return_value = [
        make_point("c1", "D1", 0, score=0.9),
        make_point("c2", "D1", 1, score=0.7),
        make_point("c3", "D2", 0, score=0.5),
    ]
    mock_vector_store.filtered_scroll.return_value = [
        make_point("c1", "D1", 0),
        make_point("c2", "D1", 1),
        make_point("c3", "D2", 0),
    ]
    return SearchService(
        retriever=HybridRetriever(mock_vector_store, mock_dense_embedder, mock_sparse_embedder),
        expander=DocumentExpander(mock_vector_store),
        corpora={"primary": primary_corpus, "alternate": alternate_corpus},
    )


@pytest.fixture
def client(search_service: SearchService, mock_vector_store: AsyncMock) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_search_service] = lambda: search_service
    app.dependency_overrides[get_vector_store] = lambda: mock_vector_store
    app.dependency_overrides[get_settings_dependency] = lambda: Settings()
    return TestClient(app)


@pytest.fixture
def production(monkeypatch: pytest.MonkeyPatch):
    """Run the test with ENVIRONMENT=production settings."""
    monkeypatch.setenv("ENVIRONMENT", "production")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSearchEndpoint:
    """Test suite for POST /api/v1/search."""

    def test_single_mode_should_return_documents(self, client: TestClient) -> None:
        """Test a successful search returns the reassembled documents."""
        response = client.post("/api/v1/search", json={"query": "dano moral"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["mode"] == "single"
        documents = body["result"]["documents"]
        assert [(d["doc_id"], d["full_text"]) for d in documents] == [
            ("D1", "D1#0 D1#1"),
            ("D2", "D2#0"),
        ]

    def test_empty_query_should_return_400(self, client: TestClient, mock_vector_store) -> None:
        """Test blank query is rejected before any remote call."""
        response = client.post("/api/v1/search", json={"query": "  "})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["details"] == {"field": "query"}
        mock_vector_store.list_collections.assert_not_awaited()

    def test_missing_query_should_return_400(self, client: TestClient) -> None:
        """Test a body without query is an InvalidRequestError as well."""
        response = client.post("/api/v1/search", json={"limit": 5})

        assert response.status_code == 400

    def test_limit_out_of_range_should_return_422(self, client: TestClient) -> None:
        """Test limit is validated by the request model."""
        response = client.post("/api/v1/search", json={"query": "x", "limit": 0})

        assert response.status_code == 422

    def test_unknown_corpus_should_return_404(self, client: TestClient) -> None:
        """Test single mode failure uses the error's status code."""
        response = client.post("/api/v1/search", json={"query": "x", "corpus": "tjsp-chunks"})

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "Collection 'tjsp-chunks' not found"
        assert "hint" in body["details"]

    def test_production_should_omit_details(self, client: TestClient, production) -> None:
        """Test production responses carry only the message."""
        response = client.post("/api/v1/search", json={"query": "x", "corpus": "tjsp-chunks"})

        assert response.status_code == 404
        assert response.json()["details"] is None

    def test_compare_mode_partial_failure_should_return_200(
        self, client: TestClient, mock_dense_embedder: AsyncMock
    ) -> None:
        """Test alternate provider failure is reported alongside the primary result."""
        # Arrange
        async def embed(text, dimension=512):
            if dimension == 1024:
                raise EmbeddingProviderError("Voyage AI request failed: ReadTimeout", provider="voyage")
            return [0.1] * dimension

        mock_dense_embedder.embed.side_effect = embed

        # Act
        response = client.post("/api/v1/search", json={"query": "x", "compareMode": True})

        # Assert
        assert response.status_code == 200
        results = response.json()["results"]
        assert results["primary"]["success"] is True
        assert results["primary"]["total"] == 2
        assert results["alternate"]["success"] is False
        assert results["alternate"]["error"]["type"] == "EmbeddingProviderError"
        assert "status_code" not in results["alternate"]["error"]

    def test_compare_mode_total_failure_should_return_502(
        self, client: TestClient, mock_vector_store: AsyncMock
    ) -> None:
        """Test both runs failing answers 502 with both errors."""
        mock_vector_store.list_collections.return_value = []

        response = client.post("/api/v1/search", json={"query": "x", "compare_mode": True})

        assert response.status_code == 502
        body = response.json()
        assert body["success"] is False
        assert set(body["results"]) == {"primary", "alternate"}


class TestDocIdIndexEndpoint:
    """Test suite for PUT /api/v1/collections/{collection}/doc-id-index."""

    def test_missing_index_should_be_created(self, client: TestClient, mock_vector_store) -> None:
        response = client.put("/api/v1/collections/tjsc-voyage-512-chunks/doc-id-index")

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "action": "created",
            "collection": "tjsc-voyage-512-chunks",
            "field": "doc_id",
        }
        mock_vector_store.ensure_payload_index.assert_awaited_once_with("tjsc-voyage-512-chunks", "doc_id")

    def test_existing_index_should_need_no_action(self, client: TestClient, mock_vector_store) -> None:
        mock_vector_store.ensure_payload_index.return_value = False

        response = client.put("/api/v1/collections/tjsc-voyage-1024-chunks/doc-id-index")

        assert response.json()["action"] == "no_action_needed"

    def test_missing_collection_should_return_404(self, client: TestClient, mock_vector_store) -> None:
        response = client.put("/api/v1/collections/unknown/doc-id-index")

        assert response.status_code == 404
        assert "hint" in response.json()["details"]
        mock_vector_store.ensure_payload_index.assert_not_awaited()
