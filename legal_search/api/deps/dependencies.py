"""
Dependency injection container.

Builds the Qdrant and embedding clients once at startup and exposes the
pipeline components to routes through FastAPI dependencies.

Dependencies: fastapi, httpx, qdrant_client, legal_search.configs, legal_search.boundary
System role: DI container for service injection
"""

import logging
from functools import lru_cache

import httpx
from fastapi import Depends, Request
from qdrant_client import AsyncQdrantClient

from legal_search.application.services import SearchService, corpora_from_settings
from legal_search.boundary.embeddings import SparseEmbeddingClient, VoyageEmbeddingClient
from legal_search.boundary.vdb import QdrantVectorStore
from legal_search.configs import Settings, get_settings
from legal_search.core.retrieval import (
    DelegatedFusionRanking,
    DocumentExpander,
    HybridRetriever,
    LocalRRFRanking,
)

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Clients and services shared by all requests, built at startup."""

    def __init__(
        self,
        vector_store: QdrantVectorStore,
        dense_embedder: VoyageEmbeddingClient,
        sparse_embedder: SparseEmbeddingClient,
        search_service: SearchService,
        http_clients: list[httpx.AsyncClient] | None = None,
    ) -> None:
        self.vector_store = vector_store
        self.dense_embedder = dense_embedder
        self.sparse_embedder = sparse_embedder
        self.search_service = search_service
        self._http_clients = http_clients or []

    @classmethod
    def from_settings(cls, settings: Settings) -> "ServiceContainer":
        """
        Construct every client and pipeline component from settings.

        Args:
            settings: Application settings

        Returns:
            ServiceContainer: Ready-to-use container
        """
        vector_store = QdrantVectorStore(
            client=AsyncQdrantClient(
                url=settings.vector_store.url,
                api_key=settings.vector_store.api_key,
                timeout=settings.vector_store.timeout,
            ),
            dense_vector_name=settings.vector_store.dense_vector_name,
            sparse_vector_name=settings.vector_store.sparse_vector_name,
        )

        voyage_http = httpx.AsyncClient(
            base_url=settings.voyage.base_url,
            timeout=settings.voyage.timeout,
        )
        sparse_http = httpx.AsyncClient(
            base_url=settings.sparse_embedding.url,
            timeout=settings.sparse_embedding.timeout,
        )
        dense_embedder = VoyageEmbeddingClient(
            http_client=voyage_http,
            api_key=settings.voyage.api_key,
            model=settings.voyage.model,
            health_probe=settings.voyage.health_probe,
        )
        sparse_embedder = SparseEmbeddingClient(
            http_client=sparse_http,
            model=settings.sparse_embedding.model,
            health_timeout=settings.sparse_embedding.health_timeout,
        )

        retrieval = settings.retrieval
        doc_id_field = settings.vector_store.doc_id_field
        if retrieval.fusion_strategy == "local":
            ranking = LocalRRFRanking(vector_store, k=retrieval.rrf_k)
        else:
            ranking = DelegatedFusionRanking(vector_store)

        retriever = HybridRetriever(
            vector_store=vector_store,
            dense_embedder=dense_embedder,
            sparse_embedder=sparse_embedder,
            ranking=ranking,
            prefetch_width=retrieval.prefetch_width,
            ranked_width=retrieval.ranked_width,
            doc_id_field=doc_id_field,
        )
        expander = DocumentExpander(
            vector_store=vector_store,
            document_cap=retrieval.document_cap,
            scroll_limit=retrieval.expansion_page_size,
            max_pages=retrieval.expansion_max_pages,
            doc_id_field=doc_id_field,
        )
        search_service = SearchService(
            retriever=retriever,
            expander=expander,
            corpora=corpora_from_settings(retrieval),
            default_corpus=retrieval.default_corpus,
            default_limit=retrieval.default_limit,
            expose_details=not settings.is_production,
        )

        logger.info(
            f"{__name__}:from_settings - qdrant={settings.vector_store.url} "
            f"fusion={retrieval.fusion_strategy} embedding_service={settings.sparse_embedding.url}"
        )
        return cls(
            vector_store=vector_store,
            dense_embedder=dense_embedder,
            sparse_embedder=sparse_embedder,
            search_service=search_service,
            http_clients=[voyage_http, sparse_http],
        )

    async def aclose(self) -> None:
        """Close HTTP and Qdrant clients."""
        for client in self._http_clients:
            await client.aclose()
        await self.vector_store.close()


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_container(request: Request) -> ServiceContainer:
    """
    Get the container created by the application lifespan.

    Args:
        request: Current request

    Returns:
        ServiceContainer: Startup-built container
    """
    return request.app.state.container


def get_search_service(container: ServiceContainer = Depends(get_container)) -> SearchService:
    """Get the hybrid search service."""
    return container.search_service


def get_vector_store(container: ServiceContainer = Depends(get_container)) -> QdrantVectorStore:
    """Get the Qdrant vector store."""
    return container.vector_store


def get_dense_embedder(container: ServiceContainer = Depends(get_container)) -> VoyageEmbeddingClient:
    """Get the Voyage dense embedding client."""
    return container.dense_embedder


def get_sparse_embedder(container: ServiceContainer = Depends(get_container)) -> SparseEmbeddingClient:
    """Get the BM25 sparse embedding client."""
    return container.sparse_embedder
