"""
Health check API endpoints.

Routes: GET /health, GET /health/vector-store, GET /health/embeddings

Dependencies: legal_search.api.deps, legal_search.boundary
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from legal_search.api.deps import get_dense_embedder, get_sparse_embedder, get_vector_store
from legal_search.boundary.embeddings import SparseEmbeddingClient, VoyageEmbeddingClient
from legal_search.boundary.vdb import QdrantVectorStore
from legal_search.core.exceptions import VectorStoreError


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str
    components: dict[str, bool] | None = None


router = APIRouter(prefix="/health", tags=["health"])


def _unhealthy(message: str, components: dict[str, bool] | None = None) -> JSONResponse:
    body = HealthResponse(status="unhealthy", message=message, components=components)
    return JSONResponse(status_code=503, content=body.model_dump())


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/vector-store", response_model=HealthResponse)
async def health_check_vector_store(
    vector_store: QdrantVectorStore = Depends(get_vector_store),
):
    """Vector store health check: Qdrant must answer a collection listing."""
    try:
        collections = await vector_store.list_collections()
    except VectorStoreError as e:
        return _unhealthy(f"Vector store unreachable: {e.message}")
    return HealthResponse(
        status="healthy",
        message=f"Vector store accessible ({len(collections)} collections)",
    )


@router.get("/embeddings", response_model=HealthResponse)
async def health_check_embeddings(
    dense_embedder: VoyageEmbeddingClient = Depends(get_dense_embedder),
    sparse_embedder: SparseEmbeddingClient = Depends(get_sparse_embedder),
):
    """
    Dense and sparse embedding provider health check.

    The dense check sends a billed Voyage embedding request unless
    VOYAGE_HEALTH_PROBE=false, in which case only the API key is checked.
    """
    components = {
        "dense": await dense_embedder.check_health(),
        "sparse": await sparse_embedder.check_health(),
    }
    if not all(components.values()):
        return _unhealthy("Embedding provider unavailable", components)
    return HealthResponse(status="healthy", message="Embedding providers OK", components=components)
