"""
Embedding provider boundary layer.

Remote clients that encode a query into its dense and sparse representations.
- VoyageEmbeddingClient: Voyage AI dense embeddings (512d / 1024d)
- SparseEmbeddingClient: BM25 sparse embeddings from the embedding microservice

Dependencies: httpx
System role: Query encoding adapters for hybrid retrieval
"""

from legal_search.boundary.embeddings.embedding_schemas import SparseVector
from legal_search.boundary.embeddings.sparse_client import SparseEmbeddingClient
from legal_search.boundary.embeddings.voyage_client import VoyageEmbeddingClient

__all__ = [
    "SparseVector",
    "SparseEmbeddingClient",
    "VoyageEmbeddingClient",
]
