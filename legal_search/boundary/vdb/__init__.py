"""
Vector database boundary layer.

Provides the Qdrant client used for hybrid queries and document expansion.
- QdrantVectorStore: collection checks, RRF hybrid query, filtered scroll

Dependencies: qdrant_client
System role: Vector store adapter for hybrid retrieval
"""

from legal_search.boundary.vdb.vector_schemas import VectorSearchResult
from legal_search.boundary.vdb.vector_store_client import QdrantVectorStore

__all__ = [
    "VectorSearchResult",
    "QdrantVectorStore",
]
