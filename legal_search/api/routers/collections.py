"""
Collection administration endpoints.

Routes: PUT /collections/{collection}/doc-id-index

Document expansion filters on doc_id, which Qdrant only allows once a
keyword payload index exists on that field.

Dependencies: legal_search.api.deps, legal_search.boundary.vdb
System role: One-time collection setup HTTP API
"""

import logging
from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from legal_search.api.deps import get_settings_dependency, get_vector_store
from legal_search.api.routers.router_utils import handle_search_errors
from legal_search.boundary.vdb import QdrantVectorStore
from legal_search.configs import Settings
from legal_search.core.exceptions import CorpusNotFoundError

logger = logging.getLogger(__name__)


class IndexResponse(BaseModel):
    """Payload index creation result."""

    success: bool = True
    action: Literal["created", "no_action_needed"]
    collection: str
    field: str


router = APIRouter(prefix="/collections", tags=["collections"])


@router.put("/{collection}/doc-id-index", response_model=IndexResponse)
@handle_search_errors
async def ensure_doc_id_index(
    collection: str,
    vector_store: QdrantVectorStore = Depends(get_vector_store),
    settings: Settings = Depends(get_settings_dependency),
):
    """
    Create the keyword payload index on doc_id if it is missing.

    Args:
        collection: Qdrant collection name
        vector_store: Injected vector store
        settings: Application settings

    Returns:
        IndexResponse: Whether the index was created or already present
    """
    if collection not in await vector_store.list_collections():
        raise CorpusNotFoundError(collection)

    field = settings.vector_store.doc_id_field
    created = await vector_store.ensure_payload_index(collection, field)
    logger.info(
        f"{__name__}:ensure_doc_id_index - {collection}.{field} "
        f"{'created' if created else 'already indexed'}"
    )
    return IndexResponse(
        action="created" if created else "no_action_needed",
        collection=collection,
        field=field,
    )
