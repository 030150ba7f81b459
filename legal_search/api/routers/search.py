"""
Hybrid search API endpoint.

Routes: POST /search

Single mode answers with one pipeline result, or with the pipeline's
error status. Compare mode always answers with both results unless both
runs failed.

Dependencies: legal_search.application.services.search_service, legal_search.models
System role: Search HTTP API
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from legal_search.api.deps import get_search_service
from legal_search.api.routers.router_utils import error_response, handle_search_errors
from legal_search.application.services.search_service import SearchService
from legal_search.models.search import SearchRequest, SearchResponse

router = APIRouter(prefix="/search", tags=["search"])


@router.post("", response_model=SearchResponse)
@handle_search_errors
async def search(
    request: SearchRequest,
    search_service: SearchService = Depends(get_search_service),
):
    """
    Search legal documents with dense + sparse hybrid retrieval.

    Args:
        request: Query, document limit, corpus and compare flag
        search_service: Injected SearchService

    Returns:
        SearchResponse: Reassembled documents per corpus, best first
    """
    response = await search_service.search(request)

    if response.mode == "single" and not response.success:
        error = response.result.error
        return error_response(error.status_code, error.message, error.details)

    if response.mode == "compare" and not response.success:
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content=response.model_dump(mode="json"),
        )

    return response
