"""
API routes module.

FastAPI routers for all HTTP endpoints.
"""

from fastapi import APIRouter

from .routers import (
    collections_router,
    health_router,
    search_router,
)

api_router = APIRouter()

# Include all routers
api_router.include_router(health_router)
api_router.include_router(search_router)
api_router.include_router(collections_router)

__all__ = ["api_router"]
