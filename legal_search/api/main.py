"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, legal_search.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from legal_search.api.deps.dependencies import ServiceContainer, get_settings_dependency
from legal_search.observability import configure_logging
from legal_search.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware
from legal_search.api import api_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Builds the Qdrant and embedding clients on startup and closes them on shutdown.
    """
    settings = get_settings_dependency()
    configure_logging(settings.log_level)
    logger = logging.getLogger("uvicorn")

    # Startup
    logger.info(f"Starting Legal Hybrid Search ({settings.environment})...")
    app.state.container = ServiceContainer.from_settings(settings)
    logger.info("Service container ready")

    yield

    # Shutdown
    await app.state.container.aclose()
    logger.info("Service container closed")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        debug=get_settings_dependency().debug,
        title="Legal Hybrid Search API",
        description="Hybrid dense + sparse retrieval over chunked court decisions",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "legal_search.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
