"""
FastAPI middleware for observability.

Correlation ID binding and per-request access logging.

Dependencies: starlette, legal_search.observability
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from legal_search.observability.correlation import (
    CORRELATION_HEADER,
    clear_correlation_id,
    set_correlation_id,
)
from legal_search.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)

PROCESS_TIME_HEADER = "X-Process-Time-Ms"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per request with status and duration."""

    async def dispatch(self, request: Request, call_next):
        """
        Time the request and log its outcome.

        5xx answers are logged as warnings, unhandled exceptions with their
        traceback before being re-raised.
        """
        start_time = time.perf_counter()
        method, path = request.method, request.url.path

        try:
            response: Response = await call_next(request)
        except Exception:
            logger.exception(
                f"{method} {path} - unhandled exception after "
                f"{round((time.perf_counter() - start_time) * 1000, 2)}ms"
            )
            raise

        elapsed_ms = round((time.perf_counter() - start_time) * 1000, 2)
        response.headers[PROCESS_TIME_HEADER] = str(elapsed_ms)
        log_with_context(
            logger,
            logging.WARNING if response.status_code >= 500 else logging.INFO,
            f"{method} {path} - {response.status_code} in {elapsed_ms}ms",
            method=method,
            path=path,
            status_code=response.status_code,
            client_host=request.client.host if request.client else None,
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Binds X-Correlation-ID to the request context and echoes it back."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response: Response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
