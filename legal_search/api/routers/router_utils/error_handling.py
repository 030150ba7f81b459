"""
Search error handling utilities.

Maps the domain exception hierarchy onto HTTP error responses with the
uniform ErrorResponse body. Diagnostic details are only included outside
production.
"""

import functools
import logging
import traceback
from typing import Any, Callable, TypeVar

from fastapi import status
from fastapi.responses import JSONResponse

from legal_search.configs import get_settings
from legal_search.core.exceptions import LegalSearchException
from legal_search.models.common import ErrorResponse

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])


def error_response(
    status_code: int,
    message: str,
    details: dict | None = None,
) -> JSONResponse:
    """Build an ErrorResponse, dropping details in production."""
    if get_settings().is_production:
        details = None
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message, details=details or None).model_dump(),
    )


def handle_search_errors(func: F) -> F:
    """
    Decorator turning domain exceptions into ErrorResponse JSON.

    LegalSearchException subclasses keep their own status code; anything
    else becomes a 500.
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except LegalSearchException as e:
            logger.warning(
                f"{type(e).__name__}: {e.message}",
                extra={"error_type": type(e).__name__, "status_code": e.status_code},
            )
            return error_response(e.status_code, e.message, dict(e.details))

        except Exception as e:
            logger.exception(
                "Unexpected failure in search operation",
                extra={"error": str(e)}
            )
            return error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                str(e) or "Internal error",
                {"traceback": traceback.format_exception(type(e), e, e.__traceback__)},
            )

    return wrapper  # type: ignore
