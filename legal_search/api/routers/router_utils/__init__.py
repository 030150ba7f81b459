"""
Router utility functions.

Contains helper functions extracted from router endpoints to keep them clean.
"""

from legal_search.api.routers.router_utils.error_handling import (
    error_response,
    handle_search_errors,
)

__all__ = [
    "error_response",
    "handle_search_errors",
]
