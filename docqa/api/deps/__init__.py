"""API-specific dependencies."""

from .dependencies import (
    ServiceCache,
    get_document_service,
    get_query_service,
    get_service_cache,
)

__all__ = [
    "ServiceCache",
    "get_document_service",
    "get_query_service",
    "get_service_cache",
]
