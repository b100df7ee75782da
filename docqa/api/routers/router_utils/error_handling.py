"""
RAG error handling utilities.

Provides a decorator for consistent error handling across document and query
endpoints: domain exceptions are logged with context and mapped to
HTTPExceptions.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from docqa.observability.log_utils import log_exception_with_context, log_with_context
from docqa.core.exceptions import (
    ContractViolation,
    DocQAException,
    NotFoundError,
    ParsingError,
    ProviderError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])


def handle_rag_errors(func: F) -> F:
    """
    Decorator to handle domain errors and transform them into HTTPExceptions.

    Mapping:
        ValidationError -> 400
        NotFoundError -> 404
        ParsingError -> 422
        StorageError -> 502
        ProviderError -> 503
        ContractViolation -> 500
        any other exception -> 500
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except ValidationError as e:
            log_with_context(logger, logging.WARNING, "Invalid request", error=e.message, **e.details)
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

        except NotFoundError as e:
            log_with_context(logger, logging.WARNING, "Resource not found", error=e.message, **e.details)
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

        except ParsingError as e:
            log_with_context(logger, logging.WARNING, "Document could not be parsed", error=e.message, **e.details)
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.message)

        except StorageError as e:
            log_with_context(logger, logging.ERROR, "Blob store failure", error=e.message, **e.details)
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)

        except ProviderError as e:
            log_with_context(logger, logging.ERROR, "Model provider failure", error=e.message, **e.details)
            raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.message)

        except ContractViolation as e:
            log_with_context(logger, logging.ERROR, "Embedding contract violated", error=e.message, **e.details)
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)

        except DocQAException as e:
            log_with_context(logger, logging.ERROR, "Unhandled domain error", error=e.message, **e.details)
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)

        except Exception as e:
            log_exception_with_context(logger, "Unexpected error", e)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Internal server error",
            )

    return wrapper  # type: ignore
