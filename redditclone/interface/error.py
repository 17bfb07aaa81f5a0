"""Interface layer error mapping.

Domain errors are translated to HTTP responses in one place so every route
reports the same kind of failure with the same status code.
"""

from contextlib import contextmanager
from typing import Iterator

import logfire
import pydantic
from fastapi import HTTPException, status

from redditclone.domain.error import (
    BadCommentBodyError,
    BadPayloadError,
    DomainError,
    NotFoundError,
    StorageError,
    ValidationError,
)


def to_http_exception(error: DomainError) -> HTTPException:
    """Map a domain error to the HTTP error reported to the client."""
    if isinstance(error, BadCommentBodyError):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(error)
        )
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(error, BadPayloadError):
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=str(error)
        )
    if isinstance(error, StorageError):
        # Backend details stay in the logs
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))


@contextmanager
def http_errors(operation: str) -> Iterator[None]:
    """Translate errors raised by a route body into HTTP errors.

    Args:
        operation: Route name used in log events
    """
    try:
        yield
    except pydantic.ValidationError as e:
        logfire.warn("Request validation error", operation=operation, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=[
                {"loc": list(err["loc"]), "msg": err["msg"]} for err in e.errors()
            ],
        ) from e
    except StorageError as e:
        logfire.error(
            "Storage failure", operation=operation, error=str(e), _exc_info=True
        )
        raise to_http_exception(e) from e
    except DomainError as e:
        logfire.warn("Domain error", operation=operation, error=str(e))
        raise to_http_exception(e) from e
