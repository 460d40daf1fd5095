"""
Error taxonomy shared by the services and the HTTP layer.

Services raise subclasses of ``ServiceError``; the exception handler
installed by ``create_app`` turns them into the standard
``{"success": false, "message": ...}`` envelope using the status code
carried by the exception.  Anything that is not a ``ServiceError`` is
an internal failure and is reported as HTTP 500.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import status


logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base class for expected, caller-visible failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    """Malformed identifier or request payload."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class ConflictError(ServiceError):
    """The resource already exists (duplicate account email)."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Already exists"


class UnauthorizedError(ServiceError):
    """Bad credentials.  The message never says which part was wrong."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password"


class NotFoundError(ServiceError):
    """Well-formed identifier that matches no document."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InternalError(ServiceError):
    """Unexpected failure (store unreachable, driver error...).

    ``detail`` holds the underlying error text; it is logged and only
    sent to clients when ``DEBUG`` is enabled.
    """

    def __init__(self, message: str | None = None, detail: str | None = None) -> None:
        super().__init__(message)
        self.detail = detail


@contextmanager
def internal_errors(message: str) -> Iterator[None]:
    """Turn unexpected exceptions raised in the block into ``InternalError``.

    ``ServiceError`` subclasses pass through untouched so that
    not-found, validation and conflict outcomes keep their status.
    """
    try:
        yield
    except ServiceError:
        raise
    except Exception as exc:
        logger.exception(message)
        raise InternalError(message, detail=str(exc)) from exc
