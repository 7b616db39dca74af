"""
Error types raised by the validation and request handling layers.

Each error carries the HTTP status code it maps to and the message that
is returned to the client as ``{"message": ...}``.  The exception
handlers registered in ``main.py`` perform the conversion.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import status

logger = logging.getLogger(__name__)

MALFORMED_INPUT = "Illegal, missing, or malformed input"
INTERNAL_ERROR = "Internal Server Error"


class APIError(Exception):
    """Base class for errors that translate directly into a response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(APIError):
    """Malformed, missing or illegal input (400)."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(APIError):
    """A create request collides with an existing key (422)."""

    # Starlette renamed the 422 constant between releases.
    status_code = 422


class NotFoundError(APIError):
    """Lookup or update target does not exist (404)."""

    status_code = status.HTTP_404_NOT_FOUND


class InternalError(APIError):
    """Store-level failure.  The message never includes the cause."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = INTERNAL_ERROR) -> None:
        super().__init__(message)


@contextmanager
def store_errors(action: str) -> Iterator[None]:
    """Turn any store failure inside the block into ``InternalError``.

    The underlying exception is logged with its traceback; the client only
    sees the generic message.  ``APIError`` subclasses pass through.
    """
    try:
        yield
    except APIError:
        raise
    except Exception as exc:
        logger.exception("Error %s", action)
        raise InternalError() from exc
