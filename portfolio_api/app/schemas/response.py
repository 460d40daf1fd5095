"""
Response envelopes.

Every endpoint answers with ``success`` plus either ``data``, a
``message`` or both.  Failures follow ``ErrorResponse``; ``error`` is
only filled in when the application runs with ``DEBUG`` enabled.
"""

from typing import Any, Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: Optional[str] = None


def envelope(message: Optional[str] = None, data: Any = None, **extra: Any) -> dict:
    """Build a success payload, omitting empty ``message``/``data`` keys."""
    body: dict = {"success": True}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    body.update(extra)
    return body


def error_body(message: str, error: Optional[str] = None) -> dict:
    body = ErrorResponse(message=message, error=error).model_dump(exclude_none=True)
    return body
