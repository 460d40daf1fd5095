"""
MongoDB integration.

This module owns the process-wide document store handle.  A single
``DocumentStore`` is opened by the startup hook in ``main.py``, closed by
the shutdown hook, kept on ``app.state`` and handed to the
services through the ``get_store`` dependency.  motor maintains its own
connection pool internally, so requests never open or close
connections themselves.

Identifiers are MongoDB ObjectIds.  ``parse_object_id`` performs the
syntax check every by-id operation runs before touching a collection.
"""

import logging
from typing import Any, Optional

from bson import ObjectId
from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient

from .config import settings
from .errors import ValidationError


logger = logging.getLogger(__name__)


class DocumentStore:
    """Thin wrapper around a motor client bound to one database."""

    def __init__(self, client: Any, db_name: str) -> None:
        self.client = client
        self.db = client[db_name]

    @classmethod
    def connect(
        cls,
        uri: Optional[str] = None,
        db_name: Optional[str] = None,
        timeout_ms: Optional[int] = None,
    ) -> "DocumentStore":
        """Create a client from the settings (or explicit overrides).

        motor connects lazily, so this never blocks; an unreachable
        server shows up as an error on the first operation, bounded by
        ``serverSelectionTimeoutMS``.
        """
        client = AsyncIOMotorClient(
            uri or settings.mongodb_uri,
            serverSelectionTimeoutMS=timeout_ms or settings.mongodb_timeout_ms,
            tz_aware=True,
        )
        name = db_name or settings.mongodb_db_name
        logger.info("Using MongoDB database %s", name)
        return cls(client, name)

    def collection(self, name: str) -> Any:
        return self.db[name]

    def close(self) -> None:
        # Motor client's close() is not async
        self.client.close()


def parse_object_id(value: str) -> ObjectId:
    """Return ``value`` as an ``ObjectId`` or raise ``ValidationError``.

    Only the canonical 24 character hex form is accepted; raw 12 byte
    strings are rejected so that path parameters cannot smuggle binary
    ids.
    """
    if not isinstance(value, str) or len(value) != 24 or not ObjectId.is_valid(value):
        raise ValidationError(f"Invalid id: {value!r}")
    return ObjectId(value)


def get_store(request: Request) -> DocumentStore:
    """FastAPI dependency returning the store opened at startup."""
    return request.app.state.store
