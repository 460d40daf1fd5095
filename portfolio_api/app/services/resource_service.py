"""
Generic CRUD engine for content resources.

Blog posts, the "about" profile and projects are all flat documents
that share the same five operations.  Instead of one service class per
kind, a ``ResourceKind`` describes what differs between them (the
collection name, the payload schema and whether timestamps are
stamped) and ``ResourceService`` implements the operations once.

Every write is a single-document operation:

* update uses ``find_one_and_update`` without ``upsert``, so a missing
  id never creates a document;
* delete uses ``find_one_and_delete`` and reports ``NotFoundError``
  when nothing matched.

Identifiers are validated with ``parse_object_id`` before any
collection call is made.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Type

from pymongo import ReturnDocument

from ..core.db import DocumentStore, parse_object_id
from ..core.errors import NotFoundError
from ..schemas.resource import AboutFields, BlogFields, ProjectFields, ResourceFields


logger = logging.getLogger(__name__)

TIMESTAMP_FIELDS = ("createdAt", "updatedAt", "publishedAt")


@dataclass(frozen=True)
class ResourceKind:
    """Configuration for one resource collection.

    Attributes:
        name: Singular label used in messages and logs (``"Blog"``).
        collection: MongoDB collection and URL segment (``"blogs"``).
        schema: Pydantic model listing the payload fields.
        timestamps: Whether ``createdAt``/``updatedAt``/``publishedAt``
            are maintained for this kind.
    """

    name: str
    collection: str
    schema: Type[ResourceFields]
    timestamps: bool = True

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(self.schema.model_fields)


BLOG = ResourceKind(name="Blog", collection="blogs", schema=BlogFields)
ABOUT = ResourceKind(name="About", collection="abouts", schema=AboutFields, timestamps=False)
PROJECT = ResourceKind(name="Project", collection="projects", schema=ProjectFields)

RESOURCE_KINDS = (BLOG, ABOUT, PROJECT)


def _now() -> datetime:
    # MongoDB keeps millisecond precision; truncate so the value we
    # return equals the value read back later.
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class ResourceService:
    """CRUD operations for one ``ResourceKind``."""

    def __init__(self, store: DocumentStore, kind: ResourceKind) -> None:
        self.kind = kind
        self.collection = store.collection(kind.collection)

    @staticmethod
    def serialize(doc: Dict[str, Any]) -> Dict[str, Any]:
        """Render a stored document with ``_id`` as a string ``id``."""
        data = {key: value for key, value in doc.items() if key != "_id"}
        return {"id": str(doc["_id"]), **data}

    async def create(self, fields: ResourceFields) -> Dict[str, Any]:
        """Insert a new resource and return it with its id and timestamps."""
        doc: Dict[str, Any] = fields.model_dump()
        if self.kind.timestamps:
            now = _now()
            for name in TIMESTAMP_FIELDS:
                doc[name] = now
        result = await self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        logger.info("Created %s %s", self.kind.name, result.inserted_id)
        return self.serialize(doc)

    async def list_all(self) -> List[Dict[str, Any]]:
        return [self.serialize(doc) async for doc in self.collection.find({})]

    async def get(self, resource_id: str) -> Dict[str, Any]:
        oid = parse_object_id(resource_id)
        doc = await self.collection.find_one({"_id": oid})
        if doc is None:
            raise NotFoundError(f"{self.kind.name} not found")
        return self.serialize(doc)

    async def update(self, resource_id: str, fields: ResourceFields) -> Dict[str, Any]:
        """Overwrite the fields the caller sent and return the new state.

        ``id``, ``createdAt`` and ``publishedAt`` are never modified;
        ``updatedAt`` is refreshed for kinds that keep timestamps.
        """
        oid = parse_object_id(resource_id)
        changes = fields.model_dump(exclude_unset=True)
        if self.kind.timestamps:
            changes["updatedAt"] = _now()
        if changes:
            doc = await self.collection.find_one_and_update(
                {"_id": oid},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        else:
            # Nothing to write (empty body on a kind without timestamps)
            doc = await self.collection.find_one({"_id": oid})
        if doc is None:
            raise NotFoundError(f"{self.kind.name} not found")
        logger.info("Updated %s %s", self.kind.name, resource_id)
        return self.serialize(doc)

    async def delete(self, resource_id: str) -> Dict[str, Any]:
        """Delete one resource and return the removed document."""
        oid = parse_object_id(resource_id)
        doc = await self.collection.find_one_and_delete({"_id": oid})
        if doc is None:
            raise NotFoundError(f"{self.kind.name} not found")
        logger.info("Deleted %s %s", self.kind.name, resource_id)
        return self.serialize(doc)
