"""
In-memory stand-ins for the parts of the motor API the services use.

Only equality filters on top-level keys and ``$set`` updates are
supported, which is all the application issues.  Every collection call
increments ``calls`` so tests can assert that invalid input never
reached the store, and ``fail_with`` makes every call raise, simulating
an unreachable server.
"""

import copy
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError


class _InsertOneResult:
    def __init__(self, inserted_id: ObjectId) -> None:
        self.inserted_id = inserted_id


class FakeCursor:
    def __init__(self, docs: List[Dict[str, Any]]) -> None:
        self._docs = docs

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for doc in self._docs:
            yield doc


class FakeCollection:
    def __init__(self, name: str) -> None:
        self.name = name
        self.docs: List[Dict[str, Any]] = []
        self.unique_keys: set[str] = set()
        self.calls = 0
        self.fail_with: Optional[Exception] = None

    def _touch(self) -> None:
        self.calls += 1
        if self.fail_with is not None:
            raise self.fail_with

    @staticmethod
    def _matches(doc: Dict[str, Any], query: Dict[str, Any]) -> bool:
        return all(doc.get(key) == value for key, value in query.items())

    def _find(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        for doc in self.docs:
            if self._matches(doc, query):
                return doc
        return None

    async def create_index(self, key: str, unique: bool = False) -> str:
        self._touch()
        if unique:
            self.unique_keys.add(key)
        return f"{key}_1"

    async def insert_one(self, document: Dict[str, Any]) -> _InsertOneResult:
        self._touch()
        for key in self.unique_keys:
            if any(doc.get(key) == document.get(key) for doc in self.docs):
                raise DuplicateKeyError(f"E11000 duplicate key error collection: {self.name} index: {key}_1")
        # pymongo adds the generated _id to the caller's dict
        document.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(document))
        return _InsertOneResult(document["_id"])

    def find(self, query: Optional[Dict[str, Any]] = None) -> FakeCursor:
        self._touch()
        query = query or {}
        return FakeCursor([copy.deepcopy(doc) for doc in self.docs if self._matches(doc, query)])

    async def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        self._touch()
        doc = self._find(query)
        return copy.deepcopy(doc) if doc is not None else None

    async def find_one_and_update(
        self,
        query: Dict[str, Any],
        update: Dict[str, Any],
        return_document: Any = ReturnDocument.BEFORE,
        upsert: bool = False,
    ) -> Optional[Dict[str, Any]]:
        self._touch()
        doc = self._find(query)
        if doc is None:
            # upsert is never requested by the application
            assert not upsert
            return None
        before = copy.deepcopy(doc)
        doc.update(update.get("$set", {}))
        return copy.deepcopy(doc) if return_document == ReturnDocument.AFTER else before

    async def find_one_and_delete(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        self._touch()
        doc = self._find(query)
        if doc is None:
            return None
        self.docs.remove(doc)
        return doc

    async def count_documents(self, query: Dict[str, Any]) -> int:
        self._touch()
        return sum(1 for doc in self.docs if self._matches(doc, query))


class FakeDatabase:
    def __init__(self) -> None:
        self.collections: Dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]


class FakeClient:
    def __init__(self) -> None:
        self.databases: Dict[str, FakeDatabase] = {}
        self.closed = False

    def __getitem__(self, name: str) -> FakeDatabase:
        if name not in self.databases:
            self.databases[name] = FakeDatabase()
        return self.databases[name]

    def close(self) -> None:
        self.closed = True
