"""
Business logic for accounts.

``UserRepository`` is the identity store: a thin layer over the
``users`` collection with lookup, insert and listing.  It has no update
or delete operations.  ``UserService`` implements registration and
login on top of it and issues session tokens.

Email uniqueness is checked before inserting, and additionally enforced
by a unique index on ``email`` created at startup
(``UserRepository.ensure_indexes``).  Two concurrent registrations for
the same address can both pass the lookup; the index makes the second
insert fail, which is reported as the same ``ConflictError``.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from fastapi.concurrency import run_in_threadpool
from pymongo.errors import DuplicateKeyError

from ..core.config import settings
from ..core.db import DocumentStore, parse_object_id
from ..core.errors import ConflictError, NotFoundError, UnauthorizedError
from ..core.security import create_access_token, hash_password, verify_password
from ..schemas.user import UserCreate, UserLogin, UserRead


logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"

INVALID_CREDENTIALS = "Invalid email or password"


class UserRepository:
    """Access to stored account documents."""

    def __init__(self, store: DocumentStore) -> None:
        self.collection = store.collection(USERS_COLLECTION)

    async def ensure_indexes(self) -> None:
        await self.collection.create_index("email", unique=True)

    async def find_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        return await self.collection.find_one({"email": email})

    async def find_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        return await self.collection.find_one({"_id": parse_object_id(user_id)})

    async def insert(self, name: Optional[str], email: str, password_hash: str) -> Dict[str, Any]:
        """Insert a new account document and return it with its ``_id``.

        Raises ``ConflictError`` if the unique index on ``email`` rejects
        the document.
        """
        doc = {"name": name, "email": email, "password": password_hash}
        try:
            result = await self.collection.insert_one(doc)
        except DuplicateKeyError:
            raise ConflictError("User already exists")
        doc["_id"] = result.inserted_id
        return doc

    async def list_all(self) -> List[Dict[str, Any]]:
        return [doc async for doc in self.collection.find({})]


class UserService:
    """Registration, login and account lookups."""

    def __init__(self, store: DocumentStore, repository: Optional[UserRepository] = None) -> None:
        self.repository = repository or UserRepository(store)

    @staticmethod
    def serialize(doc: Dict[str, Any]) -> Dict[str, Any]:
        """Convert an account document into its API representation.

        The password hash is dropped unless ``EXPOSE_PASSWORD_HASH`` is
        set.
        """
        user = UserRead(
            id=str(doc["_id"]),
            name=doc.get("name"),
            email=doc["email"],
            password=doc.get("password"),
        ).model_dump()
        if not settings.expose_password_hash:
            user.pop("password")
        return user

    async def register(self, data: UserCreate) -> Dict[str, Any]:
        """Create an account.

        Raises ``ConflictError`` when the email is already registered.
        Returns the serialized account.
        """
        existing = await self.repository.find_by_email(data.email)
        if existing:
            logger.info("Registration rejected, email already in use: %s", data.email)
            raise ConflictError("User already exists")
        # bcrypt is CPU bound; keep it off the event loop
        password_hash = await run_in_threadpool(hash_password, data.password)
        doc = await self.repository.insert(data.name, data.email, password_hash)
        logger.info("Registered user %s (%s)", doc["_id"], data.email)
        return self.serialize(doc)

    async def login(self, credentials: UserLogin) -> Tuple[str, Dict[str, Any]]:
        """Check credentials and issue a token.

        Unknown email and wrong password produce the same
        ``UnauthorizedError`` so the response does not reveal which
        accounts exist.
        """
        doc = await self.repository.find_by_email(credentials.email)
        if not doc or not await run_in_threadpool(verify_password, credentials.password, doc.get("password")):
            logger.warning("Failed login attempt for %s", credentials.email)
            raise UnauthorizedError(INVALID_CREDENTIALS)
        token = create_access_token({"email": doc["email"]})
        logger.info("User %s logged in", doc["email"])
        return token, self.serialize(doc)

    async def list_accounts(self) -> List[Dict[str, Any]]:
        docs = await self.repository.list_all()
        return [self.serialize(doc) for doc in docs]

    async def get_account(self, user_id: str) -> Dict[str, Any]:
        doc = await self.repository.find_by_id(user_id)
        if not doc:
            raise NotFoundError("User not found")
        return self.serialize(doc)
