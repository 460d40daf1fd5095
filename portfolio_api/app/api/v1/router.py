"""
Top-level router for version 1 of the API.

This router aggregates the account routes and one CRUD router per
content resource kind.  To expose a new kind, declare a
``ResourceKind`` in ``services.resource_service`` and add it to
``RESOURCE_KINDS``.
"""

from fastapi import APIRouter

from portfolio_api.app.services.resource_service import RESOURCE_KINDS

from .endpoints import resources, users

router = APIRouter()

# Account routes define their own paths (/register, /login, /users).
router.include_router(users.router, tags=["users"])

for kind in RESOURCE_KINDS:
    router.include_router(
        resources.build_router(kind),
        prefix=f"/{kind.collection}",
        tags=[kind.collection],
    )
