"""
CRUD endpoints for content resources.

``build_router`` produces the five routes for one ``ResourceKind``; the
v1 router mounts one instance per kind (``/blogs``, ``/abouts``,
``/projects``).  Request bodies are parsed with the kind's schema, so
each router documents its own payload fields in OpenAPI.
"""

from typing import Any, Callable, Dict

from fastapi import APIRouter, Body, Depends, status

from portfolio_api.app.core.db import DocumentStore, get_store
from portfolio_api.app.core.errors import internal_errors
from portfolio_api.app.schemas.response import ErrorResponse, envelope
from portfolio_api.app.services.resource_service import ResourceKind, ResourceService


_BY_ID_ERRORS = {400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}


def service_dependency(kind: ResourceKind) -> Callable[[DocumentStore], ResourceService]:
    def _get_service(store: DocumentStore = Depends(get_store)) -> ResourceService:
        return ResourceService(store, kind)

    return _get_service


def build_router(kind: ResourceKind) -> APIRouter:
    """Create the CRUD router for ``kind``."""
    router = APIRouter()
    get_service = service_dependency(kind)
    schema = kind.schema
    label = kind.name.lower()

    @router.post("", status_code=status.HTTP_201_CREATED, name=f"create_{label}")
    async def create_resource(
        fields: schema = Body(...),  # type: ignore[valid-type]
        service: ResourceService = Depends(get_service),
    ) -> Dict[str, Any]:
        with internal_errors(f"Error adding {label}"):
            created = await service.create(fields)
        return envelope(f"{kind.name} added successfully", data=created)

    @router.get("", name=f"list_{kind.collection}")
    async def list_resources(service: ResourceService = Depends(get_service)) -> Dict[str, Any]:
        with internal_errors(f"Error fetching {kind.collection}"):
            items = await service.list_all()
        return envelope(data=items)

    @router.get("/{resource_id}", responses=_BY_ID_ERRORS, name=f"get_{label}")
    async def get_resource(
        resource_id: str,
        service: ResourceService = Depends(get_service),
    ) -> Dict[str, Any]:
        with internal_errors(f"Error fetching {label}"):
            item = await service.get(resource_id)
        return envelope(data=item)

    @router.put("/{resource_id}", responses=_BY_ID_ERRORS, name=f"update_{label}")
    async def update_resource(
        resource_id: str,
        fields: schema = Body(...),  # type: ignore[valid-type]
        service: ResourceService = Depends(get_service),
    ) -> Dict[str, Any]:
        with internal_errors(f"Error updating {label}"):
            updated = await service.update(resource_id, fields)
        return envelope(f"{kind.name} updated successfully", data=updated)

    @router.delete("/{resource_id}", responses=_BY_ID_ERRORS, name=f"delete_{label}")
    async def delete_resource(
        resource_id: str,
        service: ResourceService = Depends(get_service),
    ) -> Dict[str, Any]:
        with internal_errors(f"Error deleting {label}"):
            deleted = await service.delete(resource_id)
        return envelope(f"{kind.name} deleted successfully", data=deleted)

    return router
