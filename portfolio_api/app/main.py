"""
Main entrypoint for the Portfolio API.

This module assembles the FastAPI application, sets up logging,
installs the error envelope handlers and includes versioned routers.
The ``create_app`` function builds and configures the app, which is
then instantiated at module import time as ``app``.  Run it with
uvicorn, e.g.::

    uvicorn portfolio_api.app.main:app --reload

The MongoDB client is opened once on startup and closed on shutdown;
handlers reach it through ``app.state.store``.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import DocumentStore
from .core.errors import InternalError, ServiceError
from .core.logging_config import setup_logging
from .schemas.response import error_body
from .services.user_service import UserRepository


logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str, detail: Optional[str] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=error_body(message, detail if settings.debug else None),
    )


def install_error_handlers(app: FastAPI) -> None:
    """Render every failure as ``{"success": false, "message": ...}``."""

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
        detail = exc.detail if isinstance(exc, InternalError) else None
        return _error_response(exc.status_code, exc.message, detail)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid request body", str(exc.errors()))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", str(exc))


def create_app(store: Optional[DocumentStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    store : Optional[DocumentStore]
        Pre-built document store.  When omitted, a MongoDB client is
        created from the settings on startup.  Tests pass a store backed
        by in-memory collections.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that the startup hooks
    # can log.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    install_error_handlers(app)

    # Mount versioned routes under /api/v1.
    app.include_router(v1_router, prefix="/api/v1")

    @app.get("/", tags=["health"])
    async def server_status() -> Dict[str, Any]:
        return {
            "message": "Server is running smoothly",
            "timestamp": datetime.now(timezone.utc),
        }

    @app.on_event("startup")
    async def startup_event() -> None:
        app.state.store = store or DocumentStore.connect()
        await UserRepository(app.state.store).ensure_indexes()
        logger.info("Connected to MongoDB")

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        app.state.store.close()
        logger.info("MongoDB connection closed")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
