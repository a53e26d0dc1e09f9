# src/dossier_hub/main.py
"""Main entry point for the Dossier Hub application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from dossier_hub.api.v1 import (
    agents_router,
    contacts_router,
    dossiers_router,
    messages_router,
    notifications_router,
    realtime_router,
)
from dossier_hub.core.errors import DossierHubError, StorageIOError
from dossier_hub.core.settings import settings
from dossier_hub.db import get_store
from dossier_hub.services.bootstrap import initialize_store

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Dossiers, contacts, private messaging and notifications for agents",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(agents_router, prefix="/api")
app.include_router(dossiers_router, prefix="/api")
app.include_router(contacts_router, prefix="/api")
app.include_router(messages_router, prefix="/api")
app.include_router(notifications_router, prefix="/api")
app.include_router(realtime_router)


@app.exception_handler(DossierHubError)
async def dossier_hub_error_handler(request: Request, exc: DossierHubError) -> JSONResponse:
    """Render domain errors as ``{"detail": message}`` with their status code."""
    if isinstance(exc, StorageIOError):
        logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": "Internal server error"},
        )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


@app.on_event("startup")
async def on_startup() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    initialize_store(get_store())


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Dossiers, contacts, private messaging and notifications for agents",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("dossier_hub.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
