# src/campus_commons/main.py
"""Main entry point for the Campus Commons application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from campus_commons import __version__
from campus_commons.api.errors import install_error_handlers
from campus_commons.api.v1 import (
    moderation_queue_router,
    notifications_router,
    reactions_router,
    reports_router,
    resources_router,
)
from campus_commons.core.settings import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

# Initialize FastAPI app
app = FastAPI(
    title=f"{settings.app_name} API",
    description="Course resources, reviews and community moderation",
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

install_error_handlers(app)

# Include API routers
app.include_router(reports_router, prefix="/api/v1")
app.include_router(moderation_queue_router, prefix="/api/v1")
app.include_router(reactions_router, prefix="/api/v1")
app.include_router(resources_router, prefix="/api/v1")
app.include_router(notifications_router, prefix="/api/v1")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": f"{settings.app_name} API",
        "version": __version__,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("campus_commons.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
