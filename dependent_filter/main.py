"""
FastAPI application factory + lifespan.

This is the **options API** of the admin panel:
- Dependent filter options endpoint.
- Resource filter metadata and filtered listings.
- CORS configured for the Flask frontend.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dependent_filter.api.v1 import api_router
from dependent_filter.config.resource_registry import register_default_resources
from dependent_filter.core.config import settings
from dependent_filter.core.database import db_manager
from dependent_filter.core.logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup: register resources and make sure the schema exists.
    Shutdown: close DB connections.
    """
    logger.info(f"[API] Starting {settings.APP_NAME} on {db_manager.url}")
    register_default_resources()
    await db_manager.create_all()

    yield

    logger.info("[API] Shutting down")
    await db_manager.close()


def create_fastapi_app() -> FastAPI:
    """Application factory for FastAPI."""
    configure_logging(settings.LOG_LEVEL, settings.LOG_FILE or None)

    app = FastAPI(
        title=f"{settings.APP_NAME} API",
        description="Cascading dropdown filter options for the admin panel",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/api/docs" if settings.DEBUG else None,
        redoc_url="/api/redoc" if settings.DEBUG else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    @app.get("/")
    async def root():
        return {
            "app": settings.APP_NAME,
            "version": "1.0.0",
            "status": "running",
            "docs": "/api/docs" if settings.DEBUG else "disabled",
        }

    return app
