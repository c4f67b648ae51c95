"""System endpoints — health check."""

from fastapi import APIRouter

from dependent_filter.core.config import settings
from dependent_filter.services.resources.registry import resource_registry

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/health")
async def health_check():
    """Basic liveness probe."""
    return {
        "status": "ok",
        "app": settings.APP_NAME,
        "resources": len(resource_registry),
    }
