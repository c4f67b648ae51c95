"""
API v1 — Router aggregation.
"""

from fastapi import APIRouter

from dependent_filter.api.v1.options import router as options_router
from dependent_filter.api.v1.resources import router as resources_router
from dependent_filter.api.v1.system import router as system_router
from dependent_filter.core.config import settings

api_router = APIRouter(prefix=settings.API_PREFIX)
api_router.include_router(system_router)
api_router.include_router(options_router)
api_router.include_router(resources_router)
