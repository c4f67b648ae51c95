"""
Dependent filter options endpoint.

Routes:
  GET /dependent-filter-options?resource=R&filter=F&<parentKey>=<value>...
      → 200 [{label, value, ...}]  options narrowed by the parent values
      → 404 []                     unknown resource, or no dependent filter F

Called by the dropdown component every time one of its parent filters
changes.  Read-only; query errors are not caught here.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from dependent_filter.core.database import get_db
from dependent_filter.core.exceptions import FilterNotFoundError, ResourceNotFoundError
from dependent_filter.services.filters.engine import filter_engine

logger = logging.getLogger(__name__)

router = APIRouter(tags=["dependent-filter"])


@router.get("/dependent-filter-options")
async def dependent_filter_options(
    request: Request,
    session: AsyncSession = Depends(get_db),
):
    """
    Reload options for a dependent filter.

    Every query parameter besides ``resource`` and ``filter`` is read as
    ``<parent filter key>=<selected value>``.
    """
    params = dict(request.query_params)
    resource_key = params.get("resource")
    filter_key = params.get("filter")

    try:
        options = await filter_engine.resolve(session, resource_key, filter_key, params)
    except (ResourceNotFoundError, FilterNotFoundError) as exc:
        logger.warning(f"[Options] 404: {exc}")
        return JSONResponse([], status_code=404)

    return JSONResponse(jsonable_encoder(options))
