"""
Resource endpoints — filter metadata and filtered listings.

Routes:
  GET /resources                 → registered resources
  GET /resources/{key}/filters   → filters with initial options + dependsOn
  GET /resources/{key}/rows      → listing rows, ``?<filterKey>=<value>``
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from dependent_filter.core.database import get_db
from dependent_filter.core.exceptions import ResourceNotFoundError
from dependent_filter.services.filters.engine import filter_engine
from dependent_filter.services.resources.listing import fetch_rows
from dependent_filter.services.resources.registry import resource_registry

router = APIRouter(prefix="/resources", tags=["resources"])

_PAGING_PARAMS = ("limit", "offset")


@router.get("")
async def list_resources():
    return [r.to_dict() for r in resource_registry]


@router.get("/{resource_key}/filters")
async def get_resource_filters(
    resource_key: str,
    session: AsyncSession = Depends(get_db),
):
    """
    Filter metadata used to render the listing's filter panel.

    Dependent filters carry their unconstrained options; the browser
    narrows them later through ``/dependent-filter-options``.
    """
    try:
        return await filter_engine.describe_filters(session, resource_key)
    except ResourceNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))


@router.get("/{resource_key}/rows")
async def get_resource_rows(
    resource_key: str,
    request: Request,
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    session: AsyncSession = Depends(get_db),
):
    """Listing rows with every submitted filter value applied."""
    resource = resource_registry.get(resource_key)
    if resource is None:
        raise HTTPException(status_code=404, detail=f"Unknown resource '{resource_key}'")

    values = {
        k: v for k, v in request.query_params.items() if k not in _PAGING_PARAMS
    }
    return await fetch_rows(session, resource, values, limit=limit, offset=offset)
