"""
Listing queries — rows of a resource with its active filters applied.

Each filter whose key appears in the request with a non-empty value
contributes its ``apply()`` clause; unknown keys are ignored.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from sqlalchemy import Select, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from dependent_filter.services.resources.registry import Resource


def build_listing_query(resource: Resource, values: Mapping[str, Any]) -> Select:
    stmt = select(resource.model)
    for flt in resource.filters:
        value = values.get(flt.key())
        if value is None or value == "":
            continue
        stmt = flt.apply(stmt, resource.model, value)
    pk = inspect(resource.model).primary_key
    return stmt.order_by(*pk)


async def fetch_rows(
    session: AsyncSession,
    resource: Resource,
    values: Mapping[str, Any],
    limit: int = 100,
    offset: int = 0,
) -> List[Dict[str, Any]]:
    stmt = build_listing_query(resource, values).limit(limit).offset(offset)
    result = await session.execute(stmt)
    attrs = [a.key for a in inspect(resource.model).column_attrs]
    return [
        {name: getattr(obj, name) for name in attrs}
        for obj in result.scalars().all()
    ]
