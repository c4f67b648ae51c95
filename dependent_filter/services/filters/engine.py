"""
FilterEngine — Request-level lookup and resolution of filters.

This is what the HTTP layer talks to.  It:

1. Resolves a resource key through the ``ResourceRegistry``.
2. Finds the requested filter; only ``DependentFilter`` instances are
   eligible for option reloads, plain filters never match.
3. Turns the remaining query parameters into a parent-value map.
4. Resolves and serializes the option list.

Usage::

    from dependent_filter.services.filters.engine import filter_engine

    options = await filter_engine.resolve(session, "time-entries",
                                          "dependent-filter-project_id",
                                          {"dependent-filter-client_id": "1"})
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from dependent_filter.core.exceptions import FilterNotFoundError
from dependent_filter.services.filters.dependent import DependentFilter
from dependent_filter.services.resources.registry import (
    ResourceRegistry,
    resource_registry,
)

logger = logging.getLogger(__name__)

# Query parameters that address the filter rather than carry parent values.
RESERVED_PARAMS = ("resource", "filter")


class FilterEngine:
    """Central entry point for option resolution requests."""

    def __init__(self, registry: Optional[ResourceRegistry] = None) -> None:
        self._registry = registry

    @property
    def registry(self) -> ResourceRegistry:
        return self._registry if self._registry is not None else resource_registry

    # ── Look-ups ─────────────────────────────────────────────

    def find_dependent_filter(
        self,
        resource_key: Optional[str],
        filter_key: Optional[str],
    ) -> DependentFilter:
        """
        Return the dependent filter *filter_key* of *resource_key*.

        Raises ``ResourceNotFoundError`` / ``FilterNotFoundError``.
        """
        resource = self.registry.resource_for_key(resource_key)
        flt = next(
            (
                f for f in resource.filters
                if isinstance(f, DependentFilter) and f.key() == filter_key
            ),
            None,
        )
        if flt is None:
            raise FilterNotFoundError(
                f"Resource '{resource_key}' has no dependent filter '{filter_key}'"
            )
        return flt

    @staticmethod
    def parent_values_from(
        params: Mapping[str, Any],
        reserved: Iterable[str] = RESERVED_PARAMS,
    ) -> Dict[str, Any]:
        """Every non-reserved query key is taken as a parent filter key."""
        skip = set(reserved)
        return {k: v for k, v in params.items() if k not in skip}

    # ── Resolve to JSON ──────────────────────────────────────

    async def resolve(
        self,
        session: AsyncSession,
        resource_key: Optional[str],
        filter_key: Optional[str],
        params: Mapping[str, Any],
    ) -> List[Dict[str, Any]]:
        """JSON-ready option list for one dependent filter."""
        flt = self.find_dependent_filter(resource_key, filter_key)
        parent_values = self.parent_values_from(params)
        options = await flt.resolve_options(session, parent_values)
        return [o.to_dict() for o in options]

    async def describe_filters(
        self,
        session: AsyncSession,
        resource_key: str,
    ) -> List[Dict[str, Any]]:
        """Metadata of every filter of a resource, with initial options."""
        resource = self.registry.resource_for_key(resource_key)
        out: List[Dict[str, Any]] = []
        for flt in resource.filters:
            options = await flt.load_options(session)
            out.append(flt.to_dict(options))
        return out


# ── Singleton ────────────────────────────────────────────────
filter_engine = FilterEngine()
