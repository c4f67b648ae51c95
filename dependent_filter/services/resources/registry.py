"""
ResourceRegistry — Resource key → listing model + declared filters.

A ``Resource`` is declared once (see ``config/resource_registry.py``)
and registered at startup.  Registration fails fast when two filters of
the same resource derive the same key, so the options endpoint can never
match the wrong filter.

Usage::

    from dependent_filter.services.resources.registry import resource_registry

    resource_registry.register(Resource("time-entries", TimeEntry, [...]))
    resource = resource_registry.resource_for_key("time-entries")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from dependent_filter.core.exceptions import (
    DuplicateFilterKeyError,
    DuplicateResourceError,
    ResourceNotFoundError,
)
from dependent_filter.services.filters.base import BaseFilter

logger = logging.getLogger(__name__)


@dataclass
class Resource:
    """A listing collection exposed to the admin panel."""
    key: str
    model: Any
    filters: List[BaseFilter] = field(default_factory=list)
    label: str = ""

    def __post_init__(self) -> None:
        if not self.label:
            self.label = self.key.replace("-", " ").title()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "label": self.label,
            "filters": [f.key() for f in self.filters],
        }


class ResourceRegistry:
    """In-process catalogue of resources, keyed by ``Resource.key``."""

    def __init__(self) -> None:
        self._resources: Dict[str, Resource] = {}

    def register(self, resource: Resource) -> Resource:
        if resource.key in self._resources:
            raise DuplicateResourceError(f"Resource '{resource.key}' is already registered")

        seen: set[str] = set()
        for flt in resource.filters:
            fkey = flt.key()
            if fkey in seen:
                raise DuplicateFilterKeyError(resource.key, fkey)
            seen.add(fkey)

        self._resources[resource.key] = resource
        logger.info(
            f"[ResourceRegistry] Registered '{resource.key}' "
            f"with {len(resource.filters)} filters"
        )
        return resource

    def get(self, key: Optional[str]) -> Optional[Resource]:
        if not key:
            return None
        return self._resources.get(key)

    def resource_for_key(self, key: Optional[str]) -> Resource:
        resource = self.get(key)
        if resource is None:
            raise ResourceNotFoundError(f"Unknown resource '{key}'")
        return resource

    def clear(self) -> None:
        self._resources.clear()

    def __iter__(self) -> Iterator[Resource]:
        return iter(self._resources.values())

    def __len__(self) -> int:
        return len(self._resources)

    def __contains__(self, key: object) -> bool:
        return key in self._resources


# ── Singleton ────────────────────────────────────────────────
resource_registry = ResourceRegistry()
