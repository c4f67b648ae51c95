"""
Base filter classes and dataclasses.

Defines the contract every filter must follow:
  - ``FilterOption``: single option for dropdown filters.
  - ``BaseFilter``: abstract base with key / apply / load_options / to_dict.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession

from dependent_filter.core.exceptions import FilterDefinitionError


# ─────────────────────────────────────────────────────────────
#  DATA CLASSES
# ─────────────────────────────────────────────────────────────

@dataclass(slots=True)
class FilterOption:
    """Single selectable option for dropdown filters."""
    label: Any
    value: Any
    extra: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """
        Wire shape: ``{"label": ..., "value": ..., **extra}``.

        A missing label falls back to the value itself.
        """
        label = self.label
        if label is None or label == "":
            label = "" if self.value is None else str(self.value)
        out: Dict[str, Any] = {"label": label, "value": self.value}
        if self.extra:
            for k, v in self.extra.items():
                out.setdefault(k, v)
        return out


# ─────────────────────────────────────────────────────────────
#  ABSTRACT BASE
# ─────────────────────────────────────────────────────────────

class BaseFilter(ABC):
    """
    Abstract base for every filter type.

    Subclasses **must** implement:
      - ``apply(stmt, model, value)`` → Select

    May override:
      - ``load_options(session)``     → list[FilterOption]
      - ``to_dict(options)``          → dict
    """

    component: str = "select-filter"
    key_prefix: str = "filter"

    def __init__(self, name: str, column: str) -> None:
        if not column:
            raise FilterDefinitionError(f"Filter '{name}' needs a bound column")
        self.name = name
        self.column = column

    def key(self) -> str:
        """Stable identifier, derived from the bound column."""
        return f"{self.key_prefix}-{self.column}"

    @abstractmethod
    def apply(self, stmt: Select, model: Any, value: Any) -> Select:
        """Constrain the listing query *stmt* over *model* by *value*."""

    async def load_options(self, session: AsyncSession) -> List[FilterOption]:
        """Options shown when the listing page is first rendered."""
        return []

    def to_dict(self, options: Optional[List[FilterOption]] = None) -> Dict[str, Any]:
        """Filter metadata sent to the browser."""
        return {
            "class": type(self).__name__,
            "key": self.key(),
            "name": self.name,
            "component": self.component,
            "options": [o.to_dict() for o in (options or [])],
            "currentValue": "",
        }

    def __repr__(self) -> str:
        return f"<{type(self).__name__} key={self.key()!r}>"


# ─────────────────────────────────────────────────────────────
#  HELPERS
# ─────────────────────────────────────────────────────────────

def is_blank(value: Any) -> bool:
    """
    Whether a submitted filter value counts as "nothing selected".

    ``None``, ``""``, ``"0"``, ``0``, ``False`` and empty containers are
    blank.  Strings are compared as submitted; whitespace is a real value.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == "" or value == "0"
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return value == 0


def model_column(model: Any, column: str):
    """Return the mapped table column *column* of *model* (KeyError if absent)."""
    return model.__table__.c[column]
