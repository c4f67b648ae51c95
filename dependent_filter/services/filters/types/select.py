"""
SelectFilter — Single-value selection from a static option list.

Listing contribution: ``{column} = value``
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Union

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession

from dependent_filter.services.filters.base import BaseFilter, FilterOption, model_column

OptionSpec = Union[FilterOption, Dict[str, Any], Any]


class SelectFilter(BaseFilter):
    """Dropdown with options declared up front."""

    key_prefix = "select-filter"

    def __init__(self, name: str, column: str, options: Iterable[OptionSpec] = ()) -> None:
        super().__init__(name, column)
        self._options = [_coerce(o) for o in options]

    @classmethod
    def make(cls, name: str, column: str, options: Iterable[OptionSpec] = ()) -> "SelectFilter":
        return cls(name, column, options)

    @property
    def options(self) -> List[FilterOption]:
        return list(self._options)

    async def load_options(self, session: AsyncSession) -> List[FilterOption]:
        return self.options

    def apply(self, stmt: Select, model: Any, value: Any) -> Select:
        return stmt.where(model_column(model, self.column) == value)


def _coerce(spec: OptionSpec) -> FilterOption:
    """Accept ``FilterOption``, ``{"label", "value"}`` dicts or bare values."""
    if isinstance(spec, FilterOption):
        return spec
    if isinstance(spec, dict):
        extra: Optional[Dict[str, Any]] = {
            k: v for k, v in spec.items() if k not in ("label", "value")
        } or None
        return FilterOption(label=spec.get("label"), value=spec.get("value"), extra=extra)
    return FilterOption(label=str(spec), value=spec)
