"""BooleanFilter — Yes/No switch over a boolean column."""

from __future__ import annotations

from typing import Any, List

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession

from dependent_filter.services.filters.base import BaseFilter, FilterOption, model_column

_TRUTHY = {"1", "true", "yes", "on"}


class BooleanFilter(BaseFilter):
    """Simple boolean toggle."""

    component = "boolean-filter"
    key_prefix = "boolean-filter"

    @classmethod
    def make(cls, name: str, column: str) -> "BooleanFilter":
        return cls(name, column)

    async def load_options(self, session: AsyncSession) -> List[FilterOption]:
        return [FilterOption(label="Yes", value=1), FilterOption(label="No", value=0)]

    def apply(self, stmt: Select, model: Any, value: Any) -> Select:
        return stmt.where(model_column(model, self.column) == to_bool(value))


def to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return bool(value)
