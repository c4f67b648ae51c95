"""
DependentFilter — Dropdown whose options are narrowed by parent filters.

Usage::

    client = DependentFilter.make("Client", Client, "client_id")

    project = (
        DependentFilter.make("Project", Project, "project_id")
        .depends_on(client, foreign_key="client_id")
    )

    user = (
        DependentFilter.make("User", User, "user_id")
        .depends_on(project, relationship="projects")
        .scope(lambda stmt, parents: stmt.where(User.is_active.is_(True)))
    )

Resolution (``build_query``):

1. ``SELECT label, value`` from the option model, then the scope, which
   also receives the parent values.
2. For every dependency, in declared order, look up the parent's value.
   A missing or blank value skips the link: the child stays unconstrained
   by that parent until the parent has a selection.
3. ``RelationshipLink`` → EXISTS through the relationship on the related
   table's ``id``; ``ForeignKeyLink`` → equality on the option model.
4. ``ORDER BY label, value`` and the result cap.

Unknown columns or relationship names raise from SQLAlchemy and are
left to propagate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from sqlalchemy import Select, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from dependent_filter.core.config import settings
from dependent_filter.core.exceptions import FilterDefinitionError
from dependent_filter.services.filters.base import (
    BaseFilter,
    FilterOption,
    is_blank,
    model_column,
)

logger = logging.getLogger(__name__)

# (stmt, parent_values) -> stmt; parent_values is the full request map.
ScopeCallback = Callable[[Select, Mapping[str, Any]], Select]


# ─────────────────────────────────────────────────────────────
#  DEPENDENCY LINKS
# ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ForeignKeyLink:
    """Option row's ``column`` must equal the parent's value."""
    parent_key: str
    column: str

    def constrain(self, stmt: Select, model: Any, value: Any) -> Select:
        return stmt.where(model_column(model, self.column) == value)


@dataclass(frozen=True)
class RelationshipLink:
    """Option row must be related, through ``name``, to the parent's row."""
    parent_key: str
    name: str

    def constrain(self, stmt: Select, model: Any, value: Any) -> Select:
        rel = inspect(model).relationships[self.name]
        attr = getattr(model, self.name)
        criterion = rel.mapper.local_table.c.id == value
        if rel.uselist:
            return stmt.where(attr.any(criterion))
        return stmt.where(attr.has(criterion))


DependencyLink = Union[ForeignKeyLink, RelationshipLink]


# ─────────────────────────────────────────────────────────────
#  FILTER
# ─────────────────────────────────────────────────────────────

class DependentFilter(BaseFilter):
    """Select filter fed from a model, cascading from parent filters."""

    component = "dependent-select-filter"
    key_prefix = "dependent-filter"

    def __init__(self, name: str, model: Any, column: str) -> None:
        super().__init__(name, column)
        self.model = model
        self.label_column = "name"
        self.value_column = "id"
        self.extra_columns: List[str] = []
        self.dependencies: List[DependencyLink] = []
        self.max_options: Optional[int] = None
        self._scope: Optional[ScopeCallback] = None

    @classmethod
    def make(cls, name: str, model: Any, column: str) -> "DependentFilter":
        return cls(name, model, column)

    # ── Declaration (chainable) ──────────────────────────────

    def depends_on(
        self,
        parent: BaseFilter,
        foreign_key: Optional[str] = None,
        relationship: Optional[str] = None,
    ) -> "DependentFilter":
        """
        Declare a parent filter.

        Exactly one of *foreign_key* / *relationship* must be given.
        """
        if bool(foreign_key) == bool(relationship):
            raise FilterDefinitionError(
                f"{self.key()}: depends_on({parent.key()}) needs exactly one of "
                "foreign_key or relationship"
            )
        if relationship:
            link: DependencyLink = RelationshipLink(parent.key(), relationship)
        else:
            link = ForeignKeyLink(parent.key(), foreign_key)
        self.dependencies.append(link)
        return self

    def scope(self, callback: ScopeCallback) -> "DependentFilter":
        """Base query transformer; replaces any previous scope."""
        self._scope = callback
        return self

    def label(self, column: str) -> "DependentFilter":
        self.label_column = column
        return self

    def value(self, column: str) -> "DependentFilter":
        self.value_column = column
        return self

    def with_extra(self, *columns: str) -> "DependentFilter":
        """Project additional option-model columns into each option."""
        self.extra_columns.extend(columns)
        return self

    def limit(self, max_options: int) -> "DependentFilter":
        """Cap the option list; ``0`` disables the cap."""
        if max_options < 0:
            raise FilterDefinitionError(f"{self.key()}: limit must be >= 0")
        self.max_options = max_options
        return self

    @property
    def parent_keys(self) -> List[str]:
        return [d.parent_key for d in self.dependencies]

    @property
    def effective_limit(self) -> int:
        if self.max_options is not None:
            return self.max_options
        return settings.OPTIONS_MAX_RESULTS

    # ── Resolution ───────────────────────────────────────────

    def build_query(self, parent_values: Optional[Mapping[str, Any]] = None) -> Select:
        """Return the scoped, constrained and ordered option query."""
        parent_values = parent_values or {}
        label_col = model_column(self.model, self.label_column)
        value_col = model_column(self.model, self.value_column)
        extra_cols = [model_column(self.model, c) for c in self.extra_columns]

        stmt = select(label_col, value_col, *extra_cols).select_from(self.model)
        if self._scope is not None:
            stmt = self._scope(stmt, parent_values)

        for link in self.dependencies:
            parent_value = parent_values.get(link.parent_key)
            if is_blank(parent_value):
                continue
            stmt = link.constrain(stmt, self.model, parent_value)

        stmt = stmt.order_by(label_col.asc(), value_col.asc())

        cap = self.effective_limit
        if cap:
            stmt = stmt.limit(cap)
        return stmt

    async def resolve_options(
        self,
        session: AsyncSession,
        parent_values: Optional[Mapping[str, Any]] = None,
    ) -> List[FilterOption]:
        """Execute ``build_query`` and map rows to ``FilterOption``."""
        result = await session.execute(self.build_query(parent_values))
        options = [self._row_to_option(row) for row in result.all()]
        logger.debug(
            f"[DependentFilter] {self.key()} resolved {len(options)} options "
            f"for parents={dict(parent_values or {})}"
        )
        return options

    async def initial_options(self, session: AsyncSession) -> List[FilterOption]:
        """Unconstrained options for the first render of the listing."""
        return await self.resolve_options(session, {})

    async def load_options(self, session: AsyncSession) -> List[FilterOption]:
        return await self.initial_options(session)

    def _row_to_option(self, row) -> FilterOption:
        label, value, *rest = row
        extra: Optional[Dict[str, Any]] = None
        if self.extra_columns:
            extra = dict(zip(self.extra_columns, rest))
        return FilterOption(label=label, value=value, extra=extra)

    # ── Listing / serialization ──────────────────────────────

    def apply(self, stmt: Select, model: Any, value: Any) -> Select:
        return stmt.where(model_column(model, self.column) == value)

    def to_dict(self, options: Optional[List[FilterOption]] = None) -> Dict[str, Any]:
        out = super().to_dict(options)
        out["dependsOn"] = {k: k for k in self.parent_keys}
        return out
