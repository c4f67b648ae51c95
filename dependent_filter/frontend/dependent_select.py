"""
DependentSelect — Controller behind one dependent dropdown.

The rendering widget is a black box that shows ``options`` and reports
selections through ``select()``.  This class owns the request lifecycle::

    IDLE ──mount (no parents)──▶ LOADING ──ok──▶ LOADED
      │                            │  └─fail─▶ LOADED if ever loaded, else IDLE;
      │                            │           options kept
      └──parent changed──────────▶ LOADING

Every reload takes a new generation number; a response whose generation
is no longer the latest is dropped, so a slow stale request cannot
overwrite the options of a newer one.

``FilterPanel`` wires the dropdowns of one resource together: selecting a
value in a parent reloads every child that declares it in ``dependsOn``,
and a child whose selection disappears cascades the clear downwards.
"""

from __future__ import annotations

import inspect
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Mapping, Optional, Union

from dependent_filter.frontend.options_client import OptionList, OptionsClient

logger = logging.getLogger(__name__)

ChangeListener = Callable[[str, Any], Union[None, Awaitable[None]]]


class SelectState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"


class DependentSelect:
    """Option list + selection of a single dependent filter."""

    def __init__(
        self,
        resource_key: str,
        filter_key: str,
        client: OptionsClient,
        depends_on: Iterable[str] = (),
        options: Optional[OptionList] = None,
    ) -> None:
        self.resource_key = resource_key
        self.filter_key = filter_key
        self.client = client
        self.depends_on: List[str] = list(depends_on)
        self.options: OptionList = list(options or [])
        self.selected: Any = None
        self.state = SelectState.IDLE
        self.parent_values: Dict[str, Any] = {k: "" for k in self.depends_on}
        self._generation = 0
        self._loaded_once = False
        self._listeners: List[ChangeListener] = []

    @classmethod
    def from_metadata(
        cls,
        resource_key: str,
        meta: Mapping[str, Any],
        client: OptionsClient,
    ) -> "DependentSelect":
        """Build from one entry of ``GET /resources/{key}/filters``."""
        return cls(
            resource_key,
            meta["key"],
            client,
            depends_on=list((meta.get("dependsOn") or {}).keys()),
            options=meta.get("options"),
        )

    # ── Lifecycle ────────────────────────────────────────────

    async def mount(self) -> None:
        """Root filters load their options once; children wait for a parent."""
        if self.state is SelectState.IDLE and not self.depends_on:
            await self.reload()

    async def on_parent_changed(self, parent_key: str, value: Any) -> None:
        if parent_key not in self.parent_values:
            return
        # Blank values are sent too; the server skips that constraint.
        self.parent_values[parent_key] = value
        await self.reload()

    async def reload(self) -> bool:
        """
        Fetch options for the current parent values.

        Returns ``True`` when the options were replaced.
        """
        self._generation += 1
        token = self._generation
        self.state = SelectState.LOADING

        data = await self.client.fetch(
            self.resource_key, self.filter_key, dict(self.parent_values),
        )

        if token != self._generation:
            logger.debug(f"[DependentSelect] {self.filter_key}: dropped stale response #{token}")
            return False

        if data is None:
            self.state = SelectState.LOADED if self._loaded_once else SelectState.IDLE
            return False

        self.options = data
        self._loaded_once = True
        self.state = SelectState.LOADED
        if self.selected is not None and not self.has_value(self.selected):
            await self._set_selected(None)
        return True

    # ── Selection ────────────────────────────────────────────

    def has_value(self, value: Any) -> bool:
        return any(str(o.get("value")) == str(value) for o in self.options)

    async def select(self, value: Any) -> None:
        """Record the user's choice and notify listeners (children)."""
        await self._set_selected(None if value == "" else value)

    def on_change(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    async def _set_selected(self, value: Any) -> None:
        self.selected = value
        for listener in self._listeners:
            result = listener(self.filter_key, value)
            if inspect.isawaitable(result):
                await result


class FilterPanel:
    """The dependent dropdowns of one resource, wired parent → child."""

    def __init__(self, resource_key: str, selects: Iterable[DependentSelect]) -> None:
        self.resource_key = resource_key
        self.selects: Dict[str, DependentSelect] = {s.filter_key: s for s in selects}
        for child in self.selects.values():
            for parent_key in child.depends_on:
                parent = self.selects.get(parent_key)
                if parent is not None:
                    parent.on_change(child.on_parent_changed)

    @classmethod
    def from_metadata(
        cls,
        resource_key: str,
        filters_meta: Iterable[Mapping[str, Any]],
        client: OptionsClient,
    ) -> "FilterPanel":
        selects = [
            DependentSelect.from_metadata(resource_key, meta, client)
            for meta in filters_meta
            if meta.get("component") == "dependent-select-filter"
        ]
        return cls(resource_key, selects)

    def __getitem__(self, filter_key: str) -> DependentSelect:
        return self.selects[filter_key]

    async def mount(self) -> None:
        for select in self.selects.values():
            await select.mount()

    async def select(self, filter_key: str, value: Any) -> None:
        await self.selects[filter_key].select(value)

    def values(self) -> Dict[str, Any]:
        """Current selections, keyed by filter key (listing query params)."""
        return {
            key: s.selected for key, s in self.selects.items() if s.selected is not None
        }
