"""
Resource routes — Renders a listing page with its filter panel.

The route:
1. Loads the resource's filter metadata from
   ``GET /api/v1/resources/{key}/filters`` (initial options + dependsOn).
2. Replays the submitted selections (``?<filterKey>=<value>``) through a
   ``FilterPanel`` in declared order, so every child select is narrowed
   by ``/dependent-filter-options`` exactly as the dropdown controller
   would narrow it.  A value the narrowed list no longer offers is dropped.
3. Renders one ``<select>`` per filter plus the matching listing rows.
   Each change resubmits the form.
"""

import asyncio
import logging
from typing import Any, Dict, List, Mapping

import httpx
from flask import Blueprint, abort, current_app, render_template, request

from dependent_filter.core.config import get_settings
from dependent_filter.frontend import FilterPanel, OptionsClient

logger = logging.getLogger(__name__)

resources_bp = Blueprint("resources", __name__, url_prefix="/resources")


@resources_bp.route("/<resource_key>")
def show(resource_key: str):
    """Render the listing of one resource, narrowed by the submitted filters."""
    settings = get_settings()
    api_base = current_app.config.get("API_BASE_URL", settings.API_BASE_URL)
    submitted = {k: v for k, v in request.args.items() if v != ""}

    filters, status = _fetch_filters(api_base, resource_key)
    if status == 404:
        abort(404)

    panel = FilterPanel.from_metadata(resource_key, filters, _options_client(api_base))
    asyncio.run(_replay_selections(panel, submitted))

    selected = _merge_panel(filters, panel, submitted)
    rows = _fetch_rows(api_base, resource_key, selected) if filters else []

    return render_template(
        "resources/index.html",
        resource_key=resource_key,
        filters=filters,
        rows=rows,
    )


# ── Internal helpers ─────────────────────────────────────────────

def _options_client(api_base: str) -> OptionsClient:
    settings = get_settings()
    return OptionsClient(f"{api_base}{settings.API_PREFIX}/dependent-filter-options")


async def _replay_selections(panel: FilterPanel, submitted: Mapping[str, str]) -> None:
    """Select submitted values parent-first; children reload on each change."""
    for key, select in panel.selects.items():
        value = submitted.get(key)
        if value is None:
            continue
        if not select.has_value(value):
            logger.info(f"[RESOURCES] Dropping '{key}={value}': not offered")
            continue
        await panel.select(key, value)


def _merge_panel(
    filters: List[Dict[str, Any]],
    panel: FilterPanel,
    submitted: Mapping[str, str],
) -> Dict[str, Any]:
    """Copy narrowed options and current values back into the metadata."""
    selected: Dict[str, Any] = {}
    for meta in filters:
        key = meta["key"]
        if key in panel.selects:
            select = panel[key]
            meta["options"] = select.options
            value = select.selected
        else:
            value = submitted.get(key)
        meta["currentValue"] = "" if value is None else str(value)
        if value is not None:
            selected[key] = value
    return selected


def _fetch_filters(api_base: str, resource_key: str):
    """Load filter metadata from the FastAPI resources endpoint."""
    settings = get_settings()
    url = f"{api_base}{settings.API_PREFIX}/resources/{resource_key}/filters"
    try:
        resp = httpx.get(url, timeout=settings.HTTP_TIMEOUT, follow_redirects=True)
        if resp.status_code == 200:
            data = resp.json()
            logger.info(f"[RESOURCES] Loaded {len(data)} filters for '{resource_key}'")
            return data, 200
        logger.warning(f"[RESOURCES] Filters API returned {resp.status_code}")
        return [], resp.status_code
    except httpx.HTTPError as exc:
        logger.error(f"[RESOURCES] Failed to load filters: {exc}")
    return [], 0


def _fetch_rows(api_base: str, resource_key: str, values: Mapping[str, Any]):
    """Listing rows for the current selections; empty on any failure."""
    settings = get_settings()
    url = f"{api_base}{settings.API_PREFIX}/resources/{resource_key}/rows"
    try:
        resp = httpx.get(url, params=dict(values), timeout=settings.HTTP_TIMEOUT)
        if resp.status_code == 200:
            return resp.json()
        logger.warning(f"[RESOURCES] Rows API returned {resp.status_code}")
    except (httpx.HTTPError, ValueError) as exc:
        logger.error(f"[RESOURCES] Failed to load rows: {exc}")
    return []
