"""
OptionsClient — Async HTTP wrapper around the options endpoint.

Single Responsibility: issue one ``GET /dependent-filter-options`` and
hand back the parsed option list.  Never raises: any failure (timeout,
connection error, non-2xx status, malformed JSON) is logged and turned
into ``None`` so the calling dropdown can keep its current options.

Usage::

    client = OptionsClient(settings.options_endpoint_url)
    options = await client.fetch("time-entries", "dependent-filter-project_id",
                                 {"dependent-filter-client_id": "1"})
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

import httpx

from dependent_filter.core.config import settings

logger = logging.getLogger(__name__)

OptionList = List[Dict[str, Any]]


class OptionsClient:
    """
    Fetches option lists for dependent filters.

    Stateless by default — each call creates and destroys its own
    ``httpx.AsyncClient``.  A ``transport`` may be injected (tests use
    ``httpx.MockTransport``).
    """

    def __init__(
        self,
        endpoint_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.endpoint_url = endpoint_url or settings.options_endpoint_url
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT
        self._transport = transport

    async def fetch(
        self,
        resource_key: str,
        filter_key: str,
        parent_values: Optional[Mapping[str, Any]] = None,
    ) -> Optional[OptionList]:
        params = _build_params(resource_key, filter_key, parent_values)
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport,
            ) as client:
                response = await client.get(self.endpoint_url, params=params)

            if response.status_code >= 400:
                logger.warning(
                    f"[OptionsClient] {filter_key}: HTTP {response.status_code}"
                )
                return None

            data = response.json()
        except httpx.TimeoutException:
            logger.warning(f"[OptionsClient] {filter_key}: timeout after {self.timeout}s")
            return None
        except httpx.HTTPError as exc:
            logger.warning(f"[OptionsClient] {filter_key}: request failed: {exc}")
            return None
        except ValueError as exc:
            logger.warning(f"[OptionsClient] {filter_key}: invalid JSON: {exc}")
            return None

        if not isinstance(data, list):
            logger.warning(f"[OptionsClient] {filter_key}: expected a list, got {type(data).__name__}")
            return None
        return data


def _build_params(
    resource_key: str,
    filter_key: str,
    parent_values: Optional[Mapping[str, Any]],
) -> Dict[str, str]:
    """Query string: ``resource``, ``filter``, then one entry per parent."""
    params = {"resource": resource_key, "filter": filter_key}
    for key, value in (parent_values or {}).items():
        params[key] = "" if value is None else str(value)
    return params
