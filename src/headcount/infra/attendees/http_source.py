"""httpx adapters for the attendee service and the legacy fetch URL."""
from __future__ import annotations

import logging
from typing import Any

import httpx

from headcount.config import settings
from headcount.domain.exceptions import FetchError

logger = logging.getLogger(__name__)

_JSON_HEADERS = {"Accept": "application/json"}


def _unwrap_records(payload: Any) -> list[Any]:
    """Accept a bare JSON list or an envelope of the form ``{"data": [...]}``."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("data"), list):
        return payload["data"]
    return []


async def _get_json(client: httpx.AsyncClient, url: str) -> Any:
    try:
        resp = await client.get(url, headers=_JSON_HEADERS)
    except httpx.HTTPError as exc:
        raise FetchError(str(exc) or exc.__class__.__name__) from exc

    if not resp.is_success:
        raise FetchError(f"Fetch failed: {resp.status_code}", status_code=resp.status_code)

    try:
        return resp.json()
    except ValueError as exc:
        raise FetchError(f"Invalid JSON from {url}: {exc}") from exc


async def fetch_attendees_from_url(
    url: str, client: httpx.AsyncClient | None = None,
) -> list[Any]:
    """GET *url* and return its attendee list (legacy ``fetch_url`` path)."""
    logger.debug("Fetching attendees from %s", url)
    if client is not None:
        return _unwrap_records(await _get_json(client, url))
    async with httpx.AsyncClient(timeout=settings.REQUEST_TIMEOUT) as own_client:
        return _unwrap_records(await _get_json(own_client, url))


class HttpAttendeeSource:
    """Default attendee service reached over HTTP."""

    def __init__(
        self,
        endpoint: str | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        self._endpoint = endpoint or settings.attendees_endpoint
        self._client = client
        self._timeout = settings.REQUEST_TIMEOUT if timeout is None else timeout

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def get_all(self) -> list[Any]:
        if self._client is not None:
            return _unwrap_records(await _get_json(self._client, self._endpoint))
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return _unwrap_records(await _get_json(client, self._endpoint))
