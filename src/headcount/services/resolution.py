"""Attendee resolution use-case: decide where records come from and fetch them once."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from headcount.domain.exceptions import FetchError
from headcount.infra.attendees.http_source import fetch_attendees_from_url
from headcount.infra.attendees.source import AttendeeSource
from headcount.schemas.widget import WidgetInputs

logger = logging.getLogger(__name__)


class CancellationToken:
    """Marks one resolution attempt as stale.

    The owner checks ``cancelled`` before committing any outcome; the
    underlying request is left to finish on its own.
    """

    __slots__ = ("_cancelled",)

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


def error_message(exc: BaseException) -> str:
    """Human-readable text for *exc*: its message, else its string form."""
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc) or exc.__class__.__name__


class ResolutionService:
    def __init__(
        self, source: AttendeeSource, http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._source = source
        self._http_client = http_client

    def needs_fetch(self, inputs: WidgetInputs) -> bool:
        return not inputs.has_attendees

    async def resolve(self, inputs: WidgetInputs) -> list[Any]:
        """Return attendee records for *inputs*, raising ``FetchError`` on any failure.

        Priority: non-empty ``attendees`` (no network), then ``fetch_url``,
        then the default source.
        """
        if inputs.has_attendees:
            return list(inputs.attendees)

        try:
            if inputs.fetch_url:
                return await fetch_attendees_from_url(inputs.fetch_url, client=self._http_client)
            data = await self._source.get_all()
        except FetchError:
            raise
        except Exception as exc:
            logger.debug("Attendee source failed: %r", exc)
            raise FetchError(error_message(exc)) from exc

        return _as_list(data)


def _as_list(data: Any) -> list[Any]:
    if isinstance(data, Sequence) and not isinstance(data, (str, bytes)):
        return list(data)
    return []


async def resolve_attendees(
    inputs: WidgetInputs,
    source: AttendeeSource,
    http_client: httpx.AsyncClient | None = None,
) -> list[Any]:
    """Convenience wrapper around ``ResolutionService.resolve``."""
    return await ResolutionService(source, http_client).resolve(inputs)
