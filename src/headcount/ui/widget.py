"""Registered-vs-actual widget state: rows, loading flag and error message.

Framework-free so it can be driven from Streamlit, the CLI or tests. All
mutation happens on the event loop that awaits ``refresh``; a newer refresh
(or ``teardown``) cancels the previous attempt's token so its outcome is
dropped instead of committed.
"""
from __future__ import annotations

import logging
from typing import Any

import httpx

from headcount.domain.exceptions import FetchError
from headcount.infra.attendees.source import AttendeeSource
from headcount.schemas.widget import WidgetInputs, WidgetState, WidgetView
from headcount.services.aggregation import aggregate, project, summary_line
from headcount.services.resolution import CancellationToken, ResolutionService, error_message

logger = logging.getLogger(__name__)


class AttendanceWidget:
    def __init__(
        self,
        source: AttendeeSource,
        inputs: WidgetInputs | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._resolver = ResolutionService(source, http_client)
        self._inputs = inputs or WidgetInputs()
        self._token: CancellationToken | None = None

        self.rows: list[Any] = list(self._inputs.attendees or [])
        self.loading: bool = self._resolver.needs_fetch(self._inputs)
        self.error: str | None = None

    @property
    def inputs(self) -> WidgetInputs:
        return self._inputs

    @property
    def state(self) -> WidgetState:
        if self.loading:
            return WidgetState.LOADING
        if self.error is not None:
            return WidgetState.ERROR
        return WidgetState.HAS_DATA

    async def refresh(self, inputs: WidgetInputs | None = None) -> WidgetState:
        """Resolve attendees for *inputs* (or the current inputs) and commit the outcome.

        Returns the widget state after this call; if the attempt was superseded
        the returned state reflects whatever the newer attempt has committed.
        """
        if inputs is not None:
            self._inputs = inputs
        current = self._inputs

        if self._token is not None:
            self._token.cancel()
        token = CancellationToken()
        self._token = token

        if not self._resolver.needs_fetch(current):
            self.rows = list(current.attendees)
            self.error = None
            self.loading = False
            return self.state

        self.loading = True
        self.error = None
        try:
            rows = await self._resolver.resolve(current)
        except FetchError as exc:
            if token.cancelled:
                logger.debug("Discarding failure from superseded resolution: %s", exc)
            else:
                logger.warning("Attendee resolution failed: %s", exc)
                self.error = error_message(exc)
        else:
            if token.cancelled:
                logger.debug("Discarding %d rows from superseded resolution", len(rows))
            else:
                self.rows = rows
        finally:
            if not token.cancelled:
                self.loading = False
                self._token = None

        return self.state

    def teardown(self) -> None:
        """Drop whatever resolution is still in flight."""
        if self._token is not None:
            self._token.cancel()
            self._token = None

    def view(self) -> WidgetView:
        state = self.state
        if state is not WidgetState.HAS_DATA:
            return WidgetView(state=state, height=self._inputs.height, error=self.error)

        totals = aggregate(self.rows)
        return WidgetView(
            state=state,
            height=self._inputs.height,
            totals=totals,
            chart_rows=project(totals),
            summary=summary_line(totals),
        )
