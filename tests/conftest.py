"""Shared fixtures: sample attendee payloads and fake sources.

Nothing here touches the network; HTTP is served by ``httpx.MockTransport``.
"""
import asyncio

import httpx
import pytest


class FakeSource:
    """AttendeeSource double that records calls and returns/raises a preset outcome."""

    def __init__(self, result=None, error: Exception | None = None) -> None:
        self.result = [] if result is None else result
        self.error = error
        self.calls = 0

    async def get_all(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.result


class GatedSource:
    """AttendeeSource whose ``get_all`` blocks until the test releases it."""

    def __init__(self, result=None, error: Exception | None = None) -> None:
        self.result = [] if result is None else result
        self.error = error
        self.started = asyncio.Event()
        self.release = asyncio.Event()
        self.calls = 0

    async def get_all(self):
        self.calls += 1
        self.started.set()
        await self.release.wait()
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def scenario_records():
    return [
        {"no_of_reg_adults": 2, "no_of_actual_adults": 1, "present": True},
        {"no_of_reg_children": 3, "no_of_actual_children": 3, "present": False},
    ]


@pytest.fixture
def mock_http():
    """Build an ``httpx.AsyncClient`` answering every request with *handler*.

    Returned requests are collected on ``client.seen`` for assertions.
    """
    def _make(handler):
        seen: list[httpx.Request] = []

        def _wrapped(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(_wrapped))
        client.seen = seen
        return client

    return _make
