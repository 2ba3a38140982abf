"""AttendeeSource contract used by the resolution service."""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class AttendeeSource(Protocol):
    """Default data source: one coroutine returning every attendee record."""

    async def get_all(self) -> Sequence[Any]:
        """Return the full attendee list, or raise on failure."""
        ...
