"""Widget input/output DTOs."""
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, SkipValidation

from headcount.config import settings
from headcount.schemas.attendance import AttendeeRecord, ChartRow, Totals


class WidgetState(str, Enum):
    HAS_DATA = "HAS_DATA"
    LOADING = "LOADING"
    ERROR = "ERROR"


class WidgetInputs(BaseModel):
    """Caller-supplied options for one widget instance."""

    model_config = ConfigDict(frozen=True)

    # Records are kept as the caller's own objects.
    attendees: SkipValidation[list[AttendeeRecord] | None] = None
    fetch_url: str | None = None
    height: int = Field(default_factory=lambda: settings.CHART_HEIGHT, gt=0)

    @property
    def has_attendees(self) -> bool:
        return bool(self.attendees)


class WidgetView(BaseModel):
    """Everything a renderer needs for one paint."""

    state: WidgetState
    height: int
    error: str | None = None
    totals: Totals | None = None
    chart_rows: list[ChartRow] = []
    summary: str = ""
