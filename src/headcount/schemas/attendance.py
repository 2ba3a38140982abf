"""Attendance DTOs. Pure Pydantic, no I/O."""
from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# One registrant's raw payload, as served by any historical API version.
AttendeeRecord = Mapping[str, Any]

Count = int | float


class ChartGroup(str, Enum):
    ADULTS = "Adults"
    CHILDREN = "Children"
    REGISTRATION = "Registration"


class Totals(BaseModel):
    model_config = ConfigDict(frozen=True)

    registered_adults: Count = 0
    actual_adults: Count = 0
    registered_children: Count = 0
    actual_children: Count = 0
    present_count: int = 0
    absent_count: int = 0

    @property
    def record_count(self) -> int:
        return self.present_count + self.absent_count

    @property
    def registered_total(self) -> Count:
        return self.registered_adults + self.registered_children

    @property
    def actual_total(self) -> Count:
        return self.actual_adults + self.actual_children


class ChartRow(BaseModel):
    """One category on the bar chart. Dumps as ``{group, Registered, Actual}``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    group: ChartGroup
    registered: Count = Field(alias="Registered")
    actual: Count = Field(alias="Actual")
