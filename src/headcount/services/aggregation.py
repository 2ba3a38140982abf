"""Headcount aggregation: turns raw attendee records into chart-ready totals.

Records come from several generations of the attendee API, so each logical
field is looked up through an ordered list of candidate keys. Nothing here
raises: a value that cannot be read as a number contributes 0.
"""
from __future__ import annotations

import math
import numbers
from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any

from headcount.schemas.attendance import AttendeeRecord, ChartGroup, ChartRow, Count, Totals

# Logical field -> candidate keys, highest priority first.
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "registered_adults": ("no_of_reg_adults", "noOfRegAdults", "registeredAdults"),
    "actual_adults": ("no_of_actual_adults", "noOfActualAdults", "actualAdults"),
    "registered_children": ("no_of_reg_children", "noOfRegChildren", "registeredChildren"),
    "actual_children": ("no_of_actual_children", "noOfActualChildren", "actualChildren"),
}
PRESENCE_ALIASES: tuple[str, ...] = ("present",)


def resolve_field(record: Any, aliases: Iterable[str], default: Any = 0) -> Any:
    """Return the value of the first alias present on *record*.

    A key holding ``None`` is treated as missing; any other value, including
    ``0``, ``""`` and ``False``, wins.
    """
    if not isinstance(record, Mapping):
        return default
    for key in aliases:
        value = record.get(key)
        if value is not None:
            return value
    return default


def coerce_count(value: Any) -> Count:
    """Best-effort numeric coercion; anything unreadable becomes 0."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, (numbers.Real, Decimal)):
        try:
            number = float(value)
        except (ValueError, OverflowError):
            return 0
        return 0 if math.isnan(number) else number
    if isinstance(value, str):
        text = value.strip()
        if not text or "_" in text:
            return 0
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return 0
        return 0 if math.isnan(number) else number
    return 0


def is_present(record: Any) -> bool:
    value = resolve_field(record, PRESENCE_ALIASES, default=False)
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def aggregate(rows: Iterable[AttendeeRecord]) -> Totals:
    """Sum registered/actual headcounts and presence over *rows*."""
    sums: dict[str, Count] = {name: 0 for name in FIELD_ALIASES}
    present = absent = 0

    for record in rows:
        for name, aliases in FIELD_ALIASES.items():
            sums[name] += coerce_count(resolve_field(record, aliases))
        if is_present(record):
            present += 1
        else:
            absent += 1

    return Totals(**sums, present_count=present, absent_count=absent)


def project(totals: Totals) -> list[ChartRow]:
    """Reshape *totals* into the Adults / Children / Registration chart rows."""
    return [
        ChartRow(
            group=ChartGroup.ADULTS,
            registered=totals.registered_adults,
            actual=totals.actual_adults,
        ),
        ChartRow(
            group=ChartGroup.CHILDREN,
            registered=totals.registered_children,
            actual=totals.actual_children,
        ),
        ChartRow(
            group=ChartGroup.REGISTRATION,
            registered=totals.record_count,
            actual=totals.present_count,
        ),
    ]


def summary_line(totals: Totals) -> str:
    """One-line grand total across adults and children."""
    return f"Total Registered: {totals.registered_total} • Actual: {totals.actual_total}"
