"""Attendee source contract and adapters."""

from headcount.infra.attendees.http_source import HttpAttendeeSource, fetch_attendees_from_url
from headcount.infra.attendees.source import AttendeeSource

__all__ = [
    "AttendeeSource",
    "HttpAttendeeSource",
    "fetch_attendees_from_url",
]
