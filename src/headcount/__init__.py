"""Registered vs actual attendee headcount dashboard."""

__version__ = "0.2.0"
