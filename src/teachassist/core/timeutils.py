"""
Datetime Normalization

Events are stored in UTC. Naive datetimes coming from the calendar form are
wall-clock times in DISPLAY_TIMEZONE; naive datetimes read back from a store
without timezone support are already UTC.
"""

from __future__ import annotations

from datetime import UTC, datetime

from teachassist.config import settings


def utcnow() -> datetime:
    """Current time, timezone-aware UTC."""
    return datetime.now(UTC)


def from_form_input(value: datetime) -> datetime:
    """Convert a client-supplied datetime to UTC.

    Naive values are interpreted in DISPLAY_TIMEZONE.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=settings.display_zone)
    return value.astimezone(UTC)


def as_utc(value: datetime) -> datetime:
    """Treat a stored datetime as UTC (naive values are assumed UTC)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def format_display_time(value: datetime) -> str:
    """Format as dd/MM/yyyy HH:mm in DISPLAY_TIMEZONE."""
    return as_utc(value).astimezone(settings.display_zone).strftime("%d/%m/%Y %H:%M")
