"""
Calendar Rules

Pure predicates over events, shared by services, schemas and reminders.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from teachassist.core.timeutils import as_utc


class _Timed(Protocol):
    start_time: datetime
    end_time: datetime | None
    completed: bool


def is_overdue(event: _Timed, now: datetime) -> bool:
    """An incomplete event whose end time (or start time, if open-ended) has passed."""
    if event.completed:
        return False
    reference = event.end_time or event.start_time
    return as_utc(reference) < as_utc(now)
