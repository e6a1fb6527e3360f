"""
Reminder Evaluation

Pure decision function: given a user's upcoming events, their notification
preferences and the current instant, which reminders fire in this pass.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import datetime, timedelta

from teachassist.core.schemas import EventSchema, NotificationPreferences, ReminderNotification
from teachassist.core.timeutils import as_utc

POPUP_DURATION_MS = 5000
GLOW_DURATION_MS = 2000


def minutes_until(start: datetime, now: datetime) -> int:
    """Whole minutes from ``now`` to ``start``, rounded down."""
    return math.floor((as_utc(start) - as_utc(now)).total_seconds() / 60)


def build_notification(
    event: EventSchema, minutes: int, preferences: NotificationPreferences
) -> ReminderNotification:
    """Notification payload shaped for the user's display style."""
    style = preferences.notification_style
    return ReminderNotification(
        event_id=event.id,
        message=f"Upcoming event: {event.title} in {minutes} minutes",
        minutes_until=minutes,
        style=style,
        dismissible=style == "popup",
        duration_ms=POPUP_DURATION_MS if style == "popup" else None,
        glow_duration_ms=GLOW_DURATION_MS if style == "glow" else None,
    )


def evaluate_reminders(
    events: Iterable[EventSchema],
    preferences: NotificationPreferences,
    now: datetime,
) -> list[ReminderNotification]:
    """One reminder per incomplete event starting within the lead window.

    Events that already started never notify. Passes are independent: the
    same event notifies again on the next pass while still in the window.
    """
    notifications = []
    for event in events:
        if event.completed or as_utc(event.start_time) <= as_utc(now):
            continue
        if as_utc(event.start_time) - as_utc(now) > timedelta(minutes=preferences.event_reminder):
            continue
        minutes = minutes_until(event.start_time, now)
        notifications.append(build_notification(event, minutes, preferences))
    return notifications


def reminder_window(now: datetime, preferences: NotificationPreferences) -> tuple[datetime, datetime]:
    """Start-time bounds for the per-pass event query."""
    return now, now + timedelta(minutes=preferences.event_reminder)
