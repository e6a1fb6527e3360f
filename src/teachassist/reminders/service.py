"""
Due Reminders

One evaluation pass for one user: re-query the events inside the lead
window and decide which reminders fire.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from teachassist.calendar.events import list_events
from teachassist.core.schemas import NotificationPreferences, ReminderNotification
from teachassist.core.timeutils import utcnow
from teachassist.profiles.service import get_notification_preferences
from teachassist.reminders.evaluator import evaluate_reminders, reminder_window


async def check_due_reminders(
    db: AsyncSession,
    user_id: UUID | None,
    *,
    now: datetime | None = None,
    preferences: NotificationPreferences | None = None,
) -> list[ReminderNotification]:
    """Reminders due for ``user_id`` at ``now`` (default: current time)."""
    if user_id is None:
        return []

    now = now or utcnow()
    if preferences is None:
        preferences = await get_notification_preferences(db, user_id)

    start_from, start_until = reminder_window(now, preferences)
    events = await list_events(db, user_id, start_from=start_from, start_until=start_until)
    return evaluate_reminders(events, preferences, now)
