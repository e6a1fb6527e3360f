"""Reminder notification schemas."""

from uuid import UUID

from pydantic import BaseModel

from teachassist.core.schemas.users import NotificationStyle


class ReminderNotification(BaseModel):
    """One reminder for one event in one evaluation pass."""

    event_id: UUID
    title: str = "Event Reminder"
    message: str
    minutes_until: int
    style: NotificationStyle
    dismissible: bool = False
    duration_ms: int | None = None
    glow_duration_ms: int | None = None
