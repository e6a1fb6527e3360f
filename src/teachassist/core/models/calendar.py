"""
Calendar Event Model

Scheduled classes, labs and meetings owned by a teacher.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from .users import UserProfile

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, event
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin

EVENT_TYPES = ("class", "lab", "meeting")


class CalendarEvent(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A calendar entry. Completion is a flag, never a delete."""

    __tablename__ = "calendar_events"
    __table_args__ = (
        Index("ix_calendar_events_user_start", "user_id", "completed", "start_time"),
    )

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    type: Mapped[str] = mapped_column(String(20), default="class", comment="class, lab, meeting")
    completed: Mapped[bool] = mapped_column(default=False)

    owner: Mapped[UserProfile] = relationship(back_populates="events")


@event.listens_for(CalendarEvent, "init", propagate=True)
def receive_init_event(target, _args, kwargs):  # type: ignore[no-untyped-def]
    """Ensure completed/type defaults exist for in-memory objects."""
    if "completed" not in kwargs:
        target.completed = False
    if "type" not in kwargs:
        target.type = "class"
