"""
User Profile Model

Teacher profile row keyed by the external identity id. The identity itself
(credentials, sessions) lives in the managed auth service.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .calendar import CalendarEvent
    from .quizzes import Quiz
    from .resources import Resource

from sqlalchemy import JSON, Integer, String, Text, event
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin

NOTIFICATION_STYLES = ("popup", "glow", "standard")
DEFAULT_NOTIFICATION_PREFERENCES: dict[str, Any] = {
    "event_reminder": 30,
    "notification_style": "popup",
}


class UserProfile(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Teacher profile populated by onboarding and edited from settings."""

    __tablename__ = "users"

    email: Mapped[str | None] = mapped_column(String(320), nullable=True)

    # Identity
    full_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    school_name: Mapped[str | None] = mapped_column(String(300), nullable=True)

    # Teaching context
    subjects_taught: Mapped[list[str]] = mapped_column(
        JSON, default=list, comment="Array of subjects taught"
    )
    grade_levels: Mapped[list[str]] = mapped_column(
        JSON, default=list, comment="Array of grade levels taught"
    )
    years_of_experience: Mapped[int | None] = mapped_column(Integer, nullable=True)
    teaching_style: Mapped[str | None] = mapped_column(Text, nullable=True)
    interests: Mapped[list[str]] = mapped_column(
        JSON, default=list, comment="Professional interests"
    )

    notification_preferences: Mapped[dict[str, Any] | None] = mapped_column(
        JSON,
        nullable=True,
        comment="{event_reminder: minutes, notification_style: popup|glow|standard}",
    )

    onboarding_completed: Mapped[bool] = mapped_column(default=False)

    # Relationships
    events: Mapped[list[CalendarEvent]] = relationship(
        back_populates="owner", cascade="all, delete-orphan", passive_deletes=True
    )
    resources: Mapped[list[Resource]] = relationship(
        back_populates="owner", cascade="all, delete-orphan", passive_deletes=True
    )
    quizzes: Mapped[list[Quiz]] = relationship(
        back_populates="owner", cascade="all, delete-orphan", passive_deletes=True
    )


@event.listens_for(UserProfile, "init", propagate=True)
def receive_init_profile(target, _args, kwargs):  # type: ignore[no-untyped-def]
    """Default list fields and onboarding flag for in-memory objects."""
    for field in ("subjects_taught", "grade_levels", "interests"):
        if field not in kwargs:
            setattr(target, field, [])
    if "onboarding_completed" not in kwargs:
        target.onboarding_completed = False
