"""
TeachAssist SQLAlchemy Models

Four user-scoped tables: profiles, calendar events, resources and quizzes.
"""

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from .calendar import EVENT_TYPES, CalendarEvent
from .quizzes import Quiz
from .resources import RESOURCE_TYPES, Resource
from .users import DEFAULT_NOTIFICATION_PREFERENCES, NOTIFICATION_STYLES, UserProfile

__all__ = [
    # Base
    "Base",
    "UUIDPrimaryKeyMixin",
    "TimestampMixin",
    # Users
    "UserProfile",
    "NOTIFICATION_STYLES",
    "DEFAULT_NOTIFICATION_PREFERENCES",
    # Calendar
    "CalendarEvent",
    "EVENT_TYPES",
    # Resources
    "Resource",
    "RESOURCE_TYPES",
    # Quizzes
    "Quiz",
]
