"""Pydantic schemas for API validation."""

from .calendar import EventCreate, EventSchema, EventUpdate
from .dashboard import DashboardSchema, QuickStats
from .quizzes import (
    CredentialStatus,
    QuizDocuments,
    QuizGenerateRequest,
    QuizGenerationResponse,
    QuizQuestion,
    QuizSchema,
    QuizSummary,
)
from .reminders import ReminderNotification
from .resources import ResourceCreate, ResourceSchema
from .users import (
    AccountDeletionRequest,
    MessageResponse,
    NotificationPreferences,
    OnboardingRequest,
    PasswordChangeRequest,
    ProfileSchema,
    ProfileUpdate,
)

__all__ = [
    # Calendar
    "EventCreate",
    "EventUpdate",
    "EventSchema",
    # Dashboard
    "DashboardSchema",
    "QuickStats",
    # Quizzes
    "QuizGenerateRequest",
    "QuizQuestion",
    "QuizSchema",
    "QuizSummary",
    "QuizDocuments",
    "QuizGenerationResponse",
    "CredentialStatus",
    # Reminders
    "ReminderNotification",
    # Resources
    "ResourceCreate",
    "ResourceSchema",
    # Users
    "NotificationPreferences",
    "OnboardingRequest",
    "ProfileUpdate",
    "ProfileSchema",
    "PasswordChangeRequest",
    "AccountDeletionRequest",
    "MessageResponse",
]
