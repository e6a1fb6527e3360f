"""
User Profile Schemas

Pydantic models for onboarding, settings and account requests.
"""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from teachassist.core.validation import split_csv_list

NotificationStyle = Literal["popup", "glow", "standard"]


class NotificationPreferences(BaseModel):
    """Reminder lead time and display style."""

    event_reminder: int = Field(default=30, ge=1, le=1440, description="Lead window in minutes")
    notification_style: NotificationStyle = "popup"


class _ProfileListFields(BaseModel):
    """List fields accept a JSON list or comma-separated text."""

    @field_validator("subjects_taught", "grade_levels", "interests", mode="before", check_fields=False)
    @classmethod
    def split_lists(cls, v: str | list[str] | None) -> list[str] | None:
        if v is None:
            return None
        return split_csv_list(v)


class OnboardingRequest(_ProfileListFields):
    """Profile setup form submitted once after registration."""

    full_name: str = Field(..., min_length=1, max_length=200)
    school_name: str = Field(..., min_length=1, max_length=300)
    subjects_taught: list[str] = Field(default_factory=list)
    grade_levels: list[str] = Field(default_factory=list)
    years_of_experience: int | None = Field(None, ge=0, le=80)
    teaching_style: str | None = None
    interests: list[str] = Field(default_factory=list)


class ProfileUpdate(_ProfileListFields):
    """Settings form. Only fields explicitly provided are updated."""

    full_name: str | None = Field(None, max_length=200)
    school_name: str | None = Field(None, max_length=300)
    subjects_taught: list[str] | None = None
    grade_levels: list[str] | None = None
    years_of_experience: int | None = Field(None, ge=0, le=80)
    teaching_style: str | None = None
    interests: list[str] | None = None
    notification_preferences: NotificationPreferences | None = None


class ProfileSchema(BaseModel):
    """Full profile for responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str | None
    full_name: str | None
    school_name: str | None
    subjects_taught: list[str]
    grade_levels: list[str]
    years_of_experience: int | None
    teaching_style: str | None
    interests: list[str]
    notification_preferences: NotificationPreferences | None
    onboarding_completed: bool
    created_at: datetime
    updated_at: datetime


class PasswordChangeRequest(BaseModel):
    """Change-password dialog."""

    current_password: str = ""
    new_password: str = Field(..., min_length=6)
    confirm_password: str


class AccountDeletionRequest(BaseModel):
    """Delete-account dialog: the user re-types their email."""

    confirmation_email: str


class MessageResponse(BaseModel):
    """Plain success message (toast text)."""

    message: str
