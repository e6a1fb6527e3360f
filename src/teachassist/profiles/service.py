"""
Profile Service

Onboarding, settings and account operations for the caller's profile row.
"""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from teachassist.config import settings
from teachassist.core.errors import NotFoundError, StoreError
from teachassist.core.models import UserProfile
from teachassist.core.schemas import (
    NotificationPreferences,
    OnboardingRequest,
    PasswordChangeRequest,
    ProfileUpdate,
)
from teachassist.core.security import AuthContext
from teachassist.core.validation import ValidationError
from teachassist.profiles.identity import IdentityClient

logger = logging.getLogger(__name__)


def default_notification_preferences() -> NotificationPreferences:
    """Preferences used when none are stored."""
    return NotificationPreferences(
        event_reminder=settings.DEFAULT_REMINDER_MINUTES, notification_style="popup"
    )


def preferences_from_stored(raw: dict[str, Any] | None) -> NotificationPreferences:
    """Parse a stored preferences value; missing or malformed values give the defaults."""
    if not raw:
        return default_notification_preferences()
    try:
        return NotificationPreferences.model_validate(raw)
    except PydanticValidationError:
        logger.warning(f"Ignoring malformed notification preferences: {raw!r}")
        return default_notification_preferences()


async def get_profile(db: AsyncSession, user_id: UUID | None) -> UserProfile | None:
    """Load the caller's profile (None when anonymous or not created yet)."""
    if user_id is None:
        return None

    try:
        result = await db.execute(select(UserProfile).where(UserProfile.id == user_id))
    except SQLAlchemyError as e:
        logger.error(f"Failed to load profile {user_id}: {e}")
        raise StoreError("Failed to load profile") from e

    return result.scalar_one_or_none()


async def get_onboarding_status(db: AsyncSession, user_id: UUID | None) -> bool | None:
    """Onboarding flag for route gating; None when unknown."""
    profile = await get_profile(db, user_id)
    return profile.onboarding_completed if profile else None


async def complete_onboarding(
    db: AsyncSession, auth: AuthContext | None, data: OnboardingRequest
) -> UserProfile | None:
    """Populate the profile from the onboarding form and set the flag.

    The row is normally created at registration; if it is missing it is
    created here keyed by the identity id.
    """
    if auth is None:
        return None

    profile = await get_profile(db, auth.user_id)
    if profile is None:
        profile = UserProfile(id=auth.user_id, email=auth.email)
        db.add(profile)

    profile.full_name = data.full_name
    profile.school_name = data.school_name
    profile.subjects_taught = data.subjects_taught
    profile.grade_levels = data.grade_levels
    profile.years_of_experience = data.years_of_experience
    profile.teaching_style = data.teaching_style
    profile.interests = data.interests
    profile.onboarding_completed = True

    try:
        await db.commit()
        await db.refresh(profile)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to complete onboarding for {auth.user_id}: {e}")
        raise StoreError("Failed to update profile. Please try again.") from e

    logger.info(f"Onboarding completed for user {auth.user_id}")
    return profile


async def update_profile(
    db: AsyncSession, user_id: UUID | None, data: ProfileUpdate
) -> UserProfile | None:
    """Apply settings-form changes. Only fields explicitly provided are updated.

    Raises:
        NotFoundError: Profile row does not exist
        StoreError: If the update fails
    """
    if user_id is None:
        return None

    profile = await get_profile(db, user_id)
    if profile is None:
        raise NotFoundError("Profile not found")

    update_data: dict[str, Any] = data.model_dump(exclude_unset=True)
    for field in ("subjects_taught", "grade_levels", "interests", "notification_preferences"):
        if field in update_data and update_data[field] is None:
            del update_data[field]
    if "notification_preferences" in update_data:
        # Nested exclude_unset keeps only the submitted keys; merge them over the stored value
        stored = preferences_from_stored(profile.notification_preferences).model_dump()
        update_data["notification_preferences"] = NotificationPreferences.model_validate(
            {**stored, **update_data["notification_preferences"]}
        ).model_dump()
    for field, value in update_data.items():
        setattr(profile, field, value)

    try:
        await db.commit()
        await db.refresh(profile)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to update profile {user_id}: {e}")
        raise StoreError("Failed to update profile. Please try again.") from e

    return profile


async def get_notification_preferences(
    db: AsyncSession, user_id: UUID | None
) -> NotificationPreferences:
    """Stored reminder preferences, or the defaults.

    A failed lookup or a malformed stored value also yields the defaults.
    """
    try:
        profile = await get_profile(db, user_id)
    except StoreError:
        logger.warning(f"Falling back to default notification preferences for {user_id}")
        return default_notification_preferences()

    if profile is None:
        return default_notification_preferences()

    return preferences_from_stored(profile.notification_preferences)


async def change_password(
    identity: IdentityClient, auth: AuthContext | None, data: PasswordChangeRequest
) -> bool:
    """Change the caller's password through the identity service.

    Raises:
        ValidationError: New password and confirmation differ
        IdentityError: Identity service rejected the change
    """
    if auth is None:
        return False

    if data.new_password != data.confirm_password:
        raise ValidationError("New passwords do not match")

    await identity.update_password(access_token=auth.access_token, new_password=data.new_password)
    logger.info(f"Password updated for user {auth.user_id}")
    return True


async def delete_account(
    db: AsyncSession,
    identity: IdentityClient,
    auth: AuthContext | None,
    confirmation_email: str,
) -> bool:
    """Remove the profile row, then mark the external identity deleted.

    Raises:
        ValidationError: Confirmation email does not match the account email
        StoreError: Profile row could not be removed
        IdentityError: Identity could not be flagged
    """
    if auth is None:
        return False

    if not auth.email or confirmation_email.strip().lower() != auth.email.lower():
        raise ValidationError("Email confirmation does not match")

    try:
        await db.execute(delete(UserProfile).where(UserProfile.id == auth.user_id))
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to delete profile {auth.user_id}: {e}")
        raise StoreError("Failed to delete account. Please try again.") from e

    await identity.mark_deleted(user_id=auth.user_id)
    logger.info(f"Account deleted for user {auth.user_id}")
    return True
