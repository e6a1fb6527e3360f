"""
Profile API Endpoints

Onboarding, settings, notification preferences and account management for
the signed-in teacher.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from teachassist.core.database import get_db
from teachassist.core.errors import AuthenticationRequired
from teachassist.core.models import UserProfile
from teachassist.core.schemas import (
    AccountDeletionRequest,
    MessageResponse,
    NotificationPreferences,
    OnboardingRequest,
    PasswordChangeRequest,
    ProfileSchema,
    ProfileUpdate,
)
from teachassist.core.security import AuthContext, get_auth_context, user_id_of
from teachassist.profiles import service as profile_service
from teachassist.profiles.identity import IdentityClient, get_identity_client

router = APIRouter()


@router.get("/", response_model=ProfileSchema | None)
async def get_profile(
    auth: AuthContext | None = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db),
) -> UserProfile | None:
    """The caller's profile (null when anonymous or not created yet)."""
    return await profile_service.get_profile(db, user_id_of(auth))


@router.post("/onboarding", response_model=ProfileSchema)
async def complete_onboarding(
    onboarding: OnboardingRequest,
    auth: AuthContext | None = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db),
) -> UserProfile:
    """Save the onboarding form and mark onboarding completed."""
    profile = await profile_service.complete_onboarding(db, auth, onboarding)
    if profile is None:
        raise AuthenticationRequired()
    return profile


@router.patch("/", response_model=ProfileSchema)
async def update_profile(
    profile_update: ProfileUpdate,
    auth: AuthContext | None = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db),
) -> UserProfile:
    """Update settings. Only fields explicitly provided are changed."""
    profile = await profile_service.update_profile(db, user_id_of(auth), profile_update)
    if profile is None:
        raise AuthenticationRequired()
    return profile


@router.get("/notification-preferences", response_model=NotificationPreferences)
async def get_notification_preferences(
    auth: AuthContext | None = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db),
) -> NotificationPreferences:
    """Reminder lead time and style (defaults when unset)."""
    return await profile_service.get_notification_preferences(db, user_id_of(auth))


@router.post("/password", response_model=MessageResponse)
async def change_password(
    password_change: PasswordChangeRequest,
    auth: AuthContext | None = Depends(get_auth_context),
    identity: IdentityClient = Depends(get_identity_client),
) -> MessageResponse:
    """Change the caller's password."""
    if not await profile_service.change_password(identity, auth, password_change):
        raise AuthenticationRequired()
    return MessageResponse(message="Password updated successfully")


@router.delete("/", response_model=MessageResponse)
async def delete_account(
    deletion: AccountDeletionRequest,
    auth: AuthContext | None = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db),
    identity: IdentityClient = Depends(get_identity_client),
) -> MessageResponse:
    """Delete the caller's profile and deactivate their identity."""
    if not await profile_service.delete_account(
        db, identity, auth, deletion.confirmation_email
    ):
        raise AuthenticationRequired()
    return MessageResponse(message="Account deleted successfully")
