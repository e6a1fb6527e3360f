"""
Dashboard API Endpoint

Greeting, quick stats and the next few upcoming events.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from teachassist.calendar.events import list_events
from teachassist.config import settings
from teachassist.core.database import get_db
from teachassist.core.schemas import DashboardSchema, QuickStats
from teachassist.core.security import AuthContext, get_auth_context, user_id_of
from teachassist.core.timeutils import utcnow
from teachassist.profiles.service import get_profile

router = APIRouter()


@router.get("/", response_model=DashboardSchema)
async def get_dashboard(
    auth: AuthContext | None = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db),
) -> DashboardSchema:
    """Dashboard summary for the caller (empty for anonymous callers)."""
    user_id = user_id_of(auth)
    profile = await get_profile(db, user_id)
    upcoming = await list_events(
        db, user_id, start_from=utcnow(), limit=settings.DASHBOARD_UPCOMING_LIMIT
    )

    subjects = profile.subjects_taught if profile else []
    grade_levels = profile.grade_levels if profile else []

    return DashboardSchema(
        greeting=f"Welcome back, {(profile.full_name if profile else None) or 'Teacher'}!",
        school_name=profile.school_name if profile else None,
        subjects_taught=subjects,
        stats=QuickStats(
            upcoming_events=len(upcoming),
            subjects=len(subjects),
            grade_levels=len(grade_levels),
            years_experience=(profile.years_of_experience if profile else None) or 0,
        ),
        upcoming_events=upcoming,
    )
