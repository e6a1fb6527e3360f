"""
Navigation API Endpoint

Route gating for the browser: where should a given path redirect.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from teachassist.core.database import get_db
from teachassist.core.security import AuthContext, get_auth_context, user_id_of
from teachassist.navigation import resolve_route
from teachassist.profiles.service import get_onboarding_status

router = APIRouter()


class RouteDecision(BaseModel):
    path: str
    redirect_to: str | None


@router.get("/resolve", response_model=RouteDecision)
async def resolve(
    path: str = Query(..., min_length=1),
    auth: AuthContext | None = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db),
) -> RouteDecision:
    """Redirect target for ``path`` given the caller's session."""
    onboarding_completed = await get_onboarding_status(db, user_id_of(auth))
    return RouteDecision(
        path=path,
        redirect_to=resolve_route(
            path, authenticated=auth is not None, onboarding_completed=onboarding_completed
        ),
    )
