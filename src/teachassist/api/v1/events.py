"""
Calendar Event API Endpoints

Lesson, meeting, deadline and other events for the signed-in teacher.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from teachassist.calendar import events as event_service
from teachassist.core.database import get_db
from teachassist.core.errors import AuthenticationRequired, NotFoundError
from teachassist.core.models import CalendarEvent
from teachassist.core.schemas import EventCreate, EventSchema, EventUpdate, MessageResponse
from teachassist.core.security import AuthContext, get_auth_context, user_id_of

router = APIRouter()


@router.get("/", response_model=list[EventSchema])
async def list_events(
    include_completed: bool = False,
    start_from: datetime | None = None,
    start_until: datetime | None = None,
    limit: int | None = Query(None, ge=1, le=500),
    auth: AuthContext | None = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db),
) -> list[EventSchema]:
    """List the caller's events ordered by start time (incomplete only by default)."""
    return await event_service.list_events(
        db,
        user_id_of(auth),
        include_completed=include_completed,
        start_from=start_from,
        start_until=start_until,
        limit=limit,
    )


@router.post("/", response_model=EventSchema, status_code=status.HTTP_201_CREATED)
async def create_event(
    event_data: EventCreate,
    auth: AuthContext | None = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db),
) -> CalendarEvent:
    """Add an event to the caller's calendar."""
    event = await event_service.create_event(db, user_id_of(auth), event_data)
    if event is None:
        raise AuthenticationRequired()
    return event


@router.get("/{event_id}", response_model=EventSchema)
async def get_event(
    event_id: UUID,
    auth: AuthContext | None = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db),
) -> CalendarEvent:
    """Get one of the caller's events."""
    if auth is None:
        raise AuthenticationRequired()

    event = await event_service.get_event(db, auth.user_id, event_id)
    if event is None:
        raise NotFoundError(f"Event not found with ID: {event_id}")
    return event


@router.patch("/{event_id}", response_model=EventSchema)
async def update_event(
    event_id: UUID,
    event_update: EventUpdate,
    auth: AuthContext | None = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db),
) -> CalendarEvent:
    """Update an event. Only fields explicitly provided are changed."""
    event = await event_service.update_event(db, user_id_of(auth), event_id, event_update)
    if event is None:
        raise AuthenticationRequired()
    return event


@router.post("/{event_id}/complete", response_model=MessageResponse)
async def complete_event(
    event_id: UUID,
    auth: AuthContext | None = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    """Mark an event completed. Completed events stay stored."""
    if not await event_service.complete_event(db, user_id_of(auth), event_id):
        raise AuthenticationRequired()
    return MessageResponse(message="Event marked as completed")


@router.delete("/{event_id}", response_model=MessageResponse)
async def delete_event(
    event_id: UUID,
    auth: AuthContext | None = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    """Permanently delete an event."""
    if not await event_service.delete_event(db, user_id_of(auth), event_id):
        raise AuthenticationRequired()
    return MessageResponse(message="Event deleted successfully")
