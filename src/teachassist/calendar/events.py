"""
Calendar Event Service

CRUD bridge for calendar events. Every operation:
- short-circuits to an empty/no-op result when no user id is available
- stamps the owning user id on writes
- filters reads, updates and deletes by owning user id
- clears cached event list views after a successful write
- converts store failures into a single user-facing StoreError
"""

from __future__ import annotations

import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from teachassist.core.cache import EVENTS, list_cache
from teachassist.core.errors import NotFoundError, StoreError
from teachassist.core.models import CalendarEvent
from teachassist.core.schemas import EventCreate, EventSchema, EventUpdate
from teachassist.core.timeutils import as_utc, from_form_input
from teachassist.core.validation import ValidationError

logger = logging.getLogger(__name__)


async def list_events(
    db: AsyncSession,
    user_id: UUID | None,
    *,
    include_completed: bool = False,
    start_from: datetime | None = None,
    start_until: datetime | None = None,
    limit: int | None = None,
) -> list[EventSchema]:
    """List the user's events ordered by start time ascending.

    Args:
        db: Database session
        user_id: Owning user (None → empty list)
        include_completed: Include soft-completed events (default: incomplete only)
        start_from: Only events starting at or after this instant
        start_until: Only events starting at or before this instant
        limit: Maximum number of events

    Returns:
        Serialized events

    Raises:
        StoreError: If the query fails
    """
    if user_id is None:
        return []

    # Time-window reads (dashboard, reminders) depend on "now" and are not cached
    cacheable = start_from is None and start_until is None
    variant = f"completed={include_completed}:limit={limit}"

    if cacheable:
        cached = await list_cache.get(EVENTS, user_id, variant, EventSchema)
        if cached is not None:
            return cached

    stmt = select(CalendarEvent).where(CalendarEvent.user_id == user_id)
    if not include_completed:
        stmt = stmt.where(CalendarEvent.completed.is_(False))
    if start_from is not None:
        stmt = stmt.where(CalendarEvent.start_time >= from_form_input(start_from))
    if start_until is not None:
        stmt = stmt.where(CalendarEvent.start_time <= from_form_input(start_until))
    stmt = stmt.order_by(CalendarEvent.start_time.asc())
    if limit is not None:
        stmt = stmt.limit(limit)

    try:
        result = await db.execute(stmt)
    except SQLAlchemyError as e:
        logger.error(f"Failed to load events for user {user_id}: {e}")
        raise StoreError("Failed to load events") from e

    events = [EventSchema.model_validate(row) for row in result.scalars().all()]

    if cacheable:
        await list_cache.set(EVENTS, user_id, variant, EventSchema, events)

    return events


async def get_event(db: AsyncSession, user_id: UUID | None, event_id: UUID) -> CalendarEvent | None:
    """Fetch one event owned by ``user_id`` (None if missing or not owned)."""
    if user_id is None:
        return None

    try:
        result = await db.execute(
            select(CalendarEvent).where(
                CalendarEvent.id == event_id, CalendarEvent.user_id == user_id
            )
        )
    except SQLAlchemyError as e:
        logger.error(f"Failed to load event {event_id}: {e}")
        raise StoreError("Failed to load event") from e

    return result.scalar_one_or_none()


async def create_event(
    db: AsyncSession, user_id: UUID | None, data: EventCreate
) -> CalendarEvent | None:
    """Insert a new, incomplete event for ``user_id``."""
    if user_id is None:
        return None

    event = CalendarEvent(
        user_id=user_id,
        title=data.title,
        description=data.description,
        start_time=from_form_input(data.start_time),
        end_time=from_form_input(data.end_time) if data.end_time else None,
        type=data.type,
        completed=False,
    )

    try:
        db.add(event)
        await db.commit()
        await db.refresh(event)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to add event for user {user_id}: {e}")
        raise StoreError("Failed to add event") from e

    await list_cache.invalidate(EVENTS, user_id)
    logger.info(f"Event {event.id} added for user {user_id}")
    return event


async def update_event(
    db: AsyncSession, user_id: UUID | None, event_id: UUID, data: EventUpdate
) -> CalendarEvent | None:
    """Apply the provided fields to an owned event.

    Raises:
        NotFoundError: Event missing or owned by another user
        StoreError: If the update fails
    """
    if user_id is None:
        return None

    event = await get_event(db, user_id, event_id)
    if event is None:
        raise NotFoundError(f"Event not found with ID: {event_id}")

    update_data = data.model_dump(exclude_unset=True)
    for field in ("title", "start_time", "type"):
        if field in update_data and update_data[field] is None:
            del update_data[field]
    for field in ("start_time", "end_time"):
        if update_data.get(field) is not None:
            update_data[field] = from_form_input(update_data[field])

    start = update_data.get("start_time") or as_utc(event.start_time)
    end = update_data["end_time"] if "end_time" in update_data else event.end_time
    if end is not None and as_utc(end) < start:
        raise ValidationError("End time cannot be before start time")

    for field, value in update_data.items():
        setattr(event, field, value)

    try:
        await db.commit()
        await db.refresh(event)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to update event {event_id}: {e}")
        raise StoreError("Failed to update event") from e

    await list_cache.invalidate(EVENTS, user_id)
    return event


async def complete_event(db: AsyncSession, user_id: UUID | None, event_id: UUID) -> bool:
    """Soft-complete an owned event. Returns False for anonymous callers.

    Raises:
        NotFoundError: Event missing or owned by another user
        StoreError: If the update fails
    """
    if user_id is None:
        return False

    event = await get_event(db, user_id, event_id)
    if event is None:
        raise NotFoundError(f"Event not found with ID: {event_id}")

    event.completed = True

    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to complete event {event_id}: {e}")
        raise StoreError("Failed to complete event") from e

    await list_cache.invalidate(EVENTS, user_id)
    return True


async def delete_event(db: AsyncSession, user_id: UUID | None, event_id: UUID) -> bool:
    """Delete an owned event. Returns False for anonymous callers.

    Raises:
        NotFoundError: Event missing or owned by another user
        StoreError: If the delete fails
    """
    if user_id is None:
        return False

    event = await get_event(db, user_id, event_id)
    if event is None:
        raise NotFoundError(f"Event not found with ID: {event_id}")

    try:
        await db.delete(event)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to delete event {event_id}: {e}")
        raise StoreError("Failed to delete event") from e

    await list_cache.invalidate(EVENTS, user_id)
    return True
