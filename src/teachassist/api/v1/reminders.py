"""
Reminder API Endpoints

Due-reminder polling for the browser and the background poller's inbox.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from teachassist.core.database import get_db
from teachassist.core.schemas import ReminderNotification
from teachassist.core.security import AuthContext, get_auth_context, user_id_of
from teachassist.reminders.inbox import ReminderInbox, get_reminder_inbox
from teachassist.reminders.service import check_due_reminders

router = APIRouter()


@router.get("/due", response_model=list[ReminderNotification])
async def get_due_reminders(
    auth: AuthContext | None = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db),
) -> list[ReminderNotification]:
    """Run one reminder pass for the caller. Clients poll this every minute."""
    return await check_due_reminders(db, user_id_of(auth))


@router.get("/inbox", response_model=list[ReminderNotification])
async def drain_inbox(
    auth: AuthContext | None = Depends(get_auth_context),
    inbox: ReminderInbox = Depends(get_reminder_inbox),
) -> list[ReminderNotification]:
    """Reminders queued by the background poller since the last read."""
    if auth is None:
        return []
    return inbox.drain(auth.user_id)
