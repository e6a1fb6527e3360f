"""
Reminder Poller

Background task that runs one reminder evaluation pass for every onboarded
profile at a fixed interval and delivers the results to the reminder inbox.
A failing pass is logged and the loop keeps running.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from teachassist.config import settings
from teachassist.core.errors import TeachAssistError
from teachassist.core.models import UserProfile
from teachassist.core.timeutils import utcnow
from teachassist.profiles.service import preferences_from_stored
from teachassist.reminders.inbox import ReminderInbox
from teachassist.reminders.service import check_due_reminders

logger = logging.getLogger(__name__)


class ReminderPoller:
    """Periodic reminder evaluation across all onboarded users."""

    def __init__(
        self,
        session_factory: Callable[[], AsyncSession],
        inbox: ReminderInbox,
        *,
        interval_seconds: float | None = None,
    ):
        """Initialize poller.

        Args:
            session_factory: Creates a fresh AsyncSession per pass
            inbox: Destination for produced reminders
            interval_seconds: Pause between passes (default from settings)
        """
        self.session_factory = session_factory
        self.inbox = inbox
        self.interval_seconds = interval_seconds or settings.REMINDER_POLL_INTERVAL_SECONDS
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def poll_once(self, now: datetime | None = None) -> int:
        """Run one pass. Returns the number of reminders delivered."""
        now = now or utcnow()
        delivered = 0

        async with self.session_factory() as db:
            result = await db.execute(
                select(UserProfile.id, UserProfile.notification_preferences).where(
                    UserProfile.onboarding_completed.is_(True)
                )
            )
            for user_id, raw_preferences in result.all():
                try:
                    notifications = await check_due_reminders(
                        db,
                        user_id,
                        now=now,
                        preferences=preferences_from_stored(raw_preferences),
                    )
                except TeachAssistError as e:
                    logger.warning(f"Reminder check failed for user {user_id}: {e.message}")
                    continue
                delivered += self.inbox.push(user_id, notifications)

        if delivered:
            logger.info(f"Delivered {delivered} reminders")
        return delivered

    async def run(self) -> None:
        """Poll until cancelled."""
        logger.info(f"Reminder poller running every {self.interval_seconds}s")
        while True:
            try:
                await self.poll_once()
            except Exception:
                logger.exception("Reminder pass failed")
            await asyncio.sleep(self.interval_seconds)

    def start(self) -> None:
        """Schedule the loop on the running event loop."""
        if self.running:
            return
        self._task = asyncio.create_task(self.run(), name="reminder-poller")

    async def stop(self) -> None:
        """Cancel the loop and wait for it to finish."""
        if self._task is None:
            return
        task, self._task = self._task, None
        if task.done():
            if not task.cancelled() and task.exception() is not None:
                logger.error(f"Reminder poller had stopped: {task.exception()!r}")
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("Reminder poller stopped")
