"""
Reminder Inbox

Per-user, bounded, in-process queue of reminders produced by the background
poller. Reading the inbox drains it.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from uuid import UUID

from teachassist.config import settings
from teachassist.core.schemas import ReminderNotification


class ReminderInbox:
    """Bounded per-user reminder queues (oldest entries drop first)."""

    def __init__(self, max_size: int | None = None):
        self.max_size = max_size or settings.REMINDER_INBOX_SIZE
        self._queues: dict[UUID, deque[ReminderNotification]] = {}

    def push(self, user_id: UUID, notifications: Iterable[ReminderNotification]) -> int:
        """Queue notifications for ``user_id``. Returns how many were added."""
        queue = self._queues.setdefault(user_id, deque(maxlen=self.max_size))
        added = 0
        for notification in notifications:
            queue.append(notification)
            added += 1
        return added

    def drain(self, user_id: UUID) -> list[ReminderNotification]:
        """Remove and return everything queued for ``user_id``."""
        queue = self._queues.pop(user_id, None)
        return list(queue) if queue else []

    def pending(self, user_id: UUID) -> int:
        return len(self._queues.get(user_id, ()))

    def clear(self) -> None:
        self._queues.clear()


reminder_inbox = ReminderInbox()


def get_reminder_inbox() -> ReminderInbox:
    """Dependency: the process-wide reminder inbox."""
    return reminder_inbox
