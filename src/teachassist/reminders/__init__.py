"""
Reminders

Event reminder evaluation, the background poller and the per-user inbox.
"""

from .evaluator import evaluate_reminders
from .inbox import ReminderInbox, get_reminder_inbox, reminder_inbox
from .poller import ReminderPoller
from .service import check_due_reminders

__all__ = [
    "ReminderInbox",
    "ReminderPoller",
    "check_due_reminders",
    "evaluate_reminders",
    "get_reminder_inbox",
    "reminder_inbox",
]
