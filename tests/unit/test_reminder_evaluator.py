"""
Unit Tests for Reminder Evaluation

Which events notify, with what text and style.
"""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from teachassist.core.schemas import EventSchema, NotificationPreferences
from teachassist.reminders.evaluator import (
    evaluate_reminders,
    minutes_until,
    reminder_window,
)

NOW = datetime(2026, 3, 2, 9, 0, tzinfo=UTC)


def _event(start_in: timedelta, *, title: str = "Staff meeting", completed: bool = False) -> EventSchema:
    start = NOW + start_in
    return EventSchema(
        id=uuid4(),
        user_id=uuid4(),
        title=title,
        description=None,
        start_time=start,
        end_time=start + timedelta(hours=1),
        type="meeting",
        completed=completed,
        created_at=NOW - timedelta(days=1),
    )


def _prefs(lead: int = 30, style: str = "popup") -> NotificationPreferences:
    return NotificationPreferences(event_reminder=lead, notification_style=style)


class TestMinutesUntil:
    """Test whole-minute rounding."""

    def test_rounds_down(self):
        assert minutes_until(NOW + timedelta(minutes=29, seconds=59), NOW) == 29

    def test_exact(self):
        assert minutes_until(NOW + timedelta(minutes=30), NOW) == 30

    def test_naive_treated_as_utc(self):
        assert minutes_until((NOW + timedelta(minutes=5)).replace(tzinfo=None), NOW) == 5


class TestEvaluateReminders:
    """Test reminder selection."""

    def test_event_inside_window_notifies_once(self):
        event = _event(timedelta(minutes=20), title="Biology lab")

        notifications = evaluate_reminders([event], _prefs(), NOW)

        assert len(notifications) == 1
        notification = notifications[0]
        assert notification.event_id == event.id
        assert notification.title == "Event Reminder"
        assert notification.message == "Upcoming event: Biology lab in 20 minutes"
        assert notification.minutes_until == 20

    def test_lead_boundary_is_inclusive(self):
        assert len(evaluate_reminders([_event(timedelta(minutes=30))], _prefs(30), NOW)) == 1

    def test_outside_window_is_silent(self):
        assert evaluate_reminders([_event(timedelta(minutes=31))], _prefs(30), NOW) == []

    def test_partial_minute_past_lead_is_silent(self):
        """Whole-minute rounding must not pull a later event into the window."""
        event = _event(timedelta(minutes=30, seconds=40))

        assert evaluate_reminders([event], _prefs(30), NOW) == []

    def test_started_event_is_silent(self):
        assert evaluate_reminders([_event(timedelta(minutes=-1))], _prefs(), NOW) == []
        assert evaluate_reminders([_event(timedelta(0))], _prefs(), NOW) == []

    def test_completed_event_is_silent(self):
        event = _event(timedelta(minutes=10), completed=True)
        assert evaluate_reminders([event], _prefs(), NOW) == []

    def test_repeated_passes_notify_again(self):
        event = _event(timedelta(minutes=10))

        first = evaluate_reminders([event], _prefs(), NOW)
        second = evaluate_reminders([event], _prefs(), NOW + timedelta(minutes=1))

        assert len(first) == 1
        assert len(second) == 1
        assert second[0].minutes_until == 9

    def test_custom_lead_time(self):
        events = [_event(timedelta(minutes=50)), _event(timedelta(minutes=70))]

        assert len(evaluate_reminders(events, _prefs(60), NOW)) == 1


class TestNotificationStyles:
    """Test popup / glow / standard presentation."""

    def test_popup(self):
        notification = evaluate_reminders([_event(timedelta(minutes=5))], _prefs(style="popup"), NOW)[0]

        assert notification.style == "popup"
        assert notification.dismissible is True
        assert notification.duration_ms == 5000
        assert notification.glow_duration_ms is None

    def test_glow(self):
        notification = evaluate_reminders([_event(timedelta(minutes=5))], _prefs(style="glow"), NOW)[0]

        assert notification.style == "glow"
        assert notification.dismissible is False
        assert notification.glow_duration_ms == 2000

    def test_standard(self):
        notification = evaluate_reminders(
            [_event(timedelta(minutes=5))], _prefs(style="standard"), NOW
        )[0]

        assert notification.style == "standard"
        assert notification.duration_ms is None
        assert notification.glow_duration_ms is None


@pytest.mark.parametrize("lead", [1, 30, 120])
def test_reminder_window_matches_lead(lead):
    """Test the re-query window ends exactly at the lead time."""
    start, end = reminder_window(NOW, _prefs(lead))

    assert start == NOW
    assert end - start == timedelta(minutes=lead)
