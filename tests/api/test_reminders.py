"""
Tests for Reminder API Endpoints
"""

from datetime import timedelta

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from teachassist.core.models import UserProfile
from teachassist.core.schemas import ReminderNotification
from teachassist.reminders.inbox import reminder_inbox

# Margin keeps the whole-minute count stable while the request runs
MARGIN = timedelta(seconds=30)


class TestDueReminders:
    """Test GET /api/v1/reminders/due."""

    async def test_event_inside_default_window(
        self, client: AsyncClient, teacher: UserProfile, make_event, auth_headers
    ) -> None:
        event = await make_event(teacher, title="Staff meeting", start_in=timedelta(minutes=20) + MARGIN)

        response = await client.get("/api/v1/reminders/due", headers=auth_headers)

        assert response.status_code == 200
        reminders = response.json()
        assert len(reminders) == 1
        assert reminders[0]["event_id"] == str(event.id)
        assert reminders[0]["message"] == "Upcoming event: Staff meeting in 20 minutes"
        assert reminders[0]["style"] == "popup"
        assert reminders[0]["dismissible"] is True
        assert reminders[0]["duration_ms"] == 5000

    async def test_events_outside_window_or_completed(
        self, client: AsyncClient, teacher: UserProfile, make_event, auth_headers
    ) -> None:
        await make_event(teacher, title="Later", start_in=timedelta(minutes=45))
        await make_event(teacher, title="Done", start_in=timedelta(minutes=10), completed=True)
        await make_event(teacher, title="Started", start_in=timedelta(minutes=-5))

        response = await client.get("/api/v1/reminders/due", headers=auth_headers)

        assert response.json() == []

    async def test_glow_preference(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        teacher: UserProfile,
        make_event,
        auth_headers,
    ) -> None:
        teacher.notification_preferences = {"event_reminder": 60, "notification_style": "glow"}
        await db_session.commit()
        await make_event(teacher, title="Parent call", start_in=timedelta(minutes=50) + MARGIN)

        response = await client.get("/api/v1/reminders/due", headers=auth_headers)

        reminders = response.json()
        assert len(reminders) == 1
        assert reminders[0]["style"] == "glow"
        assert reminders[0]["dismissible"] is False
        assert reminders[0]["glow_duration_ms"] == 2000
        assert reminders[0]["duration_ms"] is None

    async def test_past_lead_by_part_of_a_minute(
        self, client: AsyncClient, teacher: UserProfile, make_event, auth_headers
    ) -> None:
        await make_event(teacher, start_in=timedelta(minutes=30, seconds=40))

        response = await client.get("/api/v1/reminders/due", headers=auth_headers)

        assert response.json() == []

    async def test_malformed_preferences_fall_back_to_defaults(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        teacher: UserProfile,
        make_event,
        auth_headers,
    ) -> None:
        teacher.notification_preferences = {"event_reminder": 0, "notification_style": "banner"}
        await db_session.commit()
        await make_event(teacher, title="Staff meeting", start_in=timedelta(minutes=20) + MARGIN)

        response = await client.get("/api/v1/reminders/due", headers=auth_headers)

        assert response.status_code == 200
        [reminder] = response.json()
        assert reminder["style"] == "popup"
        assert reminder["minutes_until"] == 20

    async def test_only_own_events(
        self,
        client: AsyncClient,
        teacher: UserProfile,
        other_teacher: UserProfile,
        make_event,
        other_auth_headers,
    ) -> None:
        await make_event(teacher, start_in=timedelta(minutes=10))

        response = await client.get("/api/v1/reminders/due", headers=other_auth_headers)

        assert response.json() == []

    async def test_anonymous(self, client: AsyncClient, teacher: UserProfile, make_event) -> None:
        await make_event(teacher, start_in=timedelta(minutes=10))

        response = await client.get("/api/v1/reminders/due")

        assert response.status_code == 200
        assert response.json() == []


class TestInbox:
    """Test GET /api/v1/reminders/inbox."""

    async def test_drains_queued_reminders(
        self, client: AsyncClient, teacher: UserProfile, make_event, auth_headers
    ) -> None:
        event = await make_event(teacher, start_in=timedelta(minutes=15))
        reminder_inbox.push(
            teacher.id,
            [
                ReminderNotification(
                    event_id=event.id,
                    message="Upcoming event: Algebra class in 15 minutes",
                    minutes_until=15,
                    style="popup",
                )
            ],
        )

        first = await client.get("/api/v1/reminders/inbox", headers=auth_headers)
        second = await client.get("/api/v1/reminders/inbox", headers=auth_headers)

        assert [r["minutes_until"] for r in first.json()] == [15]
        assert second.json() == []

    async def test_anonymous(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/reminders/inbox")

        assert response.json() == []
