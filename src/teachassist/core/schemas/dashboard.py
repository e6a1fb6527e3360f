"""Dashboard schemas."""

from pydantic import BaseModel

from teachassist.core.schemas.calendar import EventSchema


class QuickStats(BaseModel):
    """Counters shown on the dashboard cards."""

    upcoming_events: int
    subjects: int
    grade_levels: int
    years_experience: int


class DashboardSchema(BaseModel):
    """Greeting, quick stats and the next few events."""

    greeting: str
    school_name: str | None
    subjects_taught: list[str]
    stats: QuickStats
    upcoming_events: list[EventSchema]
