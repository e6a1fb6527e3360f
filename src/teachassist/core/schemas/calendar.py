"""
Calendar Event Schemas

Pydantic models for event requests and responses.
"""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

from teachassist.calendar.rules import is_overdue
from teachassist.core.timeutils import as_utc, format_display_time, from_form_input, utcnow

EventType = Literal["class", "lab", "meeting"]


class EventBase(BaseModel):
    """Fields shared by create and response schemas."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    start_time: datetime
    end_time: datetime | None = None
    type: EventType = "class"


class EventCreate(EventBase):
    """Calendar form submission.

    Naive datetimes are wall-clock times in the display timezone.
    """

    @model_validator(mode="after")
    def check_window(self) -> "EventCreate":
        if self.end_time is not None and _before(self.end_time, self.start_time):
            raise ValueError("End time cannot be before start time")
        return self


class EventUpdate(BaseModel):
    """Edit dialog. Only fields explicitly provided are updated."""

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    type: EventType | None = None

    @model_validator(mode="after")
    def check_window(self) -> "EventUpdate":
        if self.start_time and self.end_time and _before(self.end_time, self.start_time):
            raise ValueError("End time cannot be before start time")
        return self


class EventSchema(EventBase):
    """Full event for responses. Times are returned in UTC."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    completed: bool
    created_at: datetime

    @field_validator("start_time", "end_time", "created_at")
    @classmethod
    def normalize_utc(cls, v: datetime | None) -> datetime | None:
        return as_utc(v) if v is not None else None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def overdue(self) -> bool:
        """Past its end (or start) time and not completed."""
        return is_overdue(self, utcnow())

    @computed_field  # type: ignore[prop-decorator]
    @property
    def display_time(self) -> str:
        """Start (and end) in the display timezone."""
        text = format_display_time(self.start_time)
        if self.end_time:
            text += f" - {format_display_time(self.end_time)}"
        return text


def _before(a: datetime, b: datetime) -> bool:
    return from_form_input(a) < from_form_input(b)
