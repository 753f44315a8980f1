"""Pydantic schemas for Calendar API."""

import datetime as dt
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

EventType = Literal["Birthday", "Event", "Task", "Work", "Other"]


class CalendarEventBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    date: dt.date
    start_time: dt.time | None = None
    end_time: dt.time | None = None
    location: str | None = Field(None, max_length=500)
    type: EventType

    @model_validator(mode="after")
    def _end_after_start(self):
        if self.start_time and self.end_time and self.end_time < self.start_time:
            raise ValueError("end_time must not be before start_time")
        return self


class CalendarEventCreate(CalendarEventBase):
    """Schema for creating a calendar event."""


class CalendarEventUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    date: dt.date | None = None
    start_time: dt.time | None = None
    end_time: dt.time | None = None
    location: str | None = Field(None, max_length=500)
    type: EventType | None = None


class CalendarEventResponse(CalendarEventBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    owner_id: UUID
    created_at: dt.datetime
    updated_at: dt.datetime
