from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..domain import Calendar, Schedule


class SchedulePayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int = Field(ge=0)
    subject: str
    start: datetime
    end: datetime

    @field_validator("start", "end")
    @classmethod
    def _require_naive(cls, value: datetime) -> datetime:
        if value.tzinfo is not None:
            raise ValueError("timestamps must be naive local times")
        return value

    @classmethod
    def from_domain(cls, schedule: Schedule) -> "SchedulePayload":
        return cls(id=schedule.id, subject=schedule.subject, start=schedule.start, end=schedule.end)

    def to_domain(self) -> Schedule:
        return Schedule(id=self.id, subject=self.subject, start=self.start, end=self.end)


class CalendarPayload(BaseModel):
    """On-disk shape of a calendar file."""

    model_config = ConfigDict(extra="ignore")

    schedules: List[SchedulePayload]
    next_id: Optional[int] = Field(default=None, ge=0)

    @classmethod
    def from_domain(cls, calendar: Calendar) -> "CalendarPayload":
        return cls(
            schedules=[SchedulePayload.from_domain(item) for item in calendar.schedules],
            next_id=calendar.next_id,
        )

    def to_domain(self) -> Calendar:
        schedules = [item.to_domain() for item in self.schedules]
        # Older files carry no counter; never hand out an id that is already taken.
        floor = max((item.id for item in schedules), default=-1) + 1
        return Calendar(schedules=schedules, next_id=max(self.next_id or 0, floor))
