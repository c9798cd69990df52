from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from ..data import CalendarNotFoundError, CalendarRepository
from ..domain import Schedule, ScheduleRow, check_range

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AddOutcome:
    added: bool
    schedule: Optional[Schedule] = None
    conflict: Optional[Schedule] = None
    created_calendar: bool = False


@dataclass(slots=True)
class CalendarService:
    """Runs one load, mutate and save cycle per command against the repository."""

    repository: CalendarRepository

    def list_schedules(self) -> List[ScheduleRow]:
        return self.repository.load().rows()

    def add_schedule(self, subject: str, start: datetime, end: datetime) -> AddOutcome:
        check_range(start, end)
        created = False
        try:
            calendar = self.repository.load()
        except CalendarNotFoundError:
            calendar = self.repository.create_empty()
            created = True

        conflict = calendar.place(subject, start, end)
        if conflict is not None:
            logger.info("Rejected %r: overlaps schedule %s", subject, conflict.id)
            return AddOutcome(added=False, conflict=conflict, created_calendar=created)

        self.repository.save(calendar)
        return AddOutcome(added=True, schedule=calendar.schedules[-1], created_calendar=created)

    def delete_schedule(self, schedule_id: int) -> bool:
        calendar = self.repository.load()
        if not calendar.delete(schedule_id):
            return False
        self.repository.save(calendar)
        return True


__all__ = ["AddOutcome", "CalendarService"]
