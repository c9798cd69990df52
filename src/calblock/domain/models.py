from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

DISPLAY_FORMAT = "%Y-%m-%d %H:%M"


def intersects(a: "Schedule", b: "Schedule") -> bool:
    """Return True when the half-open ranges ``[start, end)`` of both schedules overlap.

    Ranges that only touch (one ends exactly when the other starts) do not overlap.
    """
    return a.start < b.end and b.start < a.end


@dataclass(slots=True)
class Schedule:
    id: int
    subject: str
    start: datetime
    end: datetime

    def intersects(self, other: "Schedule") -> bool:
        return intersects(self, other)


@dataclass(frozen=True, slots=True)
class ScheduleRow:
    id: int
    start: str
    end: str
    subject: str

    @classmethod
    def from_schedule(cls, schedule: Schedule) -> "ScheduleRow":
        return cls(
            id=schedule.id,
            start=schedule.start.strftime(DISPLAY_FORMAT),
            end=schedule.end.strftime(DISPLAY_FORMAT),
            subject=schedule.subject,
        )


def check_range(start: datetime, end: datetime) -> None:
    if end <= start:
        raise ValueError("End time must be after start time")


@dataclass(slots=True)
class Calendar:
    """Ordered collection of schedules; the unit that gets persisted."""

    schedules: List[Schedule] = field(default_factory=list)
    next_id: int = 0

    def find_conflict(self, start: datetime, end: datetime) -> Optional[Schedule]:
        window = Schedule(id=-1, subject="", start=start, end=end)
        for schedule in self.schedules:
            if schedule.intersects(window):
                return schedule
        return None

    def place(self, subject: str, start: datetime, end: datetime) -> Optional[Schedule]:
        """Append a new schedule unless it overlaps one already stored.

        Returns the first overlapping schedule, or ``None`` once the new one is appended.
        """
        check_range(start, end)
        conflict = self.find_conflict(start, end)
        if conflict is not None:
            return conflict
        self.schedules.append(Schedule(id=self.next_id, subject=subject, start=start, end=end))
        self.next_id += 1
        return None

    def add(self, subject: str, start: datetime, end: datetime) -> bool:
        return self.place(subject, start, end) is None

    def delete(self, schedule_id: int) -> bool:
        for idx, schedule in enumerate(self.schedules):
            if schedule.id == schedule_id:
                del self.schedules[idx]
                return True
        return False

    def rows(self) -> List[ScheduleRow]:
        return [ScheduleRow.from_schedule(schedule) for schedule in self.schedules]
