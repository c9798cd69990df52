"""Domain models for time-blocked calendars."""

from __future__ import annotations

from .models import Calendar, Schedule, ScheduleRow, check_range, intersects

__all__ = ["Calendar", "Schedule", "ScheduleRow", "check_range", "intersects"]
