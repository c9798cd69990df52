"""Data access layer."""

from __future__ import annotations

from .payloads import CalendarPayload, SchedulePayload
from .store import (
    CalendarFormatError,
    CalendarIOError,
    CalendarNotFoundError,
    CalendarRepository,
    CalendarStoreError,
)

__all__ = [
    "CalendarFormatError",
    "CalendarIOError",
    "CalendarNotFoundError",
    "CalendarPayload",
    "CalendarRepository",
    "CalendarStoreError",
    "SchedulePayload",
]
