"""Application services orchestrating persistence and domain logic."""

from __future__ import annotations

from .calendar import AddOutcome, CalendarService

__all__ = ["AddOutcome", "CalendarService"]
