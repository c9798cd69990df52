from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import orjson
from pydantic import ValidationError

from ..domain import Calendar
from .payloads import CalendarPayload

logger = logging.getLogger(__name__)


class CalendarStoreError(RuntimeError):
    """Base class for failures reading or writing the calendar file."""

    def __init__(self, message: str, *, path: Path) -> None:
        super().__init__(message)
        self.path = path


class CalendarIOError(CalendarStoreError):
    """Raised when the calendar file cannot be opened, created or written."""


class CalendarNotFoundError(CalendarIOError):
    """Raised when loading a calendar file that does not exist."""


class CalendarFormatError(CalendarStoreError):
    """Raised when the calendar file does not hold a valid calendar document."""


@dataclass(slots=True)
class CalendarRepository:
    """Whole-file persistence for a single calendar.

    Every ``save`` rewrites the entire document. There is no locking, so two
    processes writing the same file race and the last writer wins.
    """

    path: Path

    def exists(self) -> bool:
        return self.path.exists()

    def create_empty(self) -> Calendar:
        calendar = Calendar()
        self.save(calendar)
        logger.info("Created empty calendar at %s", self.path)
        return calendar

    def load(self) -> Calendar:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError as exc:
            raise CalendarNotFoundError(f"Calendar file {self.path} does not exist", path=self.path) from exc
        except OSError as exc:
            raise CalendarIOError(f"Could not read calendar file {self.path}: {exc}", path=self.path) from exc

        try:
            payload = CalendarPayload.model_validate(orjson.loads(raw))
        except orjson.JSONDecodeError as exc:
            raise CalendarFormatError(f"Calendar file {self.path} is not valid JSON: {exc}", path=self.path) from exc
        except ValidationError as exc:
            raise CalendarFormatError(
                f"Calendar file {self.path} has an unexpected shape: {exc.error_count()} error(s)",
                path=self.path,
            ) from exc

        calendar = payload.to_domain()
        logger.debug("Loaded %d schedule(s) from %s", len(calendar.schedules), self.path)
        return calendar

    def save(self, calendar: Calendar) -> None:
        document = CalendarPayload.from_domain(calendar).model_dump(mode="json")
        data = orjson.dumps(document, option=orjson.OPT_INDENT_2) + b"\n"
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_bytes(data)
            os.replace(tmp, self.path)
        except OSError as exc:
            if tmp.exists():
                tmp.unlink()
            raise CalendarIOError(f"Could not write calendar file {self.path}: {exc}", path=self.path) from exc
        logger.debug("Saved %d schedule(s) to %s", len(calendar.schedules), self.path)


__all__ = [
    "CalendarFormatError",
    "CalendarIOError",
    "CalendarNotFoundError",
    "CalendarRepository",
    "CalendarStoreError",
]
