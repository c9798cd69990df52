from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from enum import IntEnum
from typing import Callable, Dict, Optional, Sequence

from .bootstrap import configure_logging
from .config import AppSettings, get_settings
from .data import CalendarFormatError, CalendarIOError, CalendarNotFoundError, CalendarRepository
from .domain import Schedule
from .domain.models import DISPLAY_FORMAT
from .services import CalendarService

logger = logging.getLogger(__name__)

TABLE_HEADER = "ID\tSTART\tEND\tSUBJECT"


class ExitCode(IntEnum):
    OK = 0
    CONFLICT = 1
    USAGE = 2
    NOT_FOUND = 3
    INVALID_RANGE = 4
    STORAGE_ERROR = 5
    MALFORMED_CALENDAR = 6


def _parse_timestamp(value: str) -> datetime:
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid date-time {value!r}; expected YYYY-MM-DDTHH:MM") from exc
    if parsed.tzinfo is not None:
        raise argparse.ArgumentTypeError(f"{value!r} carries a UTC offset; use a local date-time")
    return parsed


def _parse_schedule_id(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid id {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("id must not be negative")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="calblock", description="Manage time-blocked schedules in a local calendar file.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="Show every schedule in stored order.")

    add_parser = subparsers.add_parser("add", help="Add a schedule unless it overlaps an existing one.")
    add_parser.add_argument("subject")
    add_parser.add_argument("start", type=_parse_timestamp, help="Local date-time, e.g. 2024-01-01T18:00")
    add_parser.add_argument("end", type=_parse_timestamp, help="Local date-time, e.g. 2024-01-01T19:00")

    delete_parser = subparsers.add_parser("delete", help="Delete the schedule with the given id.")
    delete_parser.add_argument("id", type=_parse_schedule_id)

    return parser


def _describe(schedule: Schedule) -> str:
    return (
        f"{schedule.id} {schedule.subject!r} "
        f"({schedule.start.strftime(DISPLAY_FORMAT)} - {schedule.end.strftime(DISPLAY_FORMAT)})"
    )


def _error(message: str) -> None:
    print(message, file=sys.stderr)


def _handle_list(service: CalendarService, args: argparse.Namespace) -> ExitCode:
    rows = service.list_schedules()
    print(TABLE_HEADER)
    for row in rows:
        print(f"{row.id}\t{row.start}\t{row.end}\t{row.subject}")
    return ExitCode.OK


def _handle_add(service: CalendarService, args: argparse.Namespace) -> ExitCode:
    try:
        outcome = service.add_schedule(args.subject, args.start, args.end)
    except ValueError as exc:
        _error(f"Could not add {args.subject!r}: {exc}.")
        return ExitCode.INVALID_RANGE

    if outcome.created_calendar:
        print(f"No calendar existed, created a new one at {service.repository.path}.")
    if not outcome.added:
        detail = f" It overlaps schedule {_describe(outcome.conflict)}." if outcome.conflict else ""
        _error(f"Could not add {args.subject!r}.{detail}")
        return ExitCode.CONFLICT

    assert outcome.schedule is not None
    print(f"Saved schedule {_describe(outcome.schedule)}.")
    return ExitCode.OK


def _handle_delete(service: CalendarService, args: argparse.Namespace) -> ExitCode:
    if not service.delete_schedule(args.id):
        _error(f"No schedule with id {args.id}.")
        return ExitCode.NOT_FOUND
    print(f"Deleted schedule {args.id}.")
    return ExitCode.OK


HANDLERS: Dict[str, Callable[[CalendarService, argparse.Namespace], ExitCode]] = {
    "list": _handle_list,
    "add": _handle_add,
    "delete": _handle_delete,
}


def main(argv: Optional[Sequence[str]] = None, *, settings: Optional[AppSettings] = None) -> int:
    settings = settings or get_settings()
    configure_logging(settings.logging.level, log_path=settings.logging.log_file)
    parser = build_parser()
    args = parser.parse_args(argv)
    logger.debug("Running %s against %s", args.command, settings.storage.schedule_file)

    service = CalendarService(CalendarRepository(settings.storage.schedule_file))
    try:
        return int(HANDLERS[args.command](service, args))
    except CalendarNotFoundError as exc:
        logger.debug("Calendar missing", exc_info=True)
        _error(f"No calendar file at {exc.path}. Add a schedule first to create it.")
        return int(ExitCode.STORAGE_ERROR)
    except CalendarIOError as exc:
        logger.debug("Calendar IO failure", exc_info=True)
        _error(f"Could not access calendar file {exc.path}. Check that it exists and is writable. ({exc})")
        return int(ExitCode.STORAGE_ERROR)
    except CalendarFormatError as exc:
        logger.debug("Calendar parse failure", exc_info=True)
        _error(f"Calendar file {exc.path} is corrupted and was left untouched. ({exc})")
        return int(ExitCode.MALFORMED_CALENDAR)


if __name__ == "__main__":
    raise SystemExit(main())
