from datetime import datetime

import orjson
import pytest

from calblock.data import (
    CalendarFormatError,
    CalendarIOError,
    CalendarNotFoundError,
    CalendarRepository,
)
from calblock.data import store
from calblock.domain import Calendar, Schedule


def sample_calendar():
    return Calendar(
        schedules=[
            Schedule(id=0, subject="Meeting", start=datetime(2024, 1, 1, 18, 0), end=datetime(2024, 1, 1, 19, 0)),
            Schedule(id=3, subject="Gym", start=datetime(2024, 1, 2, 7, 30), end=datetime(2024, 1, 2, 8, 15)),
        ],
        next_id=4,
    )


def test_save_then_load_round_trips(repository):
    calendar = sample_calendar()
    repository.save(calendar)
    assert repository.load() == calendar


def test_save_writes_documented_layout(repository, schedule_file):
    repository.save(sample_calendar())
    raw = schedule_file.read_bytes()
    assert raw.endswith(b"\n")
    document = orjson.loads(raw)
    assert document["next_id"] == 4
    assert document["schedules"][0] == {
        "id": 0,
        "subject": "Meeting",
        "start": "2024-01-01T18:00:00",
        "end": "2024-01-01T19:00:00",
    }
    assert not schedule_file.with_suffix(".json.tmp").exists()


def test_create_empty_writes_empty_calendar(repository, schedule_file):
    calendar = repository.create_empty()
    assert calendar == Calendar()
    assert orjson.loads(schedule_file.read_bytes()) == {"schedules": [], "next_id": 0}


def test_create_empty_makes_parent_directories(tmp_path):
    repository = CalendarRepository(tmp_path / "nested" / "dir" / "schedules.json")
    repository.create_empty()
    assert repository.exists()


def test_load_missing_file_raises_not_found(repository):
    assert not repository.exists()
    with pytest.raises(CalendarNotFoundError) as info:
        repository.load()
    assert isinstance(info.value, CalendarIOError)
    assert info.value.path == repository.path


def test_load_directory_raises_io_error(tmp_path):
    with pytest.raises(CalendarIOError):
        CalendarRepository(tmp_path).load()


@pytest.mark.parametrize(
    "content",
    [
        b"",
        b"{not json",
        b"[]",
        b'{"calendar": []}',
        b'{"schedules": [{"id": 0, "subject": "x", "start": "yesterday", "end": "2024-01-01T19:00:00"}]}',
        b'{"schedules": [{"id": -1, "subject": "x", "start": "2024-01-01T18:00:00", "end": "2024-01-01T19:00:00"}]}',
        b'{"schedules": [{"id": 0, "subject": "x", "start": "2024-01-01T18:00:00+09:00", "end": "2024-01-01T19:00:00+09:00"}]}',
    ],
)
def test_load_malformed_content_raises_format_error(repository, schedule_file, content):
    schedule_file.write_bytes(content)
    with pytest.raises(CalendarFormatError):
        repository.load()


def test_load_file_without_counter_backfills_next_id(repository, schedule_file):
    schedule_file.write_text(
        '{"schedules": ['
        '{"id": 0, "subject": "a", "start": "2024-01-01T09:00:00", "end": "2024-01-01T10:00:00"},'
        '{"id": 2, "subject": "b", "start": "2024-01-01T11:00:00", "end": "2024-01-01T12:00:00"}'
        "]}",
        encoding="utf-8",
    )
    calendar = repository.load()
    assert calendar.next_id == 3
    assert [s.subject for s in calendar.schedules] == ["a", "b"]


def test_load_accepts_minute_precision_timestamps(repository, schedule_file):
    schedule_file.write_text(
        '{"schedules": [{"id": 0, "subject": "a", "start": "2024-01-01T09:00", "end": "2024-01-01T10:00"}], "next_id": 1}',
        encoding="utf-8",
    )
    assert repository.load().schedules[0].start == datetime(2024, 1, 1, 9, 0)


def test_save_overwrites_previous_content(repository):
    repository.save(sample_calendar())
    repository.save(Calendar(next_id=4))
    assert repository.load() == Calendar(next_id=4)


def test_failed_replace_removes_temporary_file(repository, schedule_file, monkeypatch):
    def refuse(src, dst):
        raise PermissionError("read-only target")

    monkeypatch.setattr(store.os, "replace", refuse)
    with pytest.raises(CalendarIOError):
        repository.save(sample_calendar())
    assert not schedule_file.with_suffix(".json.tmp").exists()
    assert not schedule_file.exists()
