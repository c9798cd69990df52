from pathlib import Path

import pytest

from calblock.config import AppSettings, LoggingSettings, StorageSettings
from calblock.data import CalendarRepository


@pytest.fixture
def schedule_file(tmp_path: Path) -> Path:
    return tmp_path / "schedules.json"


@pytest.fixture
def repository(schedule_file: Path) -> CalendarRepository:
    return CalendarRepository(schedule_file)


@pytest.fixture
def settings(schedule_file: Path) -> AppSettings:
    return AppSettings(
        storage=StorageSettings(schedule_file=schedule_file),
        logging=LoggingSettings(level="WARNING", log_file=None),
    )
