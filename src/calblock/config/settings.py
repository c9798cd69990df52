from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from platformdirs import user_log_dir

load_dotenv()

APP_NAME = "calblock"
DEFAULT_SCHEDULE_FILE = "schedules.json"


@dataclass(frozen=True)
class StorageSettings:
    schedule_file: Path


@dataclass(frozen=True)
class LoggingSettings:
    level: str
    log_file: Optional[Path]


@dataclass(frozen=True)
class AppSettings:
    storage: StorageSettings
    logging: LoggingSettings


def _log_file_from_env() -> Optional[Path]:
    raw = os.getenv("CALBLOCK_LOG_FILE")
    if raw is None:
        return Path(user_log_dir(APP_NAME, appauthor=False)) / f"{APP_NAME}.log"
    if not raw.strip():
        return None
    return Path(raw).expanduser()


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    storage = StorageSettings(
        schedule_file=Path(os.getenv("CALBLOCK_SCHEDULE_FILE", DEFAULT_SCHEDULE_FILE)).expanduser(),
    )
    logging_settings = LoggingSettings(
        level=os.getenv("CALBLOCK_LOG_LEVEL", "WARNING").upper(),
        log_file=_log_file_from_env(),
    )
    return AppSettings(storage=storage, logging=logging_settings)
