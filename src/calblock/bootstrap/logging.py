from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

_INITIALIZED = False


def configure_logging(level: str = "WARNING", *, log_path: Optional[Path] = None) -> None:
    """Configure application-wide logging with a console handler and an optional rotating file."""

    global _INITIALIZED
    if _INITIALIZED:
        return

    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    logger = logging.getLogger(__name__)
    if log_path is not None:
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(str(log_path), maxBytes=1_000_000, backupCount=5, encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not open log file %s, logging to console only: %s", log_path, exc)
            log_path = None
        else:
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)

    _INITIALIZED = True
    logger.debug("Logging configured. Output file: %s", log_path)


__all__ = ["configure_logging"]
