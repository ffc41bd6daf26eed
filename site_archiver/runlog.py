"""Plain-text run log written next to the archive."""

from __future__ import annotations

import datetime as dt
import logging
from pathlib import Path
from zoneinfo import ZoneInfo

from .errors import DirectoryCreationError

RUN_LOGGER_NAME = "site_archiver.run"
TIMESTAMP_FORMAT = "%Y/%m/%d %H:%M:%S"


def local_timestamp(timezone: str, when: dt.datetime | None = None) -> str:
    """Format ``when`` (default: now) in the configured site timezone."""
    zone = ZoneInfo(timezone)
    moment = when.astimezone(zone) if when else dt.datetime.now(zone)
    return moment.strftime(TIMESTAMP_FORMAT)


class LocalizedFormatter(logging.Formatter):
    """Render records as ``[<timestamp>] <message>`` in a fixed timezone."""

    def __init__(self, timezone: str) -> None:
        super().__init__("[%(asctime)s] %(message)s")
        self._zone = ZoneInfo(timezone)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        moment = dt.datetime.fromtimestamp(record.created, self._zone)
        return moment.strftime(datefmt or TIMESTAMP_FORMAT)


def open_run_log(path: Path, timezone: str) -> logging.Logger:
    """Create the archive root, truncate the log file and return its logger.

    Records sent to the returned logger also propagate to the root logger,
    so they reach the console configured by the CLI.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            f"Crawler started at {local_timestamp(timezone)}\n", encoding="utf-8"
        )
        handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    except OSError as exc:
        raise DirectoryCreationError(f"Cannot initialise run log {path}: {exc}") from exc

    handler.setFormatter(LocalizedFormatter(timezone))
    logger = logging.getLogger(RUN_LOGGER_NAME)
    logger.setLevel(logging.INFO)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()
    logger.addHandler(handler)
    return logger


def close_run_log(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
