"""Logging configuration for the interactive CLI."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from todokeeper.config.constants import LOG_FILE_NAME, LOGS_DIR


class _ConsoleNoiseFilter(logging.Filter):
    """Keep the interactive console readable.

    todokeeper records pass through; third-party records (APScheduler logs
    every job run) only show up at ERROR and above.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "todokeeper" or record.name.startswith("todokeeper."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = LOGS_DIR,
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Path:
    """Configure the root logger with a filtered console handler and a log file.

    Call this once, before the first log record is emitted. Returns the path
    of the log file.
    """
    log_dir = Path(log_dir).expanduser()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(min(console_level, file_level))

    # Remove any pre-existing handlers to avoid duplicates.
    for handler in list(root.handlers):
        root.removeHandler(handler)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    logging.captureWarnings(True)
    return log_file
