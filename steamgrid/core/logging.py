"""Logging setup for the SteamGrid console transcript.

The console shows the bare message so progress lines read like a transcript;
warnings and errors carry their level. The optional log file keeps timestamps
and logger names for every record, including debug output.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

__all__ = ["TranscriptFormatter", "logger", "setup_logging"]

logger = logging.getLogger("steamgrid")

FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class TranscriptFormatter(logging.Formatter):
    """Prints INFO and below as plain text, higher levels prefixed with their name."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.levelno > logging.INFO:
            return f"{record.levelname}: {message}"
        return message


def setup_logging(
    level: int = logging.INFO,
    log_file: Path | None = None,
) -> None:
    """Attaches the console handler and, if requested, a file handler.

    Calling it again only updates the level.

    Args:
        level: Level of the steamgrid logger and the console handler.
        log_file: Also log to this file at DEBUG level.
    """
    logger.setLevel(min(level, logging.DEBUG) if log_file is not None else level)

    if logger.handlers:
        return

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(TranscriptFormatter())
    logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)
