"""
Logging for relnet.

Everything logs under the ``relnet`` logger tree. Console output goes to
stderr so CLI tables on stdout stay clean; an optional log file gets the
same records with timestamps and no colors.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Literal

ROOT = "relnet"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

_LEVEL_COLORS = {
    logging.DEBUG: "\033[2m",
    logging.INFO: "\033[34m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1;31m",
}
_RESET = "\033[0m"


class RelnetFormatter(logging.Formatter):
    """``LEVEL component: message``, e.g. ``DEBUG graph.reconciler: ...``.

    The ``relnet.`` prefix is dropped from logger names.
    """

    def __init__(self, use_colors: bool = False, timestamps: bool = False):
        super().__init__()
        self.use_colors = use_colors
        self.timestamps = timestamps

    def format(self, record: logging.LogRecord) -> str:
        component = record.name.removeprefix(f"{ROOT}.")
        level = record.levelname
        if self.use_colors:
            level = f"{_LEVEL_COLORS.get(record.levelno, '')}{level}{_RESET}"

        line = f"{level} {component}: {record.getMessage()}"
        if self.timestamps:
            stamp = datetime.fromtimestamp(record.created).isoformat(timespec="seconds")
            line = f"{stamp} {line}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def setup_logging(level: LogLevel = "INFO", log_file: str | Path | None = None) -> None:
    """(Re)configure the ``relnet`` logger tree.

    Args:
        level: Minimum level for every handler
        log_file: Also append records to this file when given
    """
    root = logging.getLogger(ROOT)
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(RelnetFormatter(use_colors=sys.stderr.isatty()))
    root.addHandler(console)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(RelnetFormatter(timestamps=True))
        root.addHandler(file_handler)

    root.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Logger for a relnet component, e.g. ``get_logger("graph.reconciler")``."""
    if name == ROOT or name.startswith(f"{ROOT}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT}.{name}")


def log_operation(
    logger: logging.Logger,
    operation: str,
    details: dict | None = None,
    level: int = logging.INFO,
) -> None:
    """Log ``operation: key=value, ...``."""
    if details:
        operation = f"{operation}: " + ", ".join(f"{k}={v}" for k, v in details.items())
    logger.log(level, operation)


setup_logging(level="WARNING")
