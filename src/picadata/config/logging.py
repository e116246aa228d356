# topmark:header:start
#
#   project      : PicaData
#   file         : logging.py
#   file_relpath : src/picadata/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""Logging setup for picadata, with a TRACE level below DEBUG.

Log output always goes to stderr: stdout is reserved for serialized records
and report lines. Messages are colored per level with yachalk when stderr is
a terminal.

The level is taken from ``-v``/``-q`` on the command line, or else from the
``PICADATA_LOG_LEVEL`` environment variable (a level name or a number).
Without either, only CRITICAL messages are shown.
"""

from __future__ import annotations

import logging
import os
import sys
from types import MappingProxyType
from typing import TYPE_CHECKING, Final, cast

from yachalk import chalk

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

TRACE_LEVEL: Final[int] = logging.DEBUG - 5

LOG_LEVEL_ENV: Final[str] = "PICADATA_LOG_LEVEL"

LOG_FORMAT: Final[str] = "[%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT: Final[str] = "[%(levelname)s] [%(name)s:%(lineno)d] %(message)s"

LEVEL_NAMES: Final[Mapping[str, int]] = MappingProxyType(
    {
        "TRACE": TRACE_LEVEL,
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
        "FATAL": logging.CRITICAL,
        "NOTSET": logging.NOTSET,
    }
)

# Highest threshold first; a record takes the color of the first threshold it reaches.
_LEVEL_COLORS: Final[tuple[tuple[int, Callable[[str], str]], ...]] = (
    (logging.CRITICAL, chalk.red_bright),
    (logging.ERROR, chalk.red),
    (logging.WARNING, chalk.yellow),
    (logging.INFO, chalk.green),
    (logging.DEBUG, chalk.gray),
    (TRACE_LEVEL, chalk.blue),
)


class PicadataLogger(logging.Logger):
    """Logger with a `trace` method for per-record diagnostics."""

    def trace(self, msg: object, *args: object) -> None:
        """Log ``msg % args`` with severity TRACE."""
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg, args, stacklevel=2)


logging.addLevelName(TRACE_LEVEL, "TRACE")
logging.setLoggerClass(PicadataLogger)


class ChalkFormatter(logging.Formatter):
    """Formatter that colors each line according to its level."""

    def __init__(self, fmt: str, *, use_color: bool = True) -> None:
        super().__init__(fmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if not self.use_color:
            return message
        for threshold, paint in _LEVEL_COLORS:
            if record.levelno >= threshold:
                return paint(message)
        return chalk.dim(message)


def resolve_env_log_level() -> int | None:
    """Return the level named by ``PICADATA_LOG_LEVEL``, or None if unset or invalid."""
    value = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if not value:
        return None
    if value.isdigit():
        return int(value)
    return LEVEL_NAMES.get(value)


def setup_logging(level: int | None = None) -> None:
    """(Re)configure the root logger to write to stderr at ``level``.

    Args:
        level (int | None): The level to use; None consults the environment
            and falls back to CRITICAL.
    """
    if level is None:
        level = resolve_env_log_level() or logging.CRITICAL

    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        ChalkFormatter(
            LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT,
            use_color=sys.stderr.isatty(),
        )
    )
    root.addHandler(handler)


def get_logger(name: str) -> PicadataLogger:
    """Return the `PicadataLogger` called ``name``."""
    return cast("PicadataLogger", logging.getLogger(name))
