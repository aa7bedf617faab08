"""Process-wide logging set-up for paxi nodes and tools."""

from __future__ import annotations

import enum
import logging
import os
import sys
from pathlib import Path

LOGGER_NAME = "paxi"

_FORMAT = "[%(levelname)s] %(asctime)s.%(msecs)03d %(filename)s:%(lineno)d: %(message)s"
_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"


class Severity(enum.IntEnum):
    """Log severities; a logger reports messages at and above its severity."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR


def parse_severity(value: str) -> Severity:
    """Return the severity named by ``value`` (any case); unknown names give INFO."""
    return Severity.__members__.get(value.strip().upper(), Severity.INFO)


class _BelowWarning(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.WARNING


def _formatter() -> logging.Formatter:
    return logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT)


def _reset_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def _install_defaults(logger: logging.Logger) -> None:
    out = logging.StreamHandler(sys.stdout)
    out.addFilter(_BelowWarning())
    out.setFormatter(_formatter())
    err = logging.StreamHandler(sys.stderr)
    err.setLevel(logging.WARNING)
    err.setFormatter(_formatter())
    logger.addHandler(out)
    logger.addHandler(err)
    logger.setLevel(Severity.INFO)
    logger.propagate = False


def get_logger() -> logging.Logger:
    """Return the package logger, giving it console handlers on first use."""
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        _install_defaults(logger)
    return logger


def setup(log_dir: str | os.PathLike[str] | None = None,
          severity: Severity | str | None = None) -> Path:
    """Send all log output to ``<program>.<pid>.log`` in ``log_dir``.

    Warnings and errors are also copied to standard error. Returns the
    path of the log file.
    """
    logger = get_logger()
    if severity is None:
        level = Severity(logger.level) if logger.level in Severity._value2member_map_ else Severity.INFO
    elif isinstance(severity, Severity):
        level = severity
    else:
        level = parse_severity(severity)

    program = Path(sys.argv[0]).name if sys.argv and sys.argv[0] else LOGGER_NAME
    path = Path(log_dir or ".") / f"{program}.{os.getpid()}.log"
    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    file_handler.setFormatter(_formatter())

    err = logging.StreamHandler(sys.stderr)
    err.setLevel(logging.WARNING)
    err.setFormatter(_formatter())

    _reset_handlers(logger)
    logger.addHandler(file_handler)
    logger.addHandler(err)
    logger.setLevel(level)
    logger.propagate = False
    return path