"""Logging setup for phasesplit and its CLI."""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime

_ROOT_LOGGER = "phasesplit"


class _JsonFormatter(logging.Formatter):
    """Render records as single-line JSON.

    Besides timestamp, level, logger and message, a record logged with
    ``extra={"context": {...}}`` (the unknown-phase warning, for one) keeps
    that mapping under ``context``.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = getattr(record, "context", None)
        if context is not None:
            log_entry["context"] = context
        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


def setup_logging(
    level: int = logging.INFO,
    *,
    json_format: bool = False,
) -> logging.Logger:
    """Attach a stderr handler to the ``phasesplit`` logger.

    The library itself never calls this; the CLI does once per command.
    Calling it again only changes the level.

    Args:
        level: Threshold for the ``phasesplit`` namespace.
        json_format: Emit JSON lines (see :class:`_JsonFormatter`) instead of
            plain text.

    Returns:
        The ``phasesplit`` logger.
    """
    logger = logging.getLogger(_ROOT_LOGGER)
    logger.setLevel(level)

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    if json_format:
        formatter: logging.Formatter = _JsonFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return ``phasesplit.<name>``, e.g. ``get_logger("partition")``."""
    return logging.getLogger(f"{_ROOT_LOGGER}.{name}")
