"""Logging setup for the skill selector."""

from __future__ import annotations

import json
import logging
from typing import Any

from skill_selector.settings import LoggingConfig

_PACKAGE_LOGGER = "skill_selector"

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys() | {"message", "asctime"}
)


class StructuredFormatter(logging.Formatter):
    """Format records as single-line JSON objects.

    Values passed through ``extra=`` are included as top-level keys.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Render ``record`` as JSON."""
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def setup_logging(config: LoggingConfig | None = None) -> logging.Logger:
    """Configure the package logger from ``config``.

    Calling this again replaces the handler installed by a previous call.

    Args:
        config: Logging configuration. Uses defaults if ``None``.

    Returns:
        The configured ``skill_selector`` logger.
    """
    config = config or LoggingConfig()
    logger = logging.getLogger(_PACKAGE_LOGGER)
    logger.setLevel(config.level)

    for handler in list(logger.handlers):
        if getattr(handler, "_skill_selector_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler._skill_selector_handler = True  # type: ignore[attr-defined]
    if config.structured:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter(config.format))
    logger.addHandler(handler)

    return logger
