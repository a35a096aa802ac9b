"""
Centralized logging configuration.

Modules log through ``logging.getLogger(__name__)`` and attach context
with ``extra={...}``. This module wires the root logger once, from
ObservabilityConfig, either with a plain text format or as one JSON
object per record (``TG_LOG_STRUCTURED=true``).

Usage:
    from transit_graph.logging_config import setup_logging
    setup_logging()  # Call once at application startup
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Optional

from .config import ObservabilityConfig, get_config

LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Attributes present on every LogRecord; anything else came from extra=
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render a record and its ``extra`` fields as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": self.formatTime(record, LOG_DATE_FORMAT),
            "logger": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def setup_logging(
    config: Optional[ObservabilityConfig] = None,
    level: Optional[str] = None,
) -> None:
    """
    Configure the root logger with a single console handler.

    Args:
        config: Observability settings (defaults to the global config)
        level: Optional level name overriding ``config.level``

    Example:
        setup_logging(level="DEBUG")
    """
    config = config or get_config().observability
    effective_level = (level or config.level).upper()

    if config.structured:
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(config.format, datefmt=LOG_DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(effective_level)

    # Clear any existing handlers (prevents duplicate logs on re-init)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Suppress noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    root_logger.debug(
        "Logging initialized",
        extra={"log_level": effective_level, "structured": config.structured},
    )
