"""
Structured logging setup for callrelay.

Configures structlog for JSON-formatted structured logging. Every log line
includes timestamp, level, service name, and event. Request-scoped context
bound with ``structlog.contextvars`` is merged into each line.
"""

from __future__ import annotations

import logging
from typing import Any

import structlog

SERVICE_NAME = "callrelay"


def _add_service(
    _logger: Any, _method: str, event_dict: dict[str, Any],
) -> dict[str, Any]:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def configure_logging(level: str = "INFO") -> None:
    """Configure structlog for JSON output at *level*.

    Unknown level names fall back to ``INFO``.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_service,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )
