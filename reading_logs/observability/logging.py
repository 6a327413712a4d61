"""Structured logging for the reading log batch.

Logs go to stderr so they never interleave with the console report on
stdout. Every entry carries the current batch ID.

Usage:
    from reading_logs.observability.logging import configure_logging

    configure_logging(level="INFO")
    structlog.get_logger().info("checkpoint_saved", completed=12)
"""

import logging
import sys
from typing import Any

import structlog
from structlog.typing import EventDict, WrappedLogger

from reading_logs.observability.context import get_batch_id


def add_batch_id_processor(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Structlog processor that adds batch_id to log entries.

    Uses "none" when called outside a batch.
    """
    batch_id = get_batch_id()
    event_dict["batch_id"] = batch_id if batch_id else "none"
    return event_dict


def configure_logging(
    level: str = "WARNING",
    json_output: bool = False,
    add_timestamp: bool = True,
) -> None:
    """Configure structlog for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: If True, output JSON. If False, use console format.
        add_timestamp: If True, add ISO timestamp to each log entry.

    Example:
        # Unattended runs (JSON for log aggregation)
        configure_logging(level="INFO", json_output=True)

        # Interactive
        configure_logging(level="DEBUG")
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        add_batch_id_processor,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if add_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
