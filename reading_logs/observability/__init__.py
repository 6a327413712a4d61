"""Observability helpers: structured logging and batch correlation.

Usage:
    from reading_logs.observability import batch_context, configure_logging

    configure_logging(level="INFO")
    with batch_context():
        processor.run()
"""

from reading_logs.observability.context import batch_context, get_batch_id
from reading_logs.observability.logging import (
    add_batch_id_processor,
    configure_logging,
)

__all__ = [
    "batch_context",
    "get_batch_id",
    "add_batch_id_processor",
    "configure_logging",
]
