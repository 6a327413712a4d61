"""Batch ID context for log correlation.

Every batch run gets a short identifier that is stamped on each log entry,
so the log lines of one invocation can be told apart from the next when
several runs append to the same log file.

Usage:
    from reading_logs.observability.context import batch_context

    with batch_context() as batch_id:
        processor.run()
"""

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Generator, Optional

_batch_id_var: ContextVar[Optional[str]] = ContextVar("batch_id", default=None)


def new_batch_id() -> str:
    """Generate a short batch identifier (first 8 hex chars of a UUID4)."""
    return uuid.uuid4().hex[:8]


def get_batch_id() -> Optional[str]:
    """Get the current batch ID, or None outside a batch."""
    return _batch_id_var.get()


@contextmanager
def batch_context(batch_id: Optional[str] = None) -> Generator[str, None, None]:
    """Scope a batch ID, restoring the previous one on exit.

    Args:
        batch_id: Optional explicit ID. If None, one is generated.

    Yields:
        The batch ID in effect inside the block.
    """
    if batch_id is None:
        batch_id = new_batch_id()

    token = _batch_id_var.set(batch_id)
    try:
        yield batch_id
    finally:
        _batch_id_var.reset(token)
