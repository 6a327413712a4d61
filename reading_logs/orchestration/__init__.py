"""Orchestration of the resumable reading log batch."""

from reading_logs.orchestration.batch_processor import BatchListener, BatchProcessor
from reading_logs.orchestration.result import BatchResult, FileOutcome

__all__ = [
    "BatchListener",
    "BatchProcessor",
    "BatchResult",
    "FileOutcome",
]
