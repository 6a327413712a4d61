"""Batch result data structures."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class FileOutcome(str, Enum):
    """Terminal state of one image in a batch run"""

    SKIPPED = "skipped"
    NORMALIZE_FAILED = "normalize_failed"
    EXTRACT_FAILED = "extract_failed"
    COMPLETED = "completed"


@dataclass
class BatchResult:
    """Result of a batch run.

    Counts cover this invocation only; ``records_exported`` covers every
    reading log in the checkpoint, prior runs included.
    """

    images_found: int = 0
    skipped: int = 0
    succeeded: int = 0
    failed: int = 0
    records_exported: int = 0
    output_file: Optional[str] = None
    errors: Dict[str, str] = field(default_factory=dict)
    outcomes: Dict[str, FileOutcome] = field(default_factory=dict)
    provider_stats: Dict[str, Any] = field(default_factory=dict)

    def record(self, filename: str, outcome: FileOutcome, error: str = "") -> None:
        """Tally the outcome for one file."""
        self.outcomes[filename] = outcome
        if outcome == FileOutcome.SKIPPED:
            self.skipped += 1
        elif outcome == FileOutcome.COMPLETED:
            self.succeeded += 1
        else:
            self.failed += 1
            self.errors[filename] = error

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "images_found": self.images_found,
            "skipped": self.skipped,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "records_exported": self.records_exported,
            "output_file": self.output_file,
            "errors": self.errors,
            "provider": self.provider_stats,
        }
