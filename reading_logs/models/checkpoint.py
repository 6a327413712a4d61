"""Data models for the resume checkpoint."""

from typing import Dict

from pydantic import BaseModel, Field

from reading_logs.models.reading_log import ReadingLog


class ProgressState(BaseModel):
    """Outcome of every image processed so far, keyed by filename"""

    completed: Dict[str, ReadingLog] = Field(default_factory=dict)
    errors: Dict[str, str] = Field(default_factory=dict)

    def is_completed(self, filename: str) -> bool:
        return filename in self.completed

    @property
    def pending_errors(self) -> Dict[str, str]:
        """Errors for files that have not succeeded since (retried next run)"""
        return {
            name: message
            for name, message in self.errors.items()
            if name not in self.completed
        }
