"""
Checkpoint service for resumable batch processing.

Progress is saved after every processed image, so an interrupted run loses
at most the image in flight. Uses atomic file writes to prevent corruption.
"""

import json
import os
from pathlib import Path
from typing import Union

import structlog
from pydantic import ValidationError

from reading_logs.models.checkpoint import ProgressState
from reading_logs.models.reading_log import ReadingLog
from reading_logs.utils.exceptions import CheckpointSaveError

logger = structlog.get_logger()


class CheckpointService:
    """
    Persist per-image outcomes between runs.

    The progress file is never deleted here; removing it by hand is how a
    full reset is done.
    """

    def __init__(self, progress_file: Union[str, Path] = ".progress.json"):
        """
        Initialize checkpoint service.

        Args:
            progress_file: Path of the JSON progress file
        """
        self.progress_file = Path(progress_file)

    def load(self) -> ProgressState:
        """
        Load saved progress.

        Never raises: a missing file starts fresh silently, an unreadable or
        invalid one starts fresh with a warning.

        Returns:
            Loaded progress, or an empty state
        """
        if not self.progress_file.exists():
            logger.debug("no_checkpoint_found", path=str(self.progress_file))
            return ProgressState()

        try:
            with open(self.progress_file, "r", encoding="utf-8") as f:
                data = json.load(f)

            state = ProgressState(**data)

        except (OSError, ValueError, TypeError, ValidationError) as e:
            logger.warning(
                "checkpoint_load_error",
                path=str(self.progress_file),
                error=str(e),
            )
            return ProgressState()

        logger.info(
            "checkpoint_loaded",
            completed=len(state.completed),
            errors=len(state.errors),
        )

        return state

    def save(self, state: ProgressState) -> None:
        """
        Save progress atomically.

        Args:
            state: Progress to persist

        Raises:
            CheckpointSaveError: If the file cannot be written
        """
        # Atomic write: write to temp file, then rename
        temp_file = self.progress_file.with_name(self.progress_file.name + ".tmp")

        try:
            with open(temp_file, "w", encoding="utf-8") as f:
                json.dump(state.model_dump(mode="json"), f, indent=2)
                f.flush()
                os.fsync(f.fileno())

            os.replace(temp_file, self.progress_file)

        except OSError as e:
            temp_file.unlink(missing_ok=True)
            raise CheckpointSaveError(
                f"could not save progress to {self.progress_file}: {e}"
            ) from e

        logger.debug(
            "checkpoint_saved",
            completed=len(state.completed),
            errors=len(state.errors),
        )

    def mark_success(
        self, state: ProgressState, filename: str, record: ReadingLog
    ) -> bool:
        """
        Record a successful extraction and save.

        Clears any earlier error for the same file.

        Returns:
            True if the progress file was written
        """
        state.completed[filename] = record
        state.errors.pop(filename, None)
        return self._save_quietly(state, filename)

    def mark_failure(self, state: ProgressState, filename: str, message: str) -> bool:
        """
        Record a failed attempt and save.

        An existing success for the file is left in place.

        Returns:
            True if the progress file was written
        """
        state.errors[filename] = message
        return self._save_quietly(state, filename)

    def _save_quietly(self, state: ProgressState, filename: str) -> bool:
        """Save, downgrading a failure to a warning so the batch continues"""
        try:
            self.save(state)
            return True
        except CheckpointSaveError as e:
            logger.warning("checkpoint_save_error", filename=filename, error=str(e))
            return False
