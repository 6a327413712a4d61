"""Batch processor: the resumable scan → extract → checkpoint → export loop.

Images are handled one at a time. Every outcome is written to the progress
file before the next image starts, so an interrupted run resumes where it
stopped: completed images are skipped and failed ones are tried again.
"""

from pathlib import Path
from typing import List, Optional, Tuple, Union

import structlog

from reading_logs.models.checkpoint import ProgressState
from reading_logs.models.reading_log import ReadingLog
from reading_logs.orchestration.result import BatchResult, FileOutcome
from reading_logs.services.checkpoint_service import CheckpointService
from reading_logs.services.extraction_service import ExtractionService
from reading_logs.services.format_normalizer import FormatNormalizer
from reading_logs.services.image_scanner import find_images
from reading_logs.services.report_exporter import ReportExporter
from reading_logs.utils.exceptions import (
    ExtractionError,
    NoImagesError,
    NormalizationError,
)

logger = structlog.get_logger()


class BatchListener:
    """Receives progress notifications from a batch run.

    All hooks are no-ops; override the ones you need.
    """

    def on_batch_started(self, total: int, skipped: int) -> None:
        pass

    def on_file_started(
        self, position: int, total: int, skipped: int, path: Path
    ) -> None:
        pass

    def on_file_completed(self, path: Path, record: ReadingLog) -> None:
        pass

    def on_file_failed(self, path: Path, error: Exception) -> None:
        pass

    def on_save_failed(self, path: Path) -> None:
        pass


class BatchProcessor:
    """Drives one batch run over an image directory.

    Fatal conditions raise (DirectoryReadError, NoImagesError,
    NoRecordsError, ExportWriteError); per-image failures are recorded in
    the checkpoint and never stop the loop.
    """

    def __init__(
        self,
        input_dir: Union[str, Path],
        checkpoint_service: CheckpointService,
        normalizer: FormatNormalizer,
        extractor: ExtractionService,
        exporter: ReportExporter,
        listener: Optional[BatchListener] = None,
    ):
        self.input_dir = Path(input_dir)
        self.checkpoint_service = checkpoint_service
        self.normalizer = normalizer
        self.extractor = extractor
        self.exporter = exporter
        self.listener = listener or BatchListener()

    def run(self) -> BatchResult:
        """Process every pending image, then export all completed logs.

        Returns:
            BatchResult for this run

        Raises:
            DirectoryReadError: Input directory can't be listed
            NoImagesError: No eligible images in the directory
            NoRecordsError: No reading log has ever been parsed
            ExportWriteError: CSV report can't be written
        """
        images = find_images(self.input_dir)
        result = BatchResult(images_found=len(images))

        if not images:
            raise NoImagesError(f"No image files found in {self.input_dir}")

        state = self.checkpoint_service.load()

        pending: List[Tuple[int, Path]] = []
        for position, path in enumerate(images, start=1):
            if state.is_completed(path.name):
                result.record(path.name, FileOutcome.SKIPPED)
            else:
                pending.append((position, path))

        logger.info(
            "batch_started",
            images=len(images),
            skipped=result.skipped,
            pending=len(pending),
            retrying=len(state.pending_errors),
        )
        self.listener.on_batch_started(len(images), result.skipped)

        for position, path in pending:
            self.listener.on_file_started(position, len(images), result.skipped, path)
            outcome = self._process_file(path, state)
            result.record(path.name, outcome, state.errors.get(path.name, ""))

        result.provider_stats = self.extractor.usage_stats()
        result.records_exported = self.exporter.export(state.completed)
        result.output_file = str(self.exporter.output_file)

        logger.info("batch_finished", **result.to_dict())
        return result

    def _process_file(self, path: Path, state: ProgressState) -> FileOutcome:
        """Run one image through normalize → extract → checkpoint."""
        filename = path.name

        try:
            media_type, data = self.normalizer.load(path)
        except NormalizationError as e:
            logger.info("normalization_failed", filename=filename, error=str(e))
            self._fail(path, state, e)
            return FileOutcome.NORMALIZE_FAILED

        try:
            record = self.extractor.extract(media_type, data)
        except ExtractionError as e:
            logger.info(
                "extraction_failed",
                filename=filename,
                error_type=type(e).__name__,
                error=str(e),
            )
            self._fail(path, state, e)
            return FileOutcome.EXTRACT_FAILED

        if not self.checkpoint_service.mark_success(state, filename, record):
            self.listener.on_save_failed(path)

        logger.info(
            "image_completed",
            filename=filename,
            full_name=record.full_name,
            total_minutes=record.total_minutes,
        )
        self.listener.on_file_completed(path, record)
        return FileOutcome.COMPLETED

    def _fail(self, path: Path, state: ProgressState, error: Exception) -> None:
        self.listener.on_file_failed(path, error)
        if not self.checkpoint_service.mark_failure(state, path.name, str(error)):
            self.listener.on_save_failed(path)
