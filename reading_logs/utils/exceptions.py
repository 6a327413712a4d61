"""Exception hierarchy for the reading log batch.

All errors inherit from PipelineError so callers can catch any batch failure
in a single except block. Errors fall into two groups:

- Fatal errors abort the run (DirectoryReadError, NoImagesError,
  ExportWriteError, NoRecordsError).
- Per-file errors are recorded in the checkpoint and retried on the next run
  (NormalizationError, ExtractionError and its subclasses).

CheckpointSaveError sits in between: it is reported as a warning and the batch
keeps going.
"""


class PipelineError(Exception):
    """Base exception for all reading log pipeline errors

    ```python
    try:
        result = processor.run()
    except PipelineError as e:
        logger.error("batch_failed", error=str(e))
    ```
    """

    pass


class DirectoryReadError(PipelineError):
    """Image directory could not be listed

    Raised when:
    - Directory does not exist
    - Permission denied
    - Path is not a directory
    """

    pass


class NoImagesError(PipelineError):
    """No eligible image files were found in the directory"""

    pass


class NormalizationError(PipelineError):
    """Image could not be prepared for extraction

    Raised when:
    - HEIC conversion utility is missing from PATH
    - Conversion utility exits non-zero or times out
    - Image file cannot be read
    - Extension has no supported media type
    """

    pass


class ExtractionError(PipelineError):
    """Structured extraction from the image failed

    Raised when:
    - API call fails (transport, auth, rate limit)
    - Response has no text content
    - Response JSON doesn't match the reading log schema
    """

    pass


class CheckpointSaveError(PipelineError):
    """Progress file could not be written

    Non-fatal: the in-memory state stays authoritative until the next
    successful save.
    """

    pass


class ExportWriteError(PipelineError):
    """CSV report could not be created or written"""

    pass


class NoRecordsError(PipelineError):
    """No successfully parsed reading logs exist to export"""

    pass
