"""Run command: process the reading log photos in a directory.

With no options it scans the current working directory, resumes from
``.progress.json`` and writes ``reading_logs.csv``.
"""

from pathlib import Path
from typing import Optional

import typer

from reading_logs import __version__
from reading_logs.cli import display
from reading_logs.cli.utils import handle_errors, load_config, logger
from reading_logs.models.config import AppConfig
from reading_logs.observability.context import batch_context
from reading_logs.observability.logging import configure_logging
from reading_logs.orchestration.batch_processor import BatchProcessor
from reading_logs.orchestration.result import BatchResult
from reading_logs.services.checkpoint_service import CheckpointService
from reading_logs.services.extraction_service import ExtractionService
from reading_logs.services.format_normalizer import FormatNormalizer
from reading_logs.services.report_exporter import ReportExporter
from reading_logs.utils.exceptions import (
    DirectoryReadError,
    ExportWriteError,
    NoImagesError,
    NoRecordsError,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"reading-logs {__version__}")
        raise typer.Exit()


def build_processor(config: AppConfig) -> BatchProcessor:
    """Wire the batch processor from configuration."""
    return BatchProcessor(
        input_dir=config.input_dir,
        checkpoint_service=CheckpointService(config.progress_file),
        normalizer=FormatNormalizer(config.conversion),
        extractor=ExtractionService.from_settings(config.llm),
        exporter=ReportExporter(config.output_file),
        listener=display.ConsoleListener(),
    )


@handle_errors
def run_command(
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Settings YAML (default: reading_logs.yaml if present)",
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="DEBUG, INFO, WARNING, ERROR or CRITICAL"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """Extract reading minutes from reading log photos into a CSV."""
    config = load_config(config_path)
    configure_logging(level=log_level or config.log_level, json_output=config.log_json)

    display.print_banner()

    processor = build_processor(config)

    with batch_context() as batch_id:
        logger.info("batch_run_started", batch_id=batch_id, input_dir=config.input_dir)
        result = _run_batch(processor)

    display.print_summary(result)
    display.print_written(result.records_exported, config.output_file)


def _run_batch(processor: BatchProcessor) -> BatchResult:
    """Run the batch, turning fatal conditions into exit code 1."""
    try:
        return processor.run()
    except DirectoryReadError as e:
        typer.secho(f"Error finding images: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    except NoImagesError:
        typer.secho(
            "No image files found in current directory"
            if processor.input_dir == Path(".")
            else f"No image files found in {processor.input_dir}",
            fg=typer.colors.YELLOW,
        )
        raise typer.Exit(code=1)
    except NoRecordsError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(code=1)
    except ExportWriteError as e:
        typer.secho(f"Error writing CSV: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
