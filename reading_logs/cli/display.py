"""Console rendering for batch progress.

Every function takes the destination stream (stdout when omitted) and
keeps no state of its own. ANSI styling is dropped automatically when the
stream is not a terminal.
"""

from pathlib import Path
from typing import IO, Optional

import typer

from reading_logs.models.reading_log import ReadingLog
from reading_logs.orchestration.batch_processor import BatchListener
from reading_logs.orchestration.result import BatchResult

BAR_WIDTH = 20


def _dim(text: str) -> str:
    return typer.style(text, dim=True)


def render_bar(current: int, total: int, width: int = BAR_WIDTH) -> str:
    """Render a fixed-width progress bar like ``██████░░░░``."""
    filled = width * current // total if total else 0
    return "█" * filled + "░" * (width - filled)


def print_banner(file: Optional[IO[str]] = None) -> None:
    for line in (
        "┌─────────────────────────────────────┐",
        "│     Reading Logs Parser             │",
        "└─────────────────────────────────────┘",
    ):
        typer.secho(line, file=file, fg=typer.colors.CYAN, bold=True)


def print_batch_start(total: int, skipped: int, file: Optional[IO[str]] = None) -> None:
    if skipped > 0:
        typer.secho(
            f"  Resuming: {skipped} of {total} already completed",
            file=file,
            fg=typer.colors.CYAN,
        )
    count = typer.style(str(total - skipped), bold=True)
    typer.echo(f"  {count} images to process\n", file=file)


def print_progress(
    current: int,
    total: int,
    skipped: int,
    filename: str,
    file: Optional[IO[str]] = None,
) -> None:
    pct = current / total * 100 if total else 100.0
    typer.echo(
        "  {} {} {} {}".format(
            typer.style(f"[{current}/{total}]", bold=True),
            typer.style(render_bar(current, total), fg=typer.colors.CYAN),
            _dim(f"{pct:.0f}%"),
            typer.style(Path(filename).name, fg=typer.colors.YELLOW),
        ),
        file=file,
    )
    if skipped > 0:
        typer.echo(_dim(f"  ({skipped} already completed, skipped)"), file=file)


def print_result(record: ReadingLog, file: Optional[IO[str]] = None) -> None:
    """Print one parsed log: identity line, each day, then the total."""
    typer.echo(
        typer.style(f"  ✓ {record.full_name}", fg=typer.colors.GREEN)
        + _dim(f" | {record.grade} | {record.homeroom_teacher}"),
        file=file,
    )
    for entry in record.reading_entries:
        label = f"{entry.day} {entry.date}"
        if entry.minutes > 0:
            value = typer.style(f"{entry.minutes} min", fg=typer.colors.GREEN)
        else:
            value = _dim("—")
        typer.echo(f"    {_dim('│')} {_dim(f'{label:<10}')} {value}", file=file)
    total = typer.style(
        f"Total: {record.total_minutes} min", fg=typer.colors.GREEN, bold=True
    )
    typer.echo(f"    {_dim('└')} {total}", file=file)


def print_error(filename: str, error: object, file: Optional[IO[str]] = None) -> None:
    typer.secho(f"  ✗ {Path(filename).name}: {error}", file=file, fg=typer.colors.RED)


def print_warning(message: str, file: Optional[IO[str]] = None) -> None:
    typer.secho(f"  Warning: {message}", file=file, fg=typer.colors.YELLOW)


def print_summary(result: BatchResult, file: Optional[IO[str]] = None) -> None:
    typer.echo("", file=file)
    typer.secho("─── Summary ──────────────────────────", file=file, bold=True)
    typer.echo(
        f"  Images found:     {typer.style(str(result.images_found), bold=True)}",
        file=file,
    )
    if result.skipped > 0:
        typer.echo(
            "  Already done:     "
            + typer.style(str(result.skipped), fg=typer.colors.CYAN),
            file=file,
        )
    typer.echo(
        "  Newly processed:  "
        + typer.style(str(result.succeeded), fg=typer.colors.GREEN),
        file=file,
    )
    if result.failed > 0:
        typer.echo(
            "  Failed:           " + typer.style(str(result.failed), fg=typer.colors.RED),
            file=file,
        )
    typer.secho("──────────────────────────────────────", file=file, bold=True)


def print_written(count: int, output_file: str, file: Optional[IO[str]] = None) -> None:
    typer.secho(
        f"  Wrote {count} reading log(s) to {output_file}\n",
        file=file,
        fg=typer.colors.GREEN,
        bold=True,
    )


class ConsoleListener(BatchListener):
    """Renders batch progress to a stream as it happens."""

    def __init__(self, file: Optional[IO[str]] = None):
        self.file = file

    def on_batch_started(self, total: int, skipped: int) -> None:
        print_batch_start(total, skipped, file=self.file)

    def on_file_started(
        self, position: int, total: int, skipped: int, path: Path
    ) -> None:
        print_progress(position, total, skipped, path.name, file=self.file)

    def on_file_completed(self, path: Path, record: ReadingLog) -> None:
        print_result(record, file=self.file)

    def on_file_failed(self, path: Path, error: Exception) -> None:
        print_error(path.name, error, file=self.file)

    def on_save_failed(self, path: Path) -> None:
        print_warning("could not save progress", file=self.file)
