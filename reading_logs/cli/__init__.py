"""Reading Logs CLI Package.

Usage:
    reading-logs
    reading-logs --config reading_logs.yaml --log-level INFO
    python -m reading_logs.cli
"""

import typer

from reading_logs.cli.run import run_command

app = typer.Typer(
    help="Reading Logs Parser: extract reading minutes from form photos",
    add_completion=False,
)

# Single command: invoked without a subcommand name
app.command(name="run")(run_command)

__all__ = ["app", "run_command"]
