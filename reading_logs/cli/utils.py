"""Shared CLI utilities."""

import functools
from pathlib import Path
from typing import Callable, Optional, TypeVar

import structlog
import typer

from reading_logs.models.config import AppConfig
from reading_logs.services.config_manager import ConfigManager, ConfigValidationError

logger = structlog.get_logger()

# Type variable for decorator
F = TypeVar("F", bound=Callable)


def load_config(config_path: Optional[Path]) -> AppConfig:
    """Load and validate configuration.

    Args:
        config_path: Explicit config file, or None for the optional default.

    Raises:
        typer.Exit: If configuration is invalid.
    """
    config_manager = ConfigManager(
        config_path=str(config_path) if config_path else None
    )
    try:
        return config_manager.load_config()
    except ConfigValidationError as e:
        typer.secho(f"Configuration Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def handle_errors(func: F) -> F:
    """Decorator for consistent error handling.

    Unexpected exceptions are logged with traceback and turned into exit
    code 1.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except typer.Exit:
            raise
        except Exception as e:
            logger.exception("command_failed")
            typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)

    return wrapper  # type: ignore[return-value]
