"""CLI entry point.

Allows running the CLI as a module: python -m reading_logs.cli
"""

from reading_logs.cli import app

if __name__ == "__main__":
    app()
