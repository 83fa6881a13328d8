"""Shared utilities for CLI commands"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from vmark.config import AppConfig, find_app_file, load_app_yaml
from vmark.exceptions import VmarkError

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the vmark CLI.

    Log levels:
    - Normal: Only warnings/errors shown
    - Verbose (-v): INFO level
    - Debug (VMARK_DEBUG=1): DEBUG level - every directive executed
    """
    if os.environ.get("VMARK_DEBUG"):
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=verbose,
        show_path=bool(os.environ.get("VMARK_DEBUG")),
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("vmark")
    logger.setLevel(level)
    logger.handlers = [handler]
    logger.propagate = False


def exit_with_error(message: str, exit_code: int = 1) -> NoReturn:
    """Exit the program with an error message."""
    typer.secho(f"Error: {message}", err=True, fg=typer.colors.RED)
    sys.exit(exit_code)


def handle_error(error: Exception) -> NoReturn:
    """Handle and exit on vmark errors."""
    if isinstance(error, (VmarkError, FileNotFoundError)):
        exit_with_error(str(error))
    typer.secho(f"Unexpected error: {error}", err=True, fg=typer.colors.RED)
    sys.exit(1)


def get_app(file_path: Optional[Path]) -> AppConfig:
    """Load the given vmark.yaml, or find one in the cwd or its parents."""
    path = file_path or find_app_file()
    if path is None:
        exit_with_error("No vmark.yaml found in current directory or parents.")
    try:
        return load_app_yaml(path)
    except (VmarkError, FileNotFoundError) as e:
        handle_error(e)
