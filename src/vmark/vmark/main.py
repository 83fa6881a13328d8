"""vmark CLI Main Entry Point

Usage:
    vmark render                       # Render the root component of ./vmark.yaml
    vmark render app.yaml -c card      # Render a named component
    vmark render -d data.json -s flag=true -o out.html
    vmark components                   # List components
    vmark --version                    # Show version
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from ._version import __version__
from .commands import components_command, render_command
from .commands.utils import setup_logging

typer_app = typer.Typer(no_args_is_help=True)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"vmark {__version__}")
        raise typer.Exit()


@typer_app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Log progress."),
) -> None:
    """Directive-driven markup templates."""
    setup_logging(verbose)


@typer_app.command()
def render(
    file_path: Optional[Path] = typer.Argument(
        None, help="Path to vmark.yaml (searched in cwd and parents if omitted)."
    ),
    component: Optional[str] = typer.Option(
        None, "-c", "--component", help="Component to render instead of the root."
    ),
    data_file: Optional[Path] = typer.Option(
        None, "-d", "--data", help="JSON or YAML file with extra data values."
    ),
    set_values: Optional[List[str]] = typer.Option(
        None, "-s", "--set", help="Data value as key=value (value read as YAML)."
    ),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Write markup to file instead of stdout."
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Fail on undefined {{ }} placeholders."
    ),
) -> None:
    """Render a component to markup.

    \b
    Examples:
        vmark render                      Render the root component
        vmark render -c todo-item         Render one component
        vmark render -s done=true         Override a data value
    """
    render_command(
        file_path=file_path,
        component=component,
        data_file=data_file,
        set_values=set_values,
        output=output,
        strict=strict,
    )


@typer_app.command()
def components(
    file_path: Optional[Path] = typer.Argument(None, help="Path to vmark.yaml."),
) -> None:
    """List the components of an app."""
    components_command(file_path)


def app(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI."""
    typer_app(args=argv)


if __name__ == "__main__":
    app()
