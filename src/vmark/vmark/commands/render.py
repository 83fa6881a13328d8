"""Render command - render a component of a vmark app"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from vmark.config import load_data_file, parse_set_values
from vmark.exceptions import VmarkError
from vmark.viewmodel import ViewModel

from .utils import get_app, handle_error

log = logging.getLogger(__name__)


def render_command(
    file_path: Optional[Path] = None,
    component: Optional[str] = None,
    data_file: Optional[Path] = None,
    set_values: Optional[list[str]] = None,
    output: Optional[Path] = None,
    strict: bool = False,
) -> None:
    """Render a component to markup and print or write it."""
    app = get_app(file_path)

    try:
        registry = app.build_registry()
        name = component or app.root
        if name is None:
            raise VmarkError("No components defined")

        options = app.options.model_copy(update={"strict": strict or app.options.strict})
        vm = ViewModel(registry.get(name), registry=registry, options=options)
        if name == app.root:
            vm.update(app.data)
        if data_file is not None:
            vm.update(load_data_file(data_file))
        vm.update(parse_set_values(set_values or []))

        log.info("Rendering component %s", name)
        markup = vm.render()
    except (VmarkError, FileNotFoundError) as e:
        handle_error(e)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(markup + "\n", encoding="utf-8")
        typer.echo(f"Wrote {name} to {output}", err=True)
    else:
        typer.echo(markup)
