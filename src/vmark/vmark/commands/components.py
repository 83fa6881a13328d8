"""Components command - list the components of a vmark app"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from rich.table import Table

from .utils import console, get_app


def components_command(file_path: Optional[Path] = None) -> None:
    """List components with their props and subcomponent tags."""
    app = get_app(file_path)

    if not app.components:
        console.print("[yellow]No components defined[/yellow]")
        return

    table = Table()
    table.add_column("Name", style="cyan")
    table.add_column("Props")
    table.add_column("Subs")
    table.add_column("Description")

    for comp in app.components:
        name = f"{comp.name} [green](root)[/green]" if comp.name == app.root else comp.name
        subs = ", ".join(f"<{tag}> {target}" for tag, target in comp.subs.items())
        table.add_row(name, ", ".join(comp.props), subs, comp.description or "")

    console.print(table)
