"""CLI commands"""

from .components import components_command
from .render import render_command

__all__ = ["components_command", "render_command"]
