"""Placeholder interpolation.

The directive pass leaves {{ field }} placeholders in text and attribute
values. This last pass substitutes them from the data context with Jinja2.

Only {{ }} placeholders are template syntax. Every other brace in the markup
is passed through, so `{%` and `{#` in plain text render as written. Values
written by directives are wrapped with `literal()` before this pass, so
placeholders inside data are never evaluated.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from jinja2 import StrictUndefined, TemplateError, Undefined
from jinja2.sandbox import SandboxedEnvironment
from markupsafe import Markup

from vmark.exceptions import InterpolationError

PLACEHOLDER = re.compile(r"\{\{.*?\}\}", re.DOTALL)

# Renders as a single "{" under any escaping mode.
_BRACE = "{{ '{' }}"


def format_value(value: Any) -> str:
    """Default string form of a data value, shared by bind and interpolation."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(format_value(v) for v in value) + "]"
    return str(value)


def literal(text: str) -> str:
    """Return `text` in a form the interpolation pass reproduces verbatim.

    >>> literal("{{ x }}")
    "{{ '{' }}{{ '{' }} x }}"
    """
    return text.replace("{", _BRACE)


def protect(markup: str) -> str:
    """Keep the {{ }} placeholders of `markup` and make all other braces literal."""
    out = []
    pos = 0
    for match in PLACEHOLDER.finditer(markup):
        out.append(literal(markup[pos : match.start()]))
        out.append(match.group(0))
        pos = match.end()
    out.append(literal(markup[pos:]))
    return "".join(out)


class Interpolator:
    """Renders markup text containing {{ }} placeholders."""

    def __init__(self, autoescape: bool = True, strict: bool = False):
        self.autoescape = autoescape
        self.strict = strict
        self.env = SandboxedEnvironment(
            autoescape=autoescape,
            undefined=StrictUndefined if strict else Undefined,
            finalize=self._finalize,
            keep_trailing_newline=True,
        )

    def render(self, markup: str, data: Mapping[str, Any]) -> str:
        """Substitute placeholders in `markup` from `data`.

        Raises:
            InterpolationError: On a malformed placeholder, an unsafe attribute
                access, or an undefined name when strict.
        """
        try:
            template = self.env.from_string(protect(markup))
            return template.render(data)
        except TemplateError as e:
            raise InterpolationError(f"Failed to interpolate template: {e}") from e

    @staticmethod
    def _finalize(value: Any) -> Any:
        # Undefined renders as-is so strict mode can still raise on it.
        if isinstance(value, (Undefined, Markup)):
            return value
        return format_value(value)
