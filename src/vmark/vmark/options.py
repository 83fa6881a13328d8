"""Render options shared by every template execution of an app."""

from __future__ import annotations

from pydantic import BaseModel, Field


class RenderOptions(BaseModel):
    """Knobs for the interpolation pass."""

    autoescape: bool = Field(default=True, description="HTML-escape interpolated values")
    strict: bool = Field(
        default=False, description="Raise on undefined placeholders instead of rendering ''"
    )
