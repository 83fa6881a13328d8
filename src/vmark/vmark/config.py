"""Application configuration for vmark.

Schema of vmark.yaml:
- name: application name
- root: component rendered by default
- components: list of component definitions (see vmark.component)
- data: values merged over the root component's data
- options: render options (autoescape, strict)
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from vmark.component import Component, ComponentRegistry
from vmark.exceptions import ConfigError
from vmark.options import RenderOptions

APP_FILE = "vmark.yaml"


class AppConfig(BaseModel):
    """Main vmark.yaml configuration."""

    name: str = Field(description="Application name")
    root: Optional[str] = Field(default=None, description="Component rendered by default")
    components: list[Component] = Field(default_factory=list)
    data: dict[str, Any] = Field(default_factory=dict, description="Root data overrides")
    options: RenderOptions = Field(default_factory=RenderOptions)

    @model_validator(mode="after")
    def default_root(self) -> "AppConfig":
        """Fall back to the first component, and check the root exists."""
        names = [c.name for c in self.components]
        if self.root is None and names:
            self.root = names[0]
        if self.root is not None and self.root not in names:
            raise ValueError(f"Root component '{self.root}' is not defined")
        return self

    def build_registry(self) -> ComponentRegistry:
        return ComponentRegistry(self.components)


def load_app_yaml(path: Path) -> AppConfig:
    """Load vmark.yaml from path."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    try:
        return AppConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {path}: {e}") from e


def find_app_file(start: Optional[Path] = None) -> Optional[Path]:
    """Find vmark.yaml in the given directory (default cwd) or its parents."""
    cwd = start or Path.cwd()
    for parent in [cwd] + list(cwd.parents):
        candidate = parent / APP_FILE
        if candidate.exists():
            return candidate
    return None


def load_data_file(path: Path) -> dict[str, Any]:
    """Load extra data context values from a JSON or YAML file."""
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    text = path.read_text(encoding="utf-8")
    if path.suffix == ".json":
        data = json.loads(text)
    elif path.suffix in (".yaml", ".yml"):
        data = yaml.safe_load(text)
    else:
        raise ConfigError(f"Unsupported data file type: {path.suffix}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Data file must hold a mapping: {path}")
    return data


def parse_set_values(values: list[str]) -> dict[str, Any]:
    """Parse key=value pairs, reading each value as a YAML scalar.

    "flag=true" -> {"flag": True}, "n=3" -> {"n": 3}, "name=Ada" -> {"name": "Ada"}
    """
    result: dict[str, Any] = {}
    for item in values:
        key, sep, raw = item.partition("=")
        if not sep or not key.strip():
            raise ConfigError(f"Expected key=value, got: {item}")
        result[key.strip()] = yaml.safe_load(raw) if raw else ""
    return result
