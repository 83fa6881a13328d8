"""Component schema definitions for vmark.

Components are reusable templates. Each component has:
  - name: identifier
  - template: markup with a single root element
  - props: names a parent may bind with v-bind:<prop>
  - data: default data context values
  - subs: element tags that instantiate other components
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Callable, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from vmark.engine.directives import capitalize
from vmark.exceptions import ComponentNotFoundError


class Component(BaseModel):
    """A reusable template with its own data and child components."""

    name: str
    template: str
    description: str | None = None
    props: list[str] = Field(default_factory=list, description="Declared prop names")
    data: dict[str, Any] = Field(default_factory=dict, description="Default data values")
    subs: dict[str, str] = Field(
        default_factory=dict, description="Element tag -> registered component name"
    )

    # Python API only; never read from or written to YAML.
    methods: dict[str, Callable[..., Any]] = Field(default_factory=dict, exclude=True)
    computed: dict[str, Callable[..., Any]] = Field(default_factory=dict, exclude=True)

    @field_validator("template")
    @classmethod
    def template_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Component template must not be empty")
        return value

    @field_validator("subs")
    @classmethod
    def lower_sub_tags(cls, value: dict[str, str]) -> dict[str, str]:
        # The markup parser lower-cases tag names.
        return {tag.lower(): name for tag, name in value.items()}

    def instance(self) -> "ComponentInstance":
        return ComponentInstance(self)


class ComponentInstance:
    """One use of a component, carrying the props its parent bound."""

    def __init__(self, component: Component):
        self.component = component
        self.props: dict[str, Any] = {}

    @property
    def name(self) -> str:
        return self.component.name

    def _declared(self, prop: str) -> Optional[str]:
        for declared in self.component.props:
            if capitalize(declared) == capitalize(prop):
                return declared
        return None

    def has_prop(self, prop: str) -> bool:
        return self._declared(prop) is not None

    def set_prop(self, prop: str, value: Any) -> None:
        """Store `value` under the declared spelling of `prop`."""
        declared = self._declared(prop)
        if declared is None:
            raise KeyError(prop)
        self.props[declared] = value

    def initial_data(self) -> dict[str, Any]:
        """Fresh copy of the component data with bound props on top."""
        data = copy.deepcopy(self.component.data)
        data.update(self.props)
        return data

    def __repr__(self) -> str:
        return f"ComponentInstance({self.name!r}, props={self.props!r})"


class ComponentRegistry:
    """Components by name, and tag resolution for subcomponents."""

    def __init__(self, components: Optional[list[Component]] = None):
        self._components: dict[str, Component] = {}
        for component in components or []:
            self.register(component)

    def register(self, component: Component) -> Component:
        self._components[component.name] = component
        return component

    def get(self, name: str) -> Component:
        if name not in self._components:
            raise ComponentNotFoundError(name)
        return self._components[name]

    def resolve(self, owner: Component, tag: str) -> Optional[ComponentInstance]:
        """Instantiate the subcomponent `owner` uses for `tag`, if any."""
        name = owner.subs.get(tag.lower())
        if name is None:
            return None
        return self.get(name).instance()

    def names(self) -> list[str]:
        return list(self._components)

    def __contains__(self, name: object) -> bool:
        return name in self._components

    def __len__(self) -> int:
        return len(self._components)


# --- Loading ---


def load_component_from_string(yaml_str: str) -> Component:
    """Load a single component from a YAML string."""
    data = yaml.safe_load(yaml_str) or {}
    return Component(**data)


def load_components(path: Path) -> list[Component]:
    """Load components from a YAML file.

    The file holds either one component mapping or a `components:` list.
    """
    if not path.exists():
        raise FileNotFoundError(f"Component file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if "components" in data:
        return [Component(**item) for item in data["components"]]
    return [Component(**data)]
