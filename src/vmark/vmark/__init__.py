"""vmark - directive-driven markup templates.

Templates are markup with a few reserved attributes:

    v-if="flag"            keep the element only when flag is true
    v-for="item in items"  repeat the element per item
    v-bind:attr="field"    set an attribute (or a subcomponent prop)
    v-model="field"        two-way bind an input to a string field
    v-on:event="method"    call a method on an event

Directives run first; {{ field }} placeholders are interpolated last.
"""

from vmark._version import __version__
from vmark.component import (
    Component,
    ComponentInstance,
    ComponentRegistry,
    load_component_from_string,
    load_components,
)
from vmark.config import AppConfig, load_app_yaml
from vmark.engine import Interpolator, Template, order_attrs
from vmark.exceptions import (
    ComponentNotFoundError,
    ConfigError,
    InterpolationError,
    MissingSequenceError,
    StructuralError,
    TypeMismatchError,
    UnknownDirectiveError,
    UnknownFieldError,
    UnknownMethodError,
    VmarkError,
)
from vmark.listeners import HandlerKind, ListenerRegistry
from vmark.options import RenderOptions
from vmark.viewmodel import ViewModel


def render(template: str, data: dict | None = None, **options) -> str:
    """Render a one-off template string against `data`.

    Example:
        >>> render('<p v-if="show">{{ msg }}</p>', {"show": True, "msg": "hi"})
        '<p>hi</p>'
    """
    vm = ViewModel(Component(name="inline", template=template), options=RenderOptions(**options))
    vm.update(data or {})
    return vm.render()


__all__ = [
    "__version__",
    # Core classes
    "Component",
    "ComponentInstance",
    "ComponentRegistry",
    "Template",
    "ViewModel",
    "Interpolator",
    "ListenerRegistry",
    "HandlerKind",
    "RenderOptions",
    "AppConfig",
    # Functions
    "render",
    "order_attrs",
    "load_app_yaml",
    "load_component_from_string",
    "load_components",
    # Errors
    "VmarkError",
    "StructuralError",
    "UnknownDirectiveError",
    "UnknownFieldError",
    "TypeMismatchError",
    "MissingSequenceError",
    "InterpolationError",
    "ComponentNotFoundError",
    "UnknownMethodError",
    "ConfigError",
]
