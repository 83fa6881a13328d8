"""ViewModel - the runtime side of a component instance.

Holds the data context, runs methods and computed fields, renders the
template and routes events from rendered markup back into data or methods.
Every render is a full re-render from a snapshot.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from vmark.component import Component, ComponentInstance, ComponentRegistry
from vmark.engine.template import Template
from vmark.exceptions import UnknownFieldError, UnknownMethodError
from vmark.listeners import HandlerKind, ListenerRegistry
from vmark.markup.node import Node
from vmark.markup.parser import parse_elements
from vmark.options import RenderOptions

log = logging.getLogger(__name__)


class ViewModel:
    """Data, methods and rendering for one component instance."""

    def __init__(
        self,
        component: Union[Component, ComponentInstance],
        registry: Optional[ComponentRegistry] = None,
        listeners: Optional[ListenerRegistry] = None,
        options: Optional[RenderOptions] = None,
    ):
        if isinstance(component, Component):
            component = component.instance()
        self.instance = component
        self.registry = registry if registry is not None else ComponentRegistry([component.component])
        self.listeners = listeners if listeners is not None else ListenerRegistry()
        self.options = options or RenderOptions()
        self.data: dict[str, Any] = component.initial_data()

    @property
    def component(self) -> Component:
        return self.instance.component

    # --- Data ---

    def get(self, field: str) -> Any:
        if field not in self.data:
            raise UnknownFieldError(field)
        return self.data[field]

    def set(self, field: str, value: Any) -> None:
        self.data[field] = value

    def update(self, values: Mapping[str, Any]) -> None:
        self.data.update(values)

    def snapshot(self) -> dict[str, Any]:
        """Data context for one render: data, then computed fields, then props."""
        data = dict(self.data)
        for name, func in self.component.computed.items():
            data[name] = func(self)
        data.update(self.instance.props)
        return data

    # --- Methods ---

    def go(self, method: str, *args: Any) -> Any:
        """Call a component method with this view model as first argument."""
        func = self.component.methods.get(method)
        if func is None:
            raise UnknownMethodError(method)
        return func(self, *args)

    # --- Rendering ---

    def render(self) -> str:
        """Render the component to markup text.

        Listeners are re-collected, so they describe the latest output.
        """
        self.listeners.clear()
        return self._execute()

    def render_nodes(self) -> list[Node]:
        """Render and re-parse for splicing into a parent tree."""
        return parse_elements(self._execute())

    def _execute(self) -> str:
        tmpl = Template(self.instance, self.registry, self.listeners, self.options)
        return tmpl.execute(self.snapshot())

    # --- Events ---

    def dispatch(self, event: str, attrs: Mapping[str, str], value: Any = None) -> bool:
        """Route an event raised by a rendered element.

        Args:
            event: Event type, e.g. "click" or "input".
            attrs: Attributes of the element that raised it, as rendered.
            value: New value of the element, for two-way bound inputs.

        Returns:
            True if any handler ran. Call render() again to see the effect.
        """
        handled = False
        for handler in self.listeners.handlers(event):
            target = attrs.get(event)
            if target is None:
                continue
            if handler is HandlerKind.MODEL and target in self.data:
                log.debug("v-model %s <- %r", target, value)
                self.set(target, value)
                handled = True
            elif handler is HandlerKind.EVENT and target in self.component.methods:
                log.debug("v-on:%s -> %s()", event, target)
                self.go(target)
                handled = True
        return handled
