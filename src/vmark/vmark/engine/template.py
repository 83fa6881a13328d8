"""Template execution.

A Template runs the directives of one component instance against a data
context, then interpolates placeholders:

    markup -> parse -> directive traversal -> render -> interpolate -> text

Each execution owns its loop-id counter; nested subcomponents get their own
Template and therefore their own counter.
"""

from __future__ import annotations

import itertools
import logging
from typing import TYPE_CHECKING, Any, Optional

from vmark.engine.directives import (
    V_BIND,
    V_FOR,
    V_IF,
    V_MODEL,
    V_ON,
    execute_bind,
    execute_for,
    execute_if,
    execute_model,
    execute_on,
    is_directive,
    order_attrs,
    split_directive,
)
from vmark.engine.interpolate import Interpolator, literal
from vmark.engine.result import Removed, Replaced, TraversalResult, Unchanged
from vmark.exceptions import StructuralError, UnknownDirectiveError
from vmark.listeners import ListenerRegistry
from vmark.markup.node import Attribute, Comment, Element, Node, Text
from vmark.markup.parser import parse_elements, render_children
from vmark.options import RenderOptions

if TYPE_CHECKING:
    from vmark.component import Component, ComponentInstance, ComponentRegistry

log = logging.getLogger(__name__)


class Template:
    """Executes the template of a component instance."""

    def __init__(
        self,
        instance: "ComponentInstance",
        registry: "ComponentRegistry",
        listeners: ListenerRegistry,
        options: Optional[RenderOptions] = None,
    ):
        self.instance = instance
        self.registry = registry
        self.listeners = listeners
        self.options = options or RenderOptions()
        self.interpolator = Interpolator(
            autoescape=self.options.autoescape, strict=self.options.strict
        )
        self._ids = itertools.count()

    @property
    def component(self) -> "Component":
        return self.instance.component

    def execute(self, data: dict[str, Any]) -> str:
        """Execute the template with the given data to be rendered.

        `data` is mutated: every loop iteration binds a fresh key in it.

        Returns:
            Fully resolved markup text.

        Raises:
            VmarkError: Any directive or interpolation failure. Nothing is
                returned for a failed render.
        """
        self._ids = itertools.count()

        source = self.component.template
        nodes = parse_elements(source)
        if len(nodes) != 1 or not isinstance(nodes[0], Element):
            raise StructuralError(len(nodes), source)

        # The container gives the root a parent, so root-level v-if and
        # v-for restructure like any other element.
        fragment = Element("fragment")
        fragment.append_child(nodes[0])

        self._execute_children(fragment, data)

        markup = render_children(fragment)
        log.debug("Executed template of %s (%d chars)", self.instance.name, len(markup))
        return self.interpolator.render(markup, data)

    def execute_traversal(self, node: Node, data: dict[str, Any]) -> TraversalResult:
        """Recursively traverse the tree and execute directives on elements."""
        # Text is left for interpolation.
        if not isinstance(node, Element):
            return Unchanged(node)

        sub = self.registry.resolve(self.component, node.tag)

        node.attrs = order_attrs(node.attrs)

        for attr in list(node.attrs):
            if not is_directive(attr.key):
                continue
            node.attrs.remove(attr)
            result = self.execute_attr(node, sub, attr, data)
            # The element left the tree; its remaining attributes and
            # children went with it (or into the loop copies).
            if not isinstance(result, Unchanged):
                return result

        if sub is not None:
            return self._execute_sub(node, sub)

        self._execute_children(node, data)
        return Unchanged(node)

    def execute_attr(
        self,
        node: Element,
        sub: Optional["ComponentInstance"],
        attr: Attribute,
        data: dict[str, Any],
    ) -> TraversalResult:
        """Dispatch a single directive attribute to its handler."""
        directive, arg = split_directive(attr.key)
        log.debug("<%s> %s=%r", node.tag, attr.key, attr.value)

        if directive == V_IF:
            return execute_if(node, attr.value, data)
        elif directive == V_FOR:
            return execute_for(node, attr.value, data, self._ids)
        elif directive == V_BIND:
            if not arg:
                raise UnknownDirectiveError(attr.key, "Directive requires an argument")
            execute_bind(node, sub, arg, attr.value, data)
        elif directive == V_MODEL:
            execute_model(node, attr.value, data, self.listeners)
        elif directive == V_ON:
            if not arg:
                raise UnknownDirectiveError(attr.key, "Directive requires an argument")
            execute_on(node, arg, attr.value, self.listeners)
        else:
            raise UnknownDirectiveError(directive)
        return Unchanged(node)

    def _execute_children(self, node: Element, data: dict[str, Any]) -> None:
        i = 0
        while i < len(node.children):
            result = self.execute_traversal(node.children[i], data)
            if isinstance(result, Removed):
                # Whatever now sits at i (next sibling or loop copies) is unvisited.
                continue
            if isinstance(result, Replaced):
                i += len(result.nodes)
                continue
            i += 1

    def _execute_sub(self, node: Element, sub: "ComponentInstance") -> Replaced:
        """Render a subcomponent and splice its nodes in place of `node`.

        The subcomponent owns its markup, so the children of `node` are never
        traversed.
        """
        from vmark.viewmodel import ViewModel

        vm = ViewModel(sub, registry=self.registry, listeners=self.listeners, options=self.options)
        nodes = vm.render_nodes()
        for child in nodes:
            _freeze(child)

        parent = node.parent
        if parent is None:
            raise ValueError(f"Cannot splice subcomponent {sub.name}: <{node.tag}> is detached")
        parent.replace_child(node, nodes)
        log.debug("Spliced subcomponent %s for <%s>", sub.name, node.tag)
        return Replaced(tuple(nodes))


def _freeze(node: Node) -> None:
    """Mark already interpolated output so the parent pass leaves it as is."""
    if isinstance(node, (Text, Comment)):
        node.content = literal(node.content)
        return
    if not isinstance(node, Element):
        return
    node.attrs = [Attribute(attr.key, literal(attr.value)) for attr in node.attrs]
    for child in node.children:
        _freeze(child)
