"""Directive handlers.

A directive is an attribute whose key starts with `v-`. The key may carry an
argument after a colon (`v-bind:disabled`, `v-on:click`).

Handlers run in a fixed order per element (see ATTR_ORDER) so that a loop
expands before a conditional is evaluated against each copy.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Mapping, Sequence
from typing import TYPE_CHECKING, Any, Optional, Union

from vmark.engine.interpolate import format_value, literal
from vmark.engine.result import Removed, TraversalResult, Unchanged
from vmark.exceptions import (
    MissingSequenceError,
    TypeMismatchError,
    UnknownFieldError,
)
from vmark.listeners import HandlerKind, ListenerRegistry
from vmark.markup.node import Attribute, Element, Node, Text

if TYPE_CHECKING:
    from vmark.component import ComponentInstance

log = logging.getLogger(__name__)

V = "v-"
V_BIND = "v-bind"
V_FOR = "v-for"
V_IF = "v-if"
V_MODEL = "v-model"
V_ON = "v-on"

ATTR_ORDER = [V_FOR, V_IF, V_MODEL, V_ON, V_BIND]
DIRECTIVES = frozenset(ATTR_ORDER)

# Accepted shapes of data context values.
Value = Union[str, bool, int, float, None, Sequence["Value"], Mapping[str, "Value"]]

_LOOP_EXPR = re.compile(r"^\s*([A-Za-z_]\w*)\s+in\s+(\S+)\s*$")
_PLACEHOLDER = re.compile(r"\{\{.*?\}\}", re.DOTALL)


def is_directive(key: str) -> bool:
    return key.startswith(V)


def split_directive(key: str) -> tuple[str, str]:
    """Split `v-bind:disabled` into (`v-bind`, `disabled`)."""
    directive, _, arg = key.partition(":")
    return directive, arg


def order_attrs(attrs: list[Attribute]) -> list[Attribute]:
    """Return attributes with directives first, in execution order.

    Known directives follow ATTR_ORDER, unknown `v-` keys come after them so
    dispatch can reject them, and plain attributes keep their source order at
    the end. Ties keep their relative order.
    """

    def rank(attr: Attribute) -> tuple[int, int]:
        if not is_directive(attr.key):
            return (2, 0)
        directive, _ = split_directive(attr.key)
        if directive in DIRECTIVES:
            return (0, ATTR_ORDER.index(directive))
        return (1, 0)

    return sorted(attrs, key=rank)


def capitalize(name: str) -> str:
    """Upper-case the first letter of every word, leaving the rest alone.

    `message` -> `Message`, `my-prop` -> `My-Prop`, `userName` -> `UserName`.
    """
    return re.sub(r"(?:^|(?<=\W))(\w)", lambda m: m.group(1).upper(), name)


def lookup(data: Mapping[str, Any], field: str) -> Value:
    if field not in data:
        raise UnknownFieldError(field)
    return data[field]


# --- v-if ---


def execute_if(node: Element, field: str, data: Mapping[str, Any]) -> TraversalResult:
    """Keep the element only if `field` exists and holds boolean true.

    A missing field, a non-boolean value and `false` all remove the element.
    """
    value = data.get(field)
    if isinstance(value, bool) and value:
        return Unchanged(node)

    log.debug("v-if=%s removed <%s>", field, node.tag)
    _parent(node).remove_child(node)
    return Removed()


# --- v-for ---


def parse_loop(expr: str) -> tuple[str, str]:
    """Split `item in items` into (`item`, `items`)."""
    match = _LOOP_EXPR.match(expr)
    if match is None:
        raise MissingSequenceError(expr, "Malformed loop expression")
    return match.group(1), match.group(2)


def execute_for(
    node: Element, expr: str, data: dict[str, Any], ids: Iterator[int]
) -> TraversalResult:
    """Expand the element once per item of the source sequence.

    Each copy gets a fresh variable name (`item0`, `item1`, ...) bound in the
    data context, so nested directives and placeholders resolve per copy.
    Copies are inserted where the element was; the element itself is removed.
    """
    name, field = parse_loop(expr)
    if field not in data:
        raise MissingSequenceError(field)
    items = data[field]
    if isinstance(items, (str, bytes)) or not isinstance(items, Sequence):
        raise MissingSequenceError(field, "Data field is not a sequence")

    parent = _parent(node)
    for item in items:
        key = f"{name}{next(ids)}"
        copy = node.clone()
        substitute_name(copy, name, key)
        data[key] = item
        parent.insert_before(copy, node)

    log.debug("v-for=%r expanded <%s> into %d copies", expr, node.tag, len(items))
    parent.remove_child(node)
    return Removed()


def substitute_name(node: Node, name: str, key: str) -> None:
    """Rename the loop variable `name` to `key` throughout a subtree.

    Only data references are rewritten: directive attribute values and the
    inside of {{ }} placeholders, where `name` appears as a whole identifier.
    """
    ident = re.compile(rf"(?<![\w.]){re.escape(name)}(?!\w)")

    def in_placeholders(text: str) -> str:
        return _PLACEHOLDER.sub(lambda m: ident.sub(key, m.group(0)), text)

    if isinstance(node, Text):
        node.content = in_placeholders(node.content)
        return
    if not isinstance(node, Element):
        return

    node.attrs = [
        Attribute(
            attr.key,
            ident.sub(key, attr.value) if is_directive(attr.key) else in_placeholders(attr.value),
        )
        for attr in node.attrs
    ]
    for child in node.children:
        substitute_name(child, name, key)


# --- v-bind ---


def execute_bind(
    node: Element,
    sub: Optional["ComponentInstance"],
    key: str,
    field: str,
    data: Mapping[str, Any],
) -> None:
    """Bind `field` to attribute `key`, or to the prop of a subcomponent."""
    value = lookup(data, field)

    prop = capitalize(key)
    if sub is not None and sub.has_prop(prop):
        sub.set_prop(prop, value)
        return

    # Boolean false drops the attribute entirely.
    if isinstance(value, bool) and not value:
        return

    node.add_attr(key, literal(format_value(value)))


# --- v-model ---


def execute_model(
    node: Element, field: str, data: Mapping[str, Any], listeners: ListenerRegistry
) -> None:
    """Two-way bind an input-like element to a string field."""
    value = lookup(data, field)
    if not isinstance(value, str):
        raise TypeMismatchError(field, "string", value)

    event = "input"
    node.add_attr(event, field)
    listeners.add_event_listener(event, HandlerKind.MODEL)
    node.add_attr("value", literal(value))


# --- v-on ---


def execute_on(node: Element, event: str, method: str, listeners: ListenerRegistry) -> None:
    node.add_attr(event, method)
    listeners.add_event_listener(event, HandlerKind.EVENT)


def _parent(node: Node) -> Element:
    if node.parent is None:
        raise ValueError(f"Cannot restructure detached node: {node!r}")
    return node.parent
