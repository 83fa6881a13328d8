"""vmark.markup - element tree, parser and serializer."""

from vmark.markup.node import Attribute, Comment, Element, Node, Text
from vmark.markup.parser import parse, parse_elements, render, render_children

__all__ = [
    "Attribute",
    "Comment",
    "Element",
    "Node",
    "Text",
    "parse",
    "parse_elements",
    "render",
    "render_children",
]
