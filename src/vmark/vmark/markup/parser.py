"""Markup parser and serializer.

parse() turns an HTML fragment into vmark nodes; render() turns a node back
into text. Placeholders ({{ field }}) are ordinary character data to both.
"""

from __future__ import annotations

import html
from html.parser import HTMLParser
from typing import Optional

from vmark.markup.node import Attribute, Comment, Element, Node, Text

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)

RAW_TEXT_ELEMENTS = frozenset({"script", "style"})


class _FragmentBuilder(HTMLParser):
    """Builds a node tree under a detached fragment container."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.root = Element("fragment")
        self.stack: list[Element] = [self.root]

    @property
    def current(self) -> Element:
        return self.stack[-1]

    def handle_starttag(self, tag: str, attrs: list[tuple[str, Optional[str]]]) -> None:
        el = Element(tag, attrs=_dedupe_attrs(attrs))
        self.current.append_child(el)
        if tag not in VOID_ELEMENTS:
            self.stack.append(el)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, Optional[str]]]) -> None:
        self.current.append_child(Element(tag, attrs=_dedupe_attrs(attrs)))

    def handle_endtag(self, tag: str) -> None:
        # Close up to the matching open element; stray end tags are dropped.
        for i in range(len(self.stack) - 1, 0, -1):
            if self.stack[i].tag == tag:
                del self.stack[i:]
                return

    def handle_data(self, data: str) -> None:
        children = self.current.children
        if children and isinstance(children[-1], Text):
            children[-1].content += data
        else:
            self.current.append_child(Text(data))

    def handle_comment(self, data: str) -> None:
        self.current.append_child(Comment(data))


def _dedupe_attrs(attrs: list[tuple[str, Optional[str]]]) -> list[Attribute]:
    """First occurrence of a key wins, as in browsers."""
    seen: set[str] = set()
    result = []
    for key, value in attrs:
        if key in seen:
            continue
        seen.add(key)
        result.append(Attribute(key, value if value is not None else ""))
    return result


def parse(text: str) -> list[Node]:
    """Parse a markup fragment and return its top-level nodes, detached.

    Args:
        text: Markup fragment (not a full document).

    Returns:
        Top-level nodes in source order. Each node has no parent.
    """
    builder = _FragmentBuilder()
    builder.feed(text)
    builder.close()

    nodes = list(builder.root.children)
    for node in nodes:
        builder.root.remove_child(node)
    return nodes


def parse_elements(text: str) -> list[Node]:
    """Like parse(), but drops whitespace-only text between top-level nodes."""
    return [
        node
        for node in parse(text)
        if not (isinstance(node, Text) and not node.content.strip())
    ]


def render(node: Node) -> str:
    """Serialize a node and its subtree to markup text."""
    parts: list[str] = []
    _render(node, parts, raw=False)
    return "".join(parts)


def render_children(node: Element) -> str:
    """Serialize only the children of an element (e.g. a fragment container)."""
    parts: list[str] = []
    raw = node.tag in RAW_TEXT_ELEMENTS
    for child in node.children:
        _render(child, parts, raw=raw)
    return "".join(parts)


def _render(node: Node, parts: list[str], raw: bool) -> None:
    if isinstance(node, Text):
        parts.append(node.content if raw else html.escape(node.content, quote=False))
        return
    if isinstance(node, Comment):
        parts.append(f"<!--{node.content}-->")
        return
    if not isinstance(node, Element):
        raise TypeError(f"Cannot render node of type {type(node).__name__}")

    parts.append(f"<{node.tag}")
    for attr in node.attrs:
        parts.append(f' {attr.key}="{_escape_attr(attr.value)}"')
    parts.append(">")

    if node.tag in VOID_ELEMENTS:
        return

    child_raw = node.tag in RAW_TEXT_ELEMENTS
    for child in node.children:
        _render(child, parts, raw=child_raw)
    parts.append(f"</{node.tag}>")


def _escape_attr(value: str) -> str:
    return value.replace("&", "&amp;").replace('"', "&quot;")
