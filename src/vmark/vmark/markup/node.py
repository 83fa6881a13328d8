"""Markup tree nodes.

Elements own their children; `parent` is a back-reference used only for
structural edits (insert-before, remove-child).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Attribute:
    """A single `key="value"` pair on an element."""

    key: str
    value: str = ""


@dataclass(eq=False)
class Node:
    """Base class for tree nodes."""

    parent: Optional["Element"] = field(default=None, init=False, repr=False)

    def clone(self) -> "Node":
        raise NotImplementedError


@dataclass(eq=False)
class Text(Node):
    """Character data. Placeholders like {{ field }} live here untouched."""

    content: str = ""

    def clone(self) -> "Text":
        return Text(self.content)


@dataclass(eq=False)
class Comment(Node):
    content: str = ""

    def clone(self) -> "Comment":
        return Comment(self.content)


@dataclass(eq=False)
class Element(Node):
    """An element with ordered attributes and ordered children."""

    tag: str = "div"
    attrs: list[Attribute] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)

    def __post_init__(self) -> None:
        for child in self.children:
            child.parent = self

    # --- Attributes ---

    def get_attr(self, key: str) -> Optional[str]:
        """Return the value of the first attribute named `key`, or None."""
        for attr in self.attrs:
            if attr.key == key:
                return attr.value
        return None

    def add_attr(self, key: str, value: str) -> None:
        self.attrs.append(Attribute(key, value))

    # --- Structure ---

    def index(self, child: Node) -> int:
        """Position of `child` among this element's children (identity match)."""
        for i, node in enumerate(self.children):
            if node is child:
                return i
        raise ValueError(f"Node is not a child of <{self.tag}>")

    def append_child(self, child: Node) -> None:
        self._adopt(child)
        self.children.append(child)

    def insert_before(self, child: Node, ref: Optional[Node]) -> None:
        """Insert `child` immediately before `ref`, or at the end if ref is None."""
        if ref is None:
            self.append_child(child)
            return
        pos = self.index(ref)
        self._adopt(child)
        self.children.insert(pos, child)

    def remove_child(self, child: Node) -> None:
        del self.children[self.index(child)]
        child.parent = None

    def replace_child(self, child: Node, replacements: list[Node]) -> None:
        """Splice `replacements` in at the position of `child`, then drop `child`."""
        for node in replacements:
            self.insert_before(node, child)
        self.remove_child(child)

    def clone(self) -> "Element":
        """Deep copy of this subtree, detached from any parent."""
        return Element(
            tag=self.tag,
            attrs=list(self.attrs),
            children=[child.clone() for child in self.children],
        )

    def _adopt(self, child: Node) -> None:
        if child.parent is not None:
            raise ValueError("Node already has a parent; remove it first")
        child.parent = self
