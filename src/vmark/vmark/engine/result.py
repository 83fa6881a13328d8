"""Traversal results.

Every visit in the traversal engine reports how the visited position changed.
Handlers that restructure the tree have already done the edit when they
return; the result only tells the caller where to continue.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from vmark.markup.node import Node


@dataclass(frozen=True)
class Unchanged:
    """The node stays at its position; continue with its next sibling."""

    node: Node


@dataclass(frozen=True)
class Replaced:
    """The node was swapped for already-executed nodes at the same position."""

    nodes: tuple[Node, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Removed:
    """The node left the tree. Anything now at its position has not been visited yet."""


TraversalResult = Union[Unchanged, Replaced, Removed]
