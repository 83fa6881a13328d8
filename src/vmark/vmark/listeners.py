"""Listener registry.

Records which event types the rendered markup listens for, and which
built-in handler each one dispatches to.
"""

from __future__ import annotations

from enum import Enum


class HandlerKind(str, Enum):
    """Built-in event handlers."""

    EVENT = "v-on"  # call a component method by name
    MODEL = "v-model"  # write the element's value back into a data field


class ListenerRegistry:
    """Event type -> handler kinds, in registration order."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[HandlerKind]] = {}

    def add_event_listener(self, event: str, handler: HandlerKind) -> None:
        handlers = self._listeners.setdefault(event, [])
        if handler not in handlers:
            handlers.append(handler)

    def handlers(self, event: str) -> list[HandlerKind]:
        return list(self._listeners.get(event, []))

    def events(self) -> list[str]:
        return list(self._listeners)

    def clear(self) -> None:
        self._listeners.clear()

    def __contains__(self, event: object) -> bool:
        return event in self._listeners

    def __len__(self) -> int:
        return len(self._listeners)
