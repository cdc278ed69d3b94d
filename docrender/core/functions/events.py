# docrender/core/functions/events.py
"""
EventTarget - Minimal global listener registry

Stands in for the hosting UI's document-level event target. The fullscreen
table registers its keyboard and pointer listeners here on open and removes
them on close, so listener bookkeeping can be verified without a UI.

Usage:
    events = EventTarget()
    events.add_listener("keydown", on_key)
    events.dispatch(UIEvent("keydown", key="Escape"))
    events.remove_listener("keydown", on_key)
"""
import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

logger = logging.getLogger("document-renderer")


@dataclass(frozen=True)
class UIEvent:
    """A user input event delivered by the host.

    Attributes:
        type: Event type ("keydown", "pointerdown", ...)
        key: Key name for keyboard events
        target: Logical target name for pointer events (e.g. "backdrop")
    """
    type: str
    key: Optional[str] = None
    target: Optional[str] = None


Listener = Callable[[UIEvent], None]


class EventTarget:
    """Registry of listeners keyed by event type."""

    def __init__(self):
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)

    def add_listener(self, event_type: str, listener: Listener) -> None:
        """Register listener; registering the same callable twice is a no-op."""
        listeners = self._listeners[event_type]
        if listener not in listeners:
            listeners.append(listener)

    def remove_listener(self, event_type: str, listener: Listener) -> None:
        listeners = self._listeners.get(event_type)
        if listeners and listener in listeners:
            listeners.remove(listener)
            if not listeners:
                del self._listeners[event_type]

    def listener_count(self, event_type: Optional[str] = None) -> int:
        if event_type is not None:
            return len(self._listeners.get(event_type, ()))
        return sum(len(listeners) for listeners in self._listeners.values())

    def dispatch(self, event: UIEvent) -> int:
        """Deliver event to every listener registered for its type.

        Listeners may remove themselves while being dispatched.

        Returns:
            Number of listeners invoked
        """
        listeners = list(self._listeners.get(event.type, ()))
        for listener in listeners:
            listener(event)
        return len(listeners)


__all__ = [
    "UIEvent",
    "Listener",
    "EventTarget",
]
