"""Player event types and dispatch to registered listeners."""

from __future__ import annotations

import enum
from collections import defaultdict
from typing import Any, Callable

Listener = Callable[..., Any]


class EventType(enum.IntEnum):
    LOGIN = 0
    LOGOUT = 1
    CREATE_ROLE = 2


class EventProcess:
    """Calls the listeners of an event type, in registration order."""

    def __init__(self) -> None:
        self._listeners: defaultdict[EventType, list[Listener]] = defaultdict(list)

    def register(self, event_type: EventType, listener: Listener) -> None:
        """Add a listener called as listener(event_type, *args)."""
        self._listeners[EventType(event_type)].append(listener)

    def handle(self, event_type: EventType, *args) -> None:
        for listener in list(self._listeners.get(EventType(event_type), ())):
            listener(event_type, *args)