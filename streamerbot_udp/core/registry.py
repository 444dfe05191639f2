"""Event type -> ordered callbacks table."""
from __future__ import annotations

from typing import Callable, Dict, Iterator, List, Optional, Tuple

from .event import EventRecord

EventCallback = Callable[[EventRecord], None]


class HandlerRegistry:
    """Maps a Streamer.bot event name to the actions registered for it.

    Names must match the ``Event`` value sent by Streamer.bot exactly (case
    sensitive). Registering a name twice keeps both actions, in order. Only
    the frame thread touches a registry.
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, List[EventCallback]] = {}

    def register(self, event_type: str, callback: EventCallback) -> None:
        if not isinstance(event_type, str) or not event_type:
            raise ValueError("event_type must be a non-empty string")
        if not callable(callback):
            raise TypeError(f"callback for {event_type!r} is not callable: {callback!r}")
        self._handlers.setdefault(event_type, []).append(callback)

    def lookup(self, event_type: str) -> Optional[Tuple[EventCallback, ...]]:
        callbacks = self._handlers.get(event_type)
        if not callbacks:
            return None
        return tuple(callbacks)

    def event_types(self) -> Iterator[str]:
        return iter(list(self._handlers))

    def __contains__(self, event_type: object) -> bool:
        return event_type in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)
