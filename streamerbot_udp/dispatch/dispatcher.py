"""Runs queued events through the registered actions on the frame thread."""
from __future__ import annotations

import logging
from typing import Callable

from ..core.errors import HandlerError
from ..core.event import EventRecord
from ..core.inbound_queue import InboundQueue
from ..core.registry import HandlerRegistry

UNHANDLED_EVENT_MESSAGE = (
    'StreamerBot sent event type "{event_type}" but no matching action is '
    "registered for this event"
)


class Dispatcher:
    """Drains an :class:`InboundQueue` into the actions of a registry.

    ``registry_getter`` is called once per drain so the controller can swap
    in a fresh registry on re-initialisation. ``report`` is called as
    ``report(level, message, exc_info=None)`` for every diagnostic.
    """

    def __init__(
        self,
        inbound: InboundQueue,
        registry_getter: Callable[[], HandlerRegistry],
        report: Callable[..., None],
    ) -> None:
        self._inbound = inbound
        self._registry_getter = registry_getter
        self._report = report

    def drain_and_dispatch(self) -> int:
        """Process every record already queued; returns how many were taken."""

        registry = self._registry_getter()
        processed = 0
        for record in self._inbound.drain():
            processed += 1
            self._dispatch(registry, record)
        return processed

    def _dispatch(self, registry: HandlerRegistry, record: EventRecord) -> None:
        if not record.is_deliverable:
            return

        callbacks = registry.lookup(record.event_type)
        if callbacks is None:
            self._report(
                logging.WARNING, UNHANDLED_EVENT_MESSAGE.format(event_type=record.event_type)
            )
            return

        for callback in callbacks:
            try:
                callback(record)
            except Exception as exc:
                error = HandlerError(record.event_type, callback, exc)
                self._report(logging.ERROR, str(error), exc_info=exc)
