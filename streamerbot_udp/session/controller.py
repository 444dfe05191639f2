"""Session controller driven by the host's lifecycle callbacks."""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Optional

from ..core.errors import BindError, DecodeError
from ..core.event import EventRecord
from ..core.inbound_queue import InboundQueue
from ..core.registry import EventCallback, HandlerRegistry
from ..dispatch.dispatcher import Dispatcher
from ..net.udp_receiver import LOOPBACK_HOST, ReceiverState, UdpReceiverService
from .diagnostics import ConsoleSink, Diagnostics
from .settings import ReceiverSettings


class StreamerBotReceiver:
    """Owns one receiver session, the event queue and the action registry.

    The host calls :meth:`init` when it is enabled, :meth:`close` when it is
    disabled or quits, and :meth:`drain_and_dispatch` once per frame. Actions
    are registered in :meth:`initialise_events` (override it in a subclass)
    or in the ``on_initialise`` hook; both run after every successful
    :meth:`init` because the registry is rebuilt each time.

    Queued records survive :meth:`close` and are delivered after the next
    :meth:`init`; :meth:`reset` discards them.
    """

    def __init__(
        self,
        settings: Optional[ReceiverSettings] = None,
        *,
        console: Optional[ConsoleSink] = None,
        on_initialise: Optional[Callable[["StreamerBotReceiver"], None]] = None,
    ) -> None:
        self.settings = settings or ReceiverSettings()
        self.diagnostics = Diagnostics(console, logging.getLogger(__name__))
        self.on_initialise = on_initialise

        self._inbound = InboundQueue()
        self._registry = HandlerRegistry()
        self._dispatcher = Dispatcher(self._inbound, lambda: self._registry, self.diagnostics.report)
        self._receiver: Optional[UdpReceiverService] = None

    # ------------------------------------------------------------------
    # Properties
    @property
    def port(self) -> int:
        return self.settings.port

    @property
    def is_running(self) -> bool:
        return self._receiver is not None and self._receiver.is_running

    @property
    def state(self) -> ReceiverState:
        if self._receiver is None:
            return ReceiverState.IDLE
        return self._receiver.state

    @property
    def pending(self) -> int:
        return len(self._inbound)

    @property
    def registry(self) -> HandlerRegistry:
        return self._registry

    # ------------------------------------------------------------------
    # Lifecycle
    def init(self) -> bool:
        """Start a session and rebuild the action registry.

        Returns ``False`` when the port could not be bound. Calling this while
        a session is running only reports a warning.
        """
        self.diagnostics.info(
            f"Attempting to initialise StreamerBot UDP Receiver: {LOOPBACK_HOST}:{self.port}"
        )
        if self._receiver is not None:
            if self._receiver.is_running:
                self.diagnostics.warning(
                    "Attempted to start StreamerBot UDP Receiver thread but thread was already running."
                )
                return True
            # Thread died on a socket error; release it before starting over
            self.close()

        receiver = UdpReceiverService(
            self.port,
            on_record=self._on_record,
            on_error=self._on_decode_error,
            on_status=self.diagnostics.report,
            poll_interval_s=self.settings.poll_interval_s,
        )
        try:
            receiver.start()
        except BindError as exc:
            self.diagnostics.error(str(exc))
            return False
        self._receiver = receiver

        self._registry = HandlerRegistry()
        self.initialise_events()
        if self.on_initialise is not None:
            self.on_initialise(self)
        return True

    def initialise_events(self) -> None:
        """Register actions here, e.g. ``self.register("Test", self.on_test)``."""

    def close(self) -> None:
        """Stop the running session, if any."""
        receiver = self._receiver
        if receiver is None:
            return
        self._receiver = None
        receiver.stop()

    def reset(self) -> bool:
        """Close the current session, drop queued events and start a new one."""
        self.close()
        dropped = self._inbound.clear()
        if dropped:
            self.diagnostics.warning(
                f"Discarded {dropped} StreamerBot event(s) that were not dispatched before reset."
            )
        return self.init()

    def apply_settings(self, settings: ReceiverSettings) -> None:
        """Use new settings, restarting a running session if the port changed."""
        previous = self.settings
        self.settings = settings
        if self._receiver is not None and (
            previous.port != settings.port or previous.poll_interval_ms != settings.poll_interval_ms
        ):
            self.reset()

    def set_port(self, port: int) -> None:
        self.apply_settings(replace(self.settings, port=int(port)))

    # ------------------------------------------------------------------
    # Actions
    def register(self, event_type: str, callback: EventCallback) -> None:
        """Register ``callback`` for events whose ``Event`` equals ``event_type``."""
        self._registry.register(event_type, callback)

    def drain_and_dispatch(self) -> int:
        """Dispatch everything queued so far. Call from the host's main thread."""
        return self._dispatcher.drain_and_dispatch()

    # ------------------------------------------------------------------
    # Receiver thread callbacks
    def _on_record(self, record: EventRecord) -> None:
        if self.settings.debug_log:
            self.diagnostics.info(f"StreamerBot event received: {record}")
        self._inbound.put(record)

    def _on_decode_error(self, exc: DecodeError) -> None:
        self.diagnostics.warning(str(exc))
