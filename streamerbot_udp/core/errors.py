"""Error types reported by the receiver.

None of these escape to the host except :class:`BindError`, which the session
controller catches and reports. They exist so every failure has a readable
``str()`` for the diagnostic sink.
"""
from __future__ import annotations

from typing import Callable, Optional


class StreamerBotUDPError(Exception):
    """Base class for receiver errors."""


class BindError(StreamerBotUDPError):
    """The UDP socket could not be bound; the session does not start."""

    def __init__(self, host: str, port: int, cause: Optional[BaseException] = None):
        self.host = host
        self.port = port
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Could not bind StreamerBot UDP Receiver to {host}:{port}{detail}")


class DecodeError(StreamerBotUDPError):
    """A datagram could not be turned into an :class:`EventRecord`."""

    PREVIEW_BYTES = 200

    def __init__(self, reason: str, payload: bytes = b""):
        self.reason = reason
        self.payload = payload
        preview = payload[: self.PREVIEW_BYTES]
        super().__init__(
            f"Could not decode StreamerBot event: {reason} "
            f"(length={len(payload)}) preview={preview!r}"
        )


class HandlerError(StreamerBotUDPError):
    """A registered callback raised while handling an event."""

    def __init__(self, event_type: str, callback: Callable[..., object], cause: BaseException):
        self.event_type = event_type
        self.callback = callback
        self.cause = cause
        name = getattr(callback, "__qualname__", None) or repr(callback)
        super().__init__(
            f"Action {name} for StreamerBot event \"{event_type}\" failed: "
            f"{type(cause).__name__}: {cause}"
        )
