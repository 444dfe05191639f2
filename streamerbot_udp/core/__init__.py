"""Event model, wire codec and the structures shared between threads."""

from .codec import decode, encode
from .errors import BindError, DecodeError, HandlerError, StreamerBotUDPError
from .event import EventRecord
from .inbound_queue import InboundQueue
from .registry import HandlerRegistry

__all__ = [
    "BindError",
    "DecodeError",
    "EventRecord",
    "HandlerError",
    "HandlerRegistry",
    "InboundQueue",
    "StreamerBotUDPError",
    "decode",
    "encode",
]
