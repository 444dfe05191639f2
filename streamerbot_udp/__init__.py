"""Receive Streamer.bot UDP events and dispatch them on the host's frame."""

from .core.event import EventRecord
from .session.controller import StreamerBotReceiver
from .session.settings import ReceiverSettings
from .version import APP_VERSION

__all__ = ["APP_VERSION", "EventRecord", "ReceiverSettings", "StreamerBotReceiver"]
