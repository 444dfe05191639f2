"""Session lifecycle, settings and diagnostics."""

from .controller import StreamerBotReceiver
from .diagnostics import Diagnostics
from .settings import ReceiverSettings, load_settings, save_settings

__all__ = [
    "Diagnostics",
    "ReceiverSettings",
    "StreamerBotReceiver",
    "load_settings",
    "save_settings",
]
