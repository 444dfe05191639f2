"""Receiver settings stored via QSettings."""
from __future__ import annotations

from dataclasses import dataclass

from PySide6.QtCore import QSettings

DEFAULT_PORT = 5069
DEFAULT_POLL_INTERVAL_MS = 500
DEFAULT_FRAME_RATE_HZ = 60


@dataclass(frozen=True)
class ReceiverSettings:
    # The port Streamer.bot sends to, as set in each UDP action
    port: int = DEFAULT_PORT
    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS
    frame_rate_hz: int = DEFAULT_FRAME_RATE_HZ
    debug_log: bool = False

    @property
    def poll_interval_s(self) -> float:
        return _clamp_poll_interval(self.poll_interval_ms) / 1000.0


def _clamp_port(value: int) -> int:
    return max(1, min(65535, int(value)))


def _clamp_poll_interval(value: int) -> int:
    return max(50, min(5000, int(value)))


def _clamp_rate(value: int) -> int:
    return max(1, min(240, int(value)))


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, str):
        return value.lower() in {"1", "true", "yes", "on"}
    return bool(value)


def load_settings(qsettings: QSettings) -> ReceiverSettings:
    """Load receiver settings from QSettings."""

    port_raw = qsettings.value("streamerbot/port", DEFAULT_PORT)
    poll_raw = qsettings.value("streamerbot/poll_interval_ms", DEFAULT_POLL_INTERVAL_MS)
    rate_raw = qsettings.value("streamerbot/frame_rate_hz", DEFAULT_FRAME_RATE_HZ)
    debug_log_raw = qsettings.value("streamerbot/debug_log", False)

    try:
        port = _clamp_port(int(port_raw))
    except (TypeError, ValueError):
        port = DEFAULT_PORT

    try:
        poll_interval_ms = _clamp_poll_interval(int(poll_raw))
    except (TypeError, ValueError):
        poll_interval_ms = DEFAULT_POLL_INTERVAL_MS

    try:
        rate = _clamp_rate(int(rate_raw))
    except (TypeError, ValueError):
        rate = DEFAULT_FRAME_RATE_HZ

    return ReceiverSettings(
        port=port,
        poll_interval_ms=poll_interval_ms,
        frame_rate_hz=rate,
        debug_log=_parse_bool(debug_log_raw),
    )


def save_settings(qsettings: QSettings, settings: ReceiverSettings) -> None:
    """Persist receiver settings to QSettings."""

    qsettings.setValue("streamerbot/port", _clamp_port(settings.port))
    qsettings.setValue("streamerbot/poll_interval_ms", _clamp_poll_interval(settings.poll_interval_ms))
    qsettings.setValue("streamerbot/frame_rate_hz", _clamp_rate(settings.frame_rate_hz))
    qsettings.setValue("streamerbot/debug_log", bool(settings.debug_log))
