from typing import Any, Dict

import pytest

from streamerbot_udp.session.settings import (
    DEFAULT_PORT,
    ReceiverSettings,
    load_settings,
    save_settings,
)


class DummySettings:
    def __init__(self):
        self.data: Dict[str, Any] = {}

    def value(self, key: str, default: Any = None):
        return self.data.get(key, default)

    def setValue(self, key: str, value: Any) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


def test_load_settings_defaults_when_empty():
    result = load_settings(DummySettings())
    assert result == ReceiverSettings()
    assert result.port == DEFAULT_PORT == 5069
    assert result.poll_interval_s == pytest.approx(0.5)


def test_load_settings_clamps_values():
    qsettings = DummySettings()
    qsettings.setValue("streamerbot/port", 70000)
    qsettings.setValue("streamerbot/poll_interval_ms", 1)
    qsettings.setValue("streamerbot/frame_rate_hz", 1000)
    qsettings.setValue("streamerbot/debug_log", "true")

    result = load_settings(qsettings)
    assert result.port == 65535
    assert result.poll_interval_ms == 50
    assert result.frame_rate_hz == 240
    assert result.debug_log is True


def test_load_settings_falls_back_on_garbage():
    qsettings = DummySettings()
    qsettings.setValue("streamerbot/port", "not-a-port")
    qsettings.setValue("streamerbot/poll_interval_ms", None)
    qsettings.setValue("streamerbot/frame_rate_hz", object())

    result = load_settings(qsettings)
    assert result.port == DEFAULT_PORT
    assert result.poll_interval_ms == 500
    assert result.frame_rate_hz == 60


def test_save_then_load_preserves_settings():
    qsettings = DummySettings()
    settings = ReceiverSettings(port=6000, poll_interval_ms=250, frame_rate_hz=30, debug_log=True)

    save_settings(qsettings, settings)

    assert qsettings.value("streamerbot/port") == 6000
    assert load_settings(qsettings) == settings


def test_poll_interval_property_is_clamped():
    assert ReceiverSettings(poll_interval_ms=0).poll_interval_s == pytest.approx(0.05)
