"""Drives a receiver from the host's frame timer and lifecycle."""
from __future__ import annotations

from typing import Optional

from PySide6 import QtCore

from ..session.controller import StreamerBotReceiver


class FrameDriver(QtCore.QObject):
    """Maps host enable/disable/quit and per-frame ticks onto a receiver.

    Dispatch happens in :meth:`tick` on the thread that owns this object,
    which is where the registered actions run.
    """

    frame_processed = QtCore.Signal(int)
    enabled_changed = QtCore.Signal(bool)

    def __init__(
        self,
        receiver: StreamerBotReceiver,
        fps: Optional[int] = None,
        parent: Optional[QtCore.QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._receiver = receiver
        self._fps = max(1, int(fps if fps is not None else receiver.settings.frame_rate_hz))

        self._timer = QtCore.QTimer(self)
        self._timer.setInterval(int(1000 / self._fps))
        self._timer.timeout.connect(self.tick)

        self._enabled = False

    # ------------------------------------------------------------------
    # Properties
    @property
    def receiver(self) -> StreamerBotReceiver:
        return self._receiver

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    @property
    def fps(self) -> int:
        return self._fps

    def set_fps(self, fps: int) -> None:
        self._fps = int(max(1, fps))
        self._timer.setInterval(int(1000 / self._fps))

    # ------------------------------------------------------------------
    # Host lifecycle
    def attach_to(self, app: QtCore.QCoreApplication) -> None:
        """Close the session when the application is about to quit."""
        app.aboutToQuit.connect(self.disable)

    def enable(self) -> bool:
        """Start the session and the frame timer; stays disabled if binding fails."""
        started = self._receiver.init()
        if not started:
            return False
        self._timer.start()
        if not self._enabled:
            self._enabled = True
            self.enabled_changed.emit(True)
        return started

    def disable(self) -> None:
        self._timer.stop()
        self._receiver.close()
        if self._enabled:
            self._enabled = False
            self.enabled_changed.emit(False)

    # ------------------------------------------------------------------
    # Frame
    def tick(self) -> int:
        processed = self._receiver.drain_and_dispatch()
        if processed:
            self.frame_processed.emit(processed)
        return processed
