"""Threaded UDP receiver for Streamer.bot events."""
from __future__ import annotations

import enum
import logging
import socket
import threading
from typing import Callable, Optional, Tuple

from ..core.codec import MAX_DATAGRAM_SIZE, decode
from ..core.errors import BindError, DecodeError
from ..core.event import EventRecord

logger = logging.getLogger(__name__)

LOOPBACK_HOST = "127.0.0.1"


class ReceiverState(str, enum.Enum):
    IDLE = "idle"
    STARTING = "starting"
    LISTENING = "listening"
    STOPPING = "stopping"


class UdpReceiverService:
    """A background thread that decodes JSON events arriving on a UDP port.

    The socket is bound on loopback only. Decoded records go to ``on_record``,
    decode failures to ``on_error`` and status lines to
    ``on_status(level, message, exc_info=None)``. All three are called from
    the receiver thread, so ``on_record`` should only hand the record to a
    thread-safe queue. Without ``on_status`` the lines go to the module logger.
    """

    def __init__(
        self,
        port: int,
        on_record: Callable[[EventRecord], None],
        on_error: Optional[Callable[[DecodeError], None]] = None,
        on_status: Optional[Callable[..., None]] = None,
        *,
        poll_interval_s: float = 0.5,
        join_timeout_s: float = 1.0,
    ):
        self.port = port
        self.on_record = on_record
        self.on_error = on_error
        self.on_status = on_status
        self.poll_interval_s = poll_interval_s
        self.join_timeout_s = join_timeout_s
        self._stop = threading.Event()
        self._sock: Optional[socket.socket] = None
        self._thread: Optional[threading.Thread] = None
        self._state = ReceiverState.IDLE
        self._state_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Properties
    @property
    def state(self) -> ReceiverState:
        with self._state_lock:
            return self._state

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def bound_address(self) -> Optional[Tuple[str, int]]:
        sock = self._sock
        if sock is None:
            return None
        try:
            host, port = sock.getsockname()[:2]
        except OSError:
            return None
        return host, port

    def _set_state(self, state: ReceiverState) -> None:
        with self._state_lock:
            self._state = state

    # ------------------------------------------------------------------
    # Lifecycle
    def start(self) -> None:
        """Bind the socket and start the receiver thread.

        Does nothing if the thread is already running. Raises
        :class:`BindError` if the port cannot be bound, in which case no
        thread is started.
        """
        if self.is_running:
            return
        self._set_state(ReceiverState.STARTING)
        self._stop.clear()
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            sock.bind((LOOPBACK_HOST, self.port))
        except OSError as exc:
            sock.close()
            self._set_state(ReceiverState.IDLE)
            raise BindError(LOOPBACK_HOST, self.port, exc) from exc
        # Timeout so the stop event is polled even when nothing arrives
        sock.settimeout(self.poll_interval_s)
        self._sock = sock

        self._thread = threading.Thread(
            target=self._run,
            args=(sock,),
            name="UdpReceiverService",
            daemon=True,
        )
        self._set_state(ReceiverState.LISTENING)
        self._thread.start()

    def stop(self) -> None:
        """Stop the receiver thread and close the socket."""
        thread = self._thread
        if thread is None and self._sock is None:
            return
        self._set_state(ReceiverState.STOPPING)
        self._stop.set()
        if self._sock:
            try:
                # close() alone does not wake a blocked recvfrom on Linux
                self._sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
            try:
                self._sock.close()
            except OSError:
                pass
        if thread is not None and thread is not threading.current_thread():
            join_timeout_s = max(self.join_timeout_s, self.poll_interval_s + 0.5)
            thread.join(timeout=join_timeout_s)
            if thread.is_alive():
                self._report(
                    logging.WARNING,
                    f"StreamerBot UDP Receiver thread did not stop within {join_timeout_s:.1f}s",
                )
        self._thread = None
        self._sock = None
        self._set_state(ReceiverState.IDLE)

    # ------------------------------------------------------------------
    # Thread
    def _run(self, sock: socket.socket) -> None:
        self._report(logging.INFO, f"StreamerBot UDP Receiver thread started for {LOOPBACK_HOST}:{self.port}")

        while not self._stop.is_set():
            try:
                data, _ = sock.recvfrom(MAX_DATAGRAM_SIZE)
            except socket.timeout:
                continue
            except OSError as exc:
                # Socket closed by stop() or a fatal socket error
                if not self._stop.is_set():
                    self._report(logging.ERROR, f"StreamerBot UDP Receiver socket failed: {exc}", exc_info=exc)
                    self._set_state(ReceiverState.IDLE)
                break
            if self._stop.is_set():
                # recvfrom returns empty once the socket is shut down
                break

            try:
                record = decode(data)
            except DecodeError as exc:
                self._report_decode_error(exc)
                continue
            try:
                self.on_record(record)
            except Exception:
                logger.exception("Failed to queue StreamerBot event %r", record.event_type)

        self._report(logging.INFO, "StreamerBot UDP Receiver thread has stopped.")

    def _report(self, level: int, message: str, exc_info: object = None) -> None:
        if self.on_status is None:
            logger.log(level, "%s", message, exc_info=exc_info)
            return
        try:
            self.on_status(level, message, exc_info=exc_info)
        except Exception:
            logger.exception("Status callback raised while reporting: %s", message)

    def _report_decode_error(self, exc: DecodeError) -> None:
        if self.on_error is None:
            logger.warning("%s", exc)
            return
        try:
            self.on_error(exc)
        except Exception:
            logger.exception("Error callback raised while reporting: %s", exc)
