"""Run a receiver in a headless Qt loop and log every Streamer.bot event."""
import argparse
import logging
import signal
import sys

from PySide6 import QtCore

from streamerbot_udp.core.event import EventRecord
from streamerbot_udp.host.frame_driver import FrameDriver
from streamerbot_udp.session.controller import StreamerBotReceiver
from streamerbot_udp.session.settings import DEFAULT_FRAME_RATE_HZ, DEFAULT_PORT, ReceiverSettings

logger = logging.getLogger("streamerbot_udp.main")

DEMO_EVENTS = ("Test", "Follow", "Sub", "Cheer", "Raid", "AdBreak")


class LoggingReceiver(StreamerBotReceiver):
    """Receiver with an action for each of the common Streamer.bot events."""

    def initialise_events(self) -> None:
        for name in DEMO_EVENTS:
            self.register(name, self.log_event)

    @staticmethod
    def log_event(event: EventRecord) -> None:
        logger.info(
            "%s from %r: message=%r amount=%d",
            event.event_type, event.user, event.message, event.amount,
        )


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="UDP port to listen on")
    parser.add_argument("--fps", type=int, default=DEFAULT_FRAME_RATE_HZ, help="dispatch frames per second")
    parser.add_argument("--debug", action="store_true", help="log every received datagram")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)

    app = QtCore.QCoreApplication(sys.argv[:1])
    settings = ReceiverSettings(port=args.port, frame_rate_hz=args.fps, debug_log=args.debug)
    receiver = LoggingReceiver(settings)
    driver = FrameDriver(receiver)
    driver.attach_to(app)
    if not driver.enable():
        driver.disable()
        return 1

    def _graceful_kill(*_):
        QtCore.QCoreApplication.quit()

    signal.signal(signal.SIGINT, _graceful_kill)
    signal.signal(signal.SIGTERM, _graceful_kill)

    # Let the interpreter run signal handlers while Qt owns the main loop
    wakeup = QtCore.QTimer()
    wakeup.timeout.connect(lambda: None)
    wakeup.start(200)

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
