"""Human-readable status lines for the log and the host console."""
from __future__ import annotations

import logging
from typing import Callable, Optional

ConsoleSink = Callable[[str], None]


class Diagnostics:
    """Sends each diagnostic to ``logging`` and to the host's console sink.

    May be called from the receiver thread as well as the frame thread, so
    the console sink must accept calls from either.
    """

    def __init__(self, console: Optional[ConsoleSink] = None, logger: Optional[logging.Logger] = None):
        self.console = console
        self._logger = logger or logging.getLogger("streamerbot_udp")

    def report(self, level: int, message: str, exc_info: object = None) -> None:
        self._logger.log(level, "%s", message, exc_info=exc_info)
        if self.console is None:
            return
        try:
            self.console(message)
        except Exception:
            self._logger.exception("Console sink raised while printing a diagnostic")

    def info(self, message: str) -> None:
        self.report(logging.INFO, message)

    def warning(self, message: str) -> None:
        self.report(logging.WARNING, message)

    def error(self, message: str, exc_info: object = None) -> None:
        self.report(logging.ERROR, message, exc_info=exc_info)
