from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EventRecord:
    """One notification sent by Streamer.bot.

    A Bit cheer would carry ``event_type``, ``user`` and ``amount`` (and
    possibly ``message``) while an ad-break only needs ``event_type``.
    """

    event_type: str = ""
    user: str = ""
    message: str = ""
    amount: int = 0

    @property
    def is_deliverable(self) -> bool:
        return bool(self.event_type)
