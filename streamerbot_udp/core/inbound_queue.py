"""Hand-off queue between the receiver thread and the frame thread."""
from __future__ import annotations

import queue
from typing import Iterator

from .event import EventRecord


class InboundQueue:
    """Unbounded FIFO of decoded records.

    The receiver thread calls :meth:`put`; the frame thread calls
    :meth:`drain`. Each record is handed out exactly once.
    """

    def __init__(self) -> None:
        self._q: queue.Queue[EventRecord] = queue.Queue()

    def put(self, record: EventRecord) -> None:
        self._q.put_nowait(record)

    def get_nowait(self) -> EventRecord | None:
        try:
            return self._q.get_nowait()
        except queue.Empty:
            return None

    def drain(self) -> Iterator[EventRecord]:
        """Yield queued records until the queue is empty, never blocking."""

        while True:
            record = self.get_nowait()
            if record is None:
                return
            yield record

    def clear(self) -> int:
        """Discard everything currently queued and return how many were dropped."""

        dropped = 0
        for _ in self.drain():
            dropped += 1
        return dropped

    def __len__(self) -> int:
        return self._q.qsize()
