import logging
from typing import List, Tuple

from streamerbot_udp.core.event import EventRecord
from streamerbot_udp.core.inbound_queue import InboundQueue
from streamerbot_udp.core.registry import HandlerRegistry
from streamerbot_udp.dispatch.dispatcher import Dispatcher


class ReportRecorder:
    def __init__(self) -> None:
        self.reports: List[Tuple[int, str]] = []

    def __call__(self, level: int, message: str, exc_info: object = None) -> None:
        self.reports.append((level, message))


def _make_dispatcher():
    inbound = InboundQueue()
    registry = HandlerRegistry()
    report = ReportRecorder()
    return inbound, registry, report, Dispatcher(inbound, lambda: registry, report)


def test_callbacks_run_in_registration_order():
    inbound, registry, report, dispatcher = _make_dispatcher()
    calls = []
    registry.register("X", lambda event: calls.append(("cb1", event.user)))
    registry.register("X", lambda event: calls.append(("cb2", event.user)))

    inbound.put(EventRecord("X", user="alice"))

    assert dispatcher.drain_and_dispatch() == 1
    assert calls == [("cb1", "alice"), ("cb2", "alice")]
    assert report.reports == []


def test_unhandled_event_type_reports_once_without_calling_anything():
    inbound, registry, report, dispatcher = _make_dispatcher()
    calls = []
    registry.register("Known", calls.append)

    inbound.put(EventRecord("Unknown"))
    dispatcher.drain_and_dispatch()

    assert calls == []
    assert report.reports == [
        (
            logging.WARNING,
            'StreamerBot sent event type "Unknown" but no matching action is registered for this event',
        )
    ]


def test_records_without_event_type_are_skipped_silently():
    inbound, registry, report, dispatcher = _make_dispatcher()
    inbound.put(EventRecord("", user="nobody"))

    assert dispatcher.drain_and_dispatch() == 1
    assert report.reports == []


def test_failing_callback_is_reported_and_processing_continues():
    inbound, registry, report, dispatcher = _make_dispatcher()
    calls = []

    def broken(event):
        raise RuntimeError("boom")

    registry.register("X", broken)
    registry.register("X", lambda event: calls.append(event.amount))

    inbound.put(EventRecord("X", amount=1))
    inbound.put(EventRecord("X", amount=2))

    assert dispatcher.drain_and_dispatch() == 2
    assert calls == [1, 2]
    assert len(report.reports) == 2
    level, message = report.reports[0]
    assert level == logging.ERROR
    assert "broken" in message
    assert "RuntimeError: boom" in message


def test_drain_with_empty_queue_returns_zero():
    _, _, report, dispatcher = _make_dispatcher()
    assert dispatcher.drain_and_dispatch() == 0
    assert report.reports == []


def test_registry_is_looked_up_on_every_drain():
    inbound = InboundQueue()
    registries = [HandlerRegistry()]
    report = ReportRecorder()
    dispatcher = Dispatcher(inbound, lambda: registries[-1], report)
    calls = []

    replacement = HandlerRegistry()
    replacement.register("X", calls.append)
    registries.append(replacement)

    inbound.put(EventRecord("X"))
    dispatcher.drain_and_dispatch()

    assert calls == [EventRecord("X")]
