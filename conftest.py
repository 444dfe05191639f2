import socket
import time
from typing import Callable

import pytest

from PySide6 import QtCore


def get_free_port() -> int:
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


def send_datagrams(port: int, *payloads: bytes) -> None:
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sender:
        for payload in payloads:
            sender.sendto(payload, ("127.0.0.1", port))


def wait_until(condition: Callable[[], bool], timeout: float = 2.0, interval: float = 0.01) -> None:
    """Poll *condition*, pumping Qt events when an application exists."""

    deadline = time.monotonic() + timeout
    while not condition():
        if time.monotonic() > deadline:
            raise AssertionError("condition not met before timeout")
        if QtCore.QCoreApplication.instance() is not None:
            QtCore.QCoreApplication.processEvents()
        time.sleep(interval)


@pytest.fixture
def free_port() -> int:
    return get_free_port()


@pytest.fixture(scope="session")
def qapp() -> QtCore.QCoreApplication:
    app = QtCore.QCoreApplication.instance()
    if app is None:
        app = QtCore.QCoreApplication([])
    return app
