#!/usr/bin/env python3
"""Send one Streamer.bot-style event to a local receiver for testing."""

import argparse
import socket

from streamerbot_udp.core.codec import encode
from streamerbot_udp.core.event import EventRecord
from streamerbot_udp.net.udp_receiver import LOOPBACK_HOST
from streamerbot_udp.session.settings import DEFAULT_PORT


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("event", help="value of the Event field, e.g. Cheer")
    parser.add_argument("--user", default="")
    parser.add_argument("--message", default="")
    parser.add_argument("--amount", type=int, default=0)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--count", type=int, default=1, help="send the event this many times")
    parser.add_argument("--raw", help="send this text verbatim instead of an encoded event")
    args = parser.parse_args()

    if args.raw is not None:
        payload = args.raw.encode("utf-8")
    else:
        payload = encode(
            EventRecord(
                event_type=args.event,
                user=args.user,
                message=args.message,
                amount=args.amount,
            )
        )

    count = max(1, args.count)
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        for _ in range(count):
            sock.sendto(payload, (LOOPBACK_HOST, args.port))
    print(f"Sent {count} x {len(payload)} bytes to {LOOPBACK_HOST}:{args.port}")


if __name__ == "__main__":
    main()
