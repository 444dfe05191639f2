"""JSON wire format used by Streamer.bot UDP actions.

One datagram carries one JSON object::

    {"Event": "Cheer", "User": "someone", "Message": "hi", "Amount": 100}

Keys are matched case-insensitively, unknown keys are ignored and ``null``
counts as "not sent".
"""
from __future__ import annotations

import json
from collections.abc import Mapping

from .errors import DecodeError
from .event import EventRecord

MAX_DATAGRAM_SIZE = 65535

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1

# wire key (lower-cased) -> EventRecord field
_STRING_FIELDS = {
    "event": "event_type",
    "user": "user",
    "message": "message",
}
_AMOUNT_KEY = "amount"


def _fold_keys(doc: Mapping[str, object]) -> dict[str, object]:
    # Later keys win when two differ only in case.
    return {str(key).lower(): value for key, value in doc.items()}


def _amount(value: object, payload: bytes) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"'Amount' must be an integer, got {value!r}", payload)
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise DecodeError(f"'Amount' {value} is out of range", payload)
    return value


def decode(data: bytes) -> EventRecord:
    """Decode one datagram into an :class:`EventRecord`.

    Raises :class:`DecodeError` for anything that is not a UTF-8 JSON object
    with correctly typed fields.
    """

    try:
        text = bytes(data).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"invalid UTF-8 ({exc.reason})", data) from exc

    try:
        doc = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"invalid JSON ({exc.msg} at position {exc.pos})", data) from exc

    if not isinstance(doc, Mapping):
        raise DecodeError(f"expected a JSON object, got {type(doc).__name__}", data)

    folded = _fold_keys(doc)
    values: dict[str, object] = {}
    for key, field_name in _STRING_FIELDS.items():
        value = folded.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            raise DecodeError(f"{key.capitalize()!r} must be a string, got {value!r}", data)
        values[field_name] = value

    amount = folded.get(_AMOUNT_KEY)
    if amount is not None:
        values["amount"] = _amount(amount, data)

    return EventRecord(**values)  # type: ignore[arg-type]


def encode(record: EventRecord) -> bytes:
    """Encode a record the way a Streamer.bot UDP action would send it."""

    doc = {
        "Event": record.event_type,
        "User": record.user,
        "Message": record.message,
        "Amount": int(record.amount),
    }
    return json.dumps(doc, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
