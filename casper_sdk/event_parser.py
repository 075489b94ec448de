"""Turns raw text frames from the event stream into typed raw events."""

from __future__ import annotations

import re

from casper_sdk.sse_errors import UnknownEventTypeError
from casper_sdk.sse_events import EventType, RawEvent, event_name

_HEADER_ID = b"id:"
_HEADER_DATA = b"data:"
_LINE_BREAKS = re.compile(rb"[\r\n]+")
_DIGITS = re.compile(rb"[0-9]+")
_MAX_EVENT_ID = 2**64 - 1


def trim_prefix(size: int, data: bytes | None) -> bytes | None:
    """Drop ``size`` bytes, then one leading space and one trailing newline."""
    if data is None or len(data) < size:
        return data
    data = data[size:]
    if data.startswith(b" "):
        data = data[1:]
    if data.endswith(b"\n"):
        data = data[:-1]
    return data


class EventParser:
    """Recognises the registered event types in stream frames."""

    def __init__(self) -> None:
        self.events_to_parse: dict[int, str] = {}

    def register_event(self, event_type: int) -> None:
        self.events_to_parse[event_type] = event_name(event_type)

    def parse_raw_event(self, data: bytes) -> RawEvent:
        """Parse one frame; raise for unknown types or a malformed id."""
        event_id: bytes | None = None
        event_data: bytes | None = None
        for line in filter(None, _LINE_BREAKS.split(data)):
            if line.startswith(_HEADER_ID):
                event_id = trim_prefix(len(_HEADER_ID), line)
            elif line.startswith(_HEADER_DATA):
                event_data = trim_prefix(len(_HEADER_DATA), line) + b"\n"
        return self._parse_event_type(event_id, event_data)

    def _parse_event_type(self, event_id: bytes | None, event_data: bytes | None) -> RawEvent:
        trimmed = trim_prefix(len(b'{"'), event_data)
        event_type = next(
            (
                registered
                for registered, name in self.events_to_parse.items()
                if trimmed is not None and trimmed.startswith(name.encode())
                or trimmed is None and name == ""
            ),
            None,
        )
        if event_type is None:
            raise UnknownEventTypeError(event_data)

        payload = event_data or b""
        if event_type == EventType.API_VERSION:
            return RawEvent(event_type=event_type, data=payload)

        raw_id = event_id or b""
        if not _DIGITS.fullmatch(raw_id) or int(raw_id) > _MAX_EVENT_ID:
            raise ValueError(f"error parsing event id, invalid syntax: {raw_id!r}")
        return RawEvent(event_type=event_type, event_id=int(raw_id), data=payload)