"""Errors raised while reading and dispatching the node's event stream."""

from __future__ import annotations

_SHOWN_RAW_BYTES = 32


class UnknownEventTypeError(ValueError):
    """An event whose type has not been registered with the parser."""

    def __init__(self, raw_data: bytes | None) -> None:
        self.raw_data = bytes(raw_data or b"")
        shown = self.raw_data[:_SHOWN_RAW_BYTES].decode("utf-8", errors="replace")
        super().__init__(f"event type has not registered, raw data: {shown}...")


class FullStreamTimeoutError(TimeoutError):
    """The events buffer stayed full for longer than the allowed limit."""

    def __init__(self) -> None:
        super().__init__("can't fill the stream, because it full")


class HandlerNotRegisteredError(LookupError):
    """No handler is registered for the type of a received event."""

    def __init__(self, event_name: str | None = None) -> None:
        self.event_name = event_name
        text = "handler is not registered"
        if event_name is not None:
            text = f"{text}, type: {event_name}"
        super().__init__(text)