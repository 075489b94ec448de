"""Dispatches queued events to the handlers registered for their type."""

from __future__ import annotations

import queue
import threading
from collections.abc import Callable
from concurrent.futures import CancelledError

from casper_sdk.sse_errors import HandlerNotRegisteredError
from casper_sdk.sse_events import RawEvent, event_name

HandlerFunc = Callable[[RawEvent], None]

_POLL_INTERVAL = 0.05


class Consumer:
    """Takes events from a queue and hands each to its handler.

    A ``None`` in the queue marks the stream as closed.
    """

    def __init__(self) -> None:
        self.handlers: dict[int, HandlerFunc] = {}

    def register_handler(self, event_type: int, handler: HandlerFunc) -> None:
        self.handlers[event_type] = handler

    def run(self, stop: threading.Event, events: queue.Queue, errors: queue.Queue) -> None:
        """Dispatch until stopped or closed; always ends by raising.

        Exceptions from handlers are put on ``errors`` and do not stop the loop.
        """
        while True:
            try:
                event = events.get(timeout=_POLL_INTERVAL)
            except queue.Empty:
                if stop.is_set():
                    raise CancelledError("context canceled") from None
                continue
            if event is None:
                try:
                    events.put_nowait(None)
                except queue.Full:
                    pass
                raise EOFError("events stream was closed")
            handler = self.handlers.get(event.event_type)
            if handler is None:
                raise HandlerNotRegisteredError(event_name(event.event_type))
            try:
                handler(event)
            except Exception as exc:
                errors.put(exc)