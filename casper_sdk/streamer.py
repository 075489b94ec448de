"""Fills a queue with events read from a node's event stream."""

from __future__ import annotations

import queue
import threading
import time
from collections.abc import Iterator
from concurrent.futures import CancelledError
from contextlib import contextmanager
from typing import Any

from casper_sdk.event_parser import EventParser
from casper_sdk.http_connection import HttpConnection
from casper_sdk.sse_errors import FullStreamTimeoutError
from casper_sdk.sse_events import RawEvent
from casper_sdk.stream_reader import EventStreamReader

_POLL_INTERVAL = 0.05
_EMPTY_FRAME = b":"


@contextmanager
def _close_when_stopped(stop: threading.Event, resource: Any) -> Iterator[None]:
    """Close ``resource`` from a watcher thread as soon as ``stop`` is set."""
    done = threading.Event()

    def watch() -> None:
        while not done.wait(_POLL_INTERVAL):
            if stop.is_set():
                try:
                    resource.close()
                except Exception:
                    pass
                return

    watcher = threading.Thread(target=watch, daemon=True)
    watcher.start()
    try:
        yield
    finally:
        done.set()


class Streamer:
    """Reads frames from the connection, parses them and queues the events.

    ``blocked_stream_limit`` is how many seconds the queue may stay full
    before :class:`FullStreamTimeoutError` is raised.
    """

    def __init__(
        self,
        connection: HttpConnection,
        stream_reader: EventStreamReader,
        blocked_stream_limit: float,
    ) -> None:
        self.connection = connection
        self.stream_reader = stream_reader
        self.blocked_stream_limit = blocked_stream_limit
        self._event_parser = EventParser()

    def register_event(self, event_type: int) -> None:
        self._event_parser.register_event(event_type)

    def fill_stream(
        self,
        stop: threading.Event,
        last_event_id: int,
        stream: queue.Queue,
        errors: queue.Queue,
    ) -> None:
        """Run until the stream ends or ``stop`` is set; always ends by raising."""
        response = self.connection.request(last_event_id)
        with response, _close_when_stopped(stop, response):
            self.stream_reader.register_stream(response)
            while True:
                if stop.is_set():
                    raise CancelledError("context canceled")
                frame = self.stream_reader.read_event()
                if frame == _EMPTY_FRAME:
                    continue
                try:
                    event = self._event_parser.parse_raw_event(frame)
                except ValueError as exc:
                    errors.put(exc)
                    continue
                self._add_data(stop, stream, event)

    def _add_data(self, stop: threading.Event, stream: queue.Queue, event: RawEvent) -> None:
        deadline = time.monotonic() + self.blocked_stream_limit
        while True:
            if stop.is_set():
                raise CancelledError("context canceled")
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise FullStreamTimeoutError()
            try:
                stream.put(event, timeout=min(_POLL_INTERVAL, remaining))
                return
            except queue.Full:
                continue


def default_streamer(url: str) -> Streamer:
    """A streamer with a 50 MB frame limit and a 30 second full-queue limit."""
    return Streamer(
        HttpConnection(url),
        EventStreamReader(max_buffer_size=1024 * 1024 * 50),
        30.0,
    )