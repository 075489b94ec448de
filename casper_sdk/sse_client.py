"""Event-stream client that joins a streamer and a pool of consumers."""

from __future__ import annotations

import contextvars
import logging
import queue
import threading
from collections.abc import Callable
from typing import Any

from casper_sdk.consumer import Consumer, HandlerFunc
from casper_sdk.streamer import default_streamer

Middleware = Callable[[HandlerFunc], HandlerFunc]
ErrorHandler = Callable[[queue.Queue], None]

WORKER_ID: contextvars.ContextVar[int] = contextvars.ContextVar("casper_sse_worker_id")

_logger = logging.getLogger(__name__)


def _log_errors(source: queue.Queue) -> None:
    for error in iter(source.get, None):
        _logger.error("%s", error)


def _close(target: queue.Queue) -> None:
    while True:
        try:
            target.put_nowait(None)
            return
        except queue.Full:
            try:
                target.get_nowait()
            except queue.Empty:
                pass


class SseClient:
    """Reads a node's event stream and dispatches events to registered handlers.

    Middlewares registered before a handler wrap it; the first registered runs first.
    """

    def __init__(self, url: str) -> None:
        self.streamer = default_streamer(url)
        self.consumer = Consumer()
        self.event_stream: queue.Queue = queue.Queue(maxsize=10)
        self.stream_error_handler: ErrorHandler = _log_errors
        self.consumer_error_handler: ErrorHandler = _log_errors
        self.workers_count = 1
        self._stream_errors: queue.Queue = queue.Queue()
        self._consumer_errors: queue.Queue = queue.Queue()
        self._middlewares: list[Middleware] = []

    def start(self, last_event_id: int = 0) -> None:
        """Run the streamer and workers until one fails, then raise its error."""
        stop = threading.Event()
        failures: list[BaseException] = []
        lock = threading.Lock()

        def guarded(target: Callable[..., Any], *args: Any, worker: int | None = None) -> None:
            if worker is not None:
                WORKER_ID.set(worker)
            try:
                target(*args)
            except BaseException as exc:
                with lock:
                    failures.append(exc)
                stop.set()

        threads = [
            threading.Thread(
                target=guarded,
                args=(
                    self.streamer.fill_stream,
                    stop,
                    last_event_id,
                    self.event_stream,
                    self._stream_errors,
                ),
            )
        ]
        threads.extend(
            threading.Thread(
                target=guarded,
                args=(self.consumer.run, stop, self.event_stream, self._consumer_errors),
                kwargs={"worker": index},
            )
            for index in range(self.workers_count)
        )
        for handler, source in (
            (self.stream_error_handler, self._stream_errors),
            (self.consumer_error_handler, self._consumer_errors),
        ):
            threading.Thread(target=handler, args=(source,), daemon=True).start()

        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        if failures:
            raise failures[0]

    def register_middleware(self, middleware: Middleware) -> None:
        self._middlewares.append(middleware)

    def register_handler(self, event_type: int, handler: HandlerFunc) -> None:
        self.streamer.register_event(event_type)
        for middleware in reversed(self._middlewares):
            handler = middleware(handler)
        self.consumer.register_handler(event_type, handler)

    def stop(self) -> None:
        """Close the event queue and end the error handlers."""
        _close(self.event_stream)
        self._stream_errors.put(None)
        self._consumer_errors.put(None)