import queue
import threading
from concurrent.futures import CancelledError

import pytest

from casper_sdk.consumer import Consumer
from casper_sdk.sse_errors import HandlerNotRegisteredError
from casper_sdk.sse_events import EventType, RawEvent


def _event(event_type=EventType.BLOCK_ADDED, event_id=1):
    return RawEvent(event_type=event_type, data=b'{"BlockAdded":{}}', event_id=event_id)


def test_run_dispatches_until_stream_closed():
    consumer = Consumer()
    seen = []
    consumer.register_handler(EventType.BLOCK_ADDED, seen.append)
    events = queue.Queue()
    first, second = _event(event_id=1), _event(event_id=2)
    events.put(first)
    events.put(second)
    events.put(None)
    with pytest.raises(EOFError, match="events stream was closed"):
        consumer.run(threading.Event(), events, queue.Queue())
    assert seen == [first, second]
    assert events.get_nowait() is None


def test_handler_errors_are_reported_and_loop_continues():
    consumer = Consumer()
    seen = []
    failure = RuntimeError("handler failed")

    def handler(event):
        seen.append(event.event_id)
        if event.event_id == 1:
            raise failure

    consumer.register_handler(EventType.BLOCK_ADDED, handler)
    events, errors = queue.Queue(), queue.Queue()
    events.put(_event(event_id=1))
    events.put(_event(event_id=2))
    events.put(None)
    with pytest.raises(EOFError):
        consumer.run(threading.Event(), events, errors)
    assert seen == [1, 2]
    assert errors.get_nowait() is failure
    assert errors.empty()


def test_unregistered_event_type_raises():
    consumer = Consumer()
    events = queue.Queue()
    events.put(_event())
    with pytest.raises(HandlerNotRegisteredError, match="BlockAdded"):
        consumer.run(threading.Event(), events, queue.Queue())


def test_stop_on_empty_queue_cancels():
    stop = threading.Event()
    stop.set()
    with pytest.raises(CancelledError):
        Consumer().run(stop, queue.Queue(), queue.Queue())


def test_later_registration_replaces_handler():
    consumer = Consumer()
    first, second = [], []
    consumer.register_handler(EventType.BLOCK_ADDED, first.append)
    consumer.register_handler(EventType.BLOCK_ADDED, second.append)
    events = queue.Queue()
    events.put(_event())
    events.put(None)
    with pytest.raises(EOFError):
        consumer.run(threading.Event(), events, queue.Queue())
    assert first == []
    assert len(second) == 1