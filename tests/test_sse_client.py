import io
import queue
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from casper_sdk.sse_client import WORKER_ID, SseClient
from casper_sdk.sse_events import EventType, RawEvent


@pytest.fixture
def serve():
    servers = []

    def _serve(body: bytes, status: int = 200) -> str:
        class _Handler(BaseHTTPRequestHandler):
            def do_GET(self):
                self.send_response(status)
                self.end_headers()
                self.wfile.write(body)

            def log_message(self, *args):
                pass

        server = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
        threading.Thread(target=server.serve_forever, daemon=True).start()
        servers.append(server)
        return f"http://127.0.0.1:{server.server_port}/events/main"

    yield _serve
    for server in servers:
        server.shutdown()
        server.server_close()


class _StubConnection:
    def __init__(self, body: bytes):
        self.body = body

    def request(self, last_event_id):
        return io.BytesIO(self.body)


def test_http_connection_request_with_middleware(serve):
    url = serve(b'data: {"ApiVersion":"1.0.0"}')
    client = SseClient(url)
    calls = []

    def middleware(handler):
        def wrapped(event):
            calls.append("middleware")
            return handler(event)

        return wrapped

    client.register_middleware(middleware)

    def handler(event):
        calls.append(event.parse_as_api_version_event().api_version)

    client.register_handler(EventType.API_VERSION, handler)
    with pytest.raises(EOFError):
        client.start(123)
    assert calls == ["middleware", "1.0.0"]
    client.stop()


def test_with_one_worker_should_process_request(serve):
    url = serve(b'data: {"ApiVersion":"1.0.0"}')
    client = SseClient(url)
    client.workers_count = 1
    worker_ids = []
    client.register_handler(EventType.API_VERSION, lambda event: worker_ids.append(WORKER_ID.get()))
    with pytest.raises(EOFError):
        client.start(0)
    assert worker_ids == [0]
    client.stop()


def test_start_raises_on_bad_status(serve):
    url = serve(b"", status=404)
    client = SseClient(url)
    client.register_handler(EventType.API_VERSION, lambda event: None)
    with pytest.raises(ConnectionError):
        client.start(0)
    client.stop()


def test_middlewares_run_in_registration_order():
    client = SseClient("http://localhost/events/main")
    order = []

    def named(name):
        def middleware(handler):
            def wrapped(event):
                order.append(name)
                handler(event)

            return wrapped

        return middleware

    client.register_middleware(named("first"))
    client.register_middleware(named("second"))
    client.register_handler(EventType.API_VERSION, lambda event: order.append("handler"))
    client.consumer.handlers[EventType.API_VERSION](RawEvent(event_type=EventType.API_VERSION))
    assert order == ["first", "second", "handler"]


def test_register_handler_registers_event_with_streamer():
    client = SseClient("http://localhost/events/main")
    client.register_handler(EventType.API_VERSION, lambda event: None)
    client.streamer.connection = _StubConnection(b'data: {"ApiVersion":"1.0.0"}')
    stream = queue.Queue(10)
    with pytest.raises(EOFError):
        client.streamer.fill_stream(threading.Event(), 0, stream, queue.Queue())
    event = stream.get_nowait()
    assert event.event_type == EventType.API_VERSION
    assert event.parse_as_api_version_event().api_version == "1.0.0"


def test_stop_closes_event_stream():
    client = SseClient("http://localhost/events/main")
    client.stop()
    with pytest.raises(EOFError, match="events stream was closed"):
        client.consumer.run(threading.Event(), client.event_stream, queue.Queue())