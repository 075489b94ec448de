import json
import socket
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer

import pytest

from casper_sdk.http_handler import HttpHandler
from casper_sdk.rpc_errors import (
    BuildHttpRequestError,
    HttpError,
    ParamsMarshalError,
    ProcessHttpRequestError,
    RpcResponseUnmarshalError,
)
from casper_sdk.rpc_request import Method, RpcRequest, default_rpc_request


class _RpcHandler(BaseHTTPRequestHandler):
    def do_POST(self):
        length = int(self.headers.get("Content-Length", 0))
        body = self.rfile.read(length)
        self.server.received.append((self.headers.get("Content-Type"), json.loads(body)))
        status, payload = self.server.reply
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def log_message(self, *args):
        pass


@pytest.fixture
def server():
    httpd = HTTPServer(("127.0.0.1", 0), _RpcHandler)
    httpd.received = []
    httpd.reply = (200, b"{}")
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    try:
        yield httpd
    finally:
        httpd.shutdown()
        httpd.server_close()
        thread.join()


def _url(httpd):
    host, port = httpd.server_address
    return f"http://{host}:{port}/rpc"


def test_successful_call_sends_json_and_decodes(server):
    server.reply = (200, json.dumps({"jsonrpc": "2.0", "id": "1", "result": {"ok": True}}).encode())
    handler = HttpHandler(_url(server), timeout=5)
    response = handler.process_call(default_rpc_request(Method.GET_STATUS, None))
    assert response.result == {"ok": True}
    assert response.error is None
    content_type, body = server.received[0]
    assert content_type == "application/json"
    assert body == {"jsonrpc": "2.0", "id": "1", "method": "info_get_status", "params": None}


def test_rpc_error_is_returned_in_response(server):
    server.reply = (
        200,
        json.dumps({"jsonrpc": "2.0", "id": "1", "error": {"code": -32001, "message": "missing"}}).encode(),
    )
    response = HttpHandler(_url(server), timeout=5).process_call(
        default_rpc_request(Method.GET_BLOCK, None)
    )
    assert response.error.code == -32001
    assert response.error.message == "missing"


def test_not_found_raises_http_error(server):
    server.reply = (404, b"{}")
    with pytest.raises(HttpError) as info:
        HttpHandler(_url(server), timeout=5).process_call(default_rpc_request(Method.GET_PEERS, None))
    assert info.value.status_code == 404
    assert info.value.is_not_found()
    assert str(info.value).startswith("Code: 404, err: 404")


def test_server_error_is_not_not_found(server):
    server.reply = (500, b"{}")
    with pytest.raises(HttpError) as info:
        HttpHandler(_url(server), timeout=5).process_call(default_rpc_request(Method.GET_PEERS, None))
    assert info.value.status_code == 500
    assert not info.value.is_not_found()


def test_invalid_json_body_raises(server):
    server.reply = (200, b"not json")
    with pytest.raises(RpcResponseUnmarshalError) as info:
        HttpHandler(_url(server), timeout=5).process_call(default_rpc_request(Method.GET_PEERS, None))
    assert str(info.value).startswith("failed to unmarshal rpc response, details:")


def test_non_object_json_body_raises(server):
    server.reply = (200, b"[1, 2]")
    with pytest.raises(RpcResponseUnmarshalError):
        HttpHandler(_url(server), timeout=5).process_call(default_rpc_request(Method.GET_PEERS, None))


def test_unserialisable_params_raise():
    request = RpcRequest(method=Method.PUT_DEPLOY, params={"deploy": object()})
    with pytest.raises(ParamsMarshalError) as info:
        HttpHandler("http://127.0.0.1:1/rpc").process_call(request)
    assert str(info.value).startswith("failed to marshal rpc request's params")


def test_bad_endpoint_raises_build_error():
    with pytest.raises(BuildHttpRequestError) as info:
        HttpHandler("not a url").process_call(default_rpc_request(Method.GET_STATUS, None))
    assert str(info.value).startswith("failed to build http request")


def test_unreachable_endpoint_raises_process_error():
    sock = socket.socket()
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    handler = HttpHandler(f"http://127.0.0.1:{port}/rpc", timeout=5)
    with pytest.raises(ProcessHttpRequestError) as info:
        handler.process_call(default_rpc_request(Method.GET_STATUS, None))
    assert str(info.value).startswith("failed to sent http request")