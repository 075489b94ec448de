"""JSON-RPC transport over HTTP."""

from __future__ import annotations

import json
import urllib.error
import urllib.request
from http import HTTPStatus

from casper_sdk.rpc_errors import (
    BuildHttpRequestError,
    HttpError,
    ParamsMarshalError,
    ProcessHttpRequestError,
    ReadHttpResponseBodyError,
    RpcResponseUnmarshalError,
)
from casper_sdk.rpc_request import RpcRequest
from casper_sdk.rpc_response import RpcResponse


def _status_text(code: int, reason: str | None = None) -> str:
    if not reason:
        try:
            reason = HTTPStatus(code).phrase
        except ValueError:
            reason = ""
    return f"{code} {reason}".strip()


class HttpHandler:
    """Sends RPC requests to ``endpoint`` with HTTP POST."""

    def __init__(
        self,
        endpoint: str,
        opener: urllib.request.OpenerDirector | None = None,
        timeout: float | None = None,
    ) -> None:
        self.endpoint = endpoint
        self.opener = opener or urllib.request.build_opener()
        self.timeout = timeout

    def process_call(self, request: RpcRequest) -> RpcResponse:
        """Send ``request`` and return the decoded RPC response."""
        try:
            body = json.dumps(request.to_dict()).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise ParamsMarshalError(str(exc)) from exc

        try:
            http_request = urllib.request.Request(
                self.endpoint,
                data=body,
                headers={"Content-Type": "application/json"},
                method="POST",
            )
        except ValueError as exc:
            raise BuildHttpRequestError(str(exc)) from exc

        try:
            response = self.opener.open(http_request, timeout=self.timeout)
        except urllib.error.HTTPError as exc:
            exc.close()
            raise HttpError(exc.code, _status_text(exc.code, exc.reason)) from exc
        except (urllib.error.URLError, OSError, ValueError) as exc:
            raise ProcessHttpRequestError(str(exc)) from exc

        with response:
            status = response.status
            if not HTTPStatus.OK <= status < HTTPStatus.MULTIPLE_CHOICES:
                raise HttpError(status, _status_text(status, response.reason))
            try:
                payload = response.read()
            except OSError as exc:
                raise ReadHttpResponseBodyError(str(exc)) from exc

        try:
            return RpcResponse.from_dict(json.loads(payload))
        except (TypeError, ValueError, AttributeError) as exc:
            raise RpcResponseUnmarshalError(str(exc)) from exc