"""Opens the HTTP connection that carries a node's event stream."""

from __future__ import annotations

import urllib.error
import urllib.parse
import urllib.request
from http import HTTPStatus
from http.client import HTTPResponse

_INVALID_RESPONSE = "error invalid connect response code"


class HttpConnection:
    """Connects to an event-stream endpoint and hands back the open response."""

    def __init__(
        self,
        url: str,
        opener: urllib.request.OpenerDirector | None = None,
        timeout: float | None = None,
    ) -> None:
        self.url = url
        self.opener = opener or urllib.request.build_opener()
        self.timeout = timeout
        self.headers: dict[str, str] = {}

    def _url_for(self, last_event_id: int) -> str:
        if last_event_id == 0:
            return self.url
        parts = urllib.parse.urlsplit(self.url)
        query = urllib.parse.parse_qsl(parts.query, keep_blank_values=True)
        query.append(("start_from", str(last_event_id)))
        query.sort(key=lambda item: item[0])
        return urllib.parse.urlunsplit(parts._replace(query=urllib.parse.urlencode(query)))

    def request(self, last_event_id: int = 0) -> HTTPResponse:
        """Open the stream, resuming after ``last_event_id`` when it is not zero."""
        headers = {
            "Cache-Control": "no-cache",
            "Accept": "text/event-stream",
            "Connection": "keep-alive",
        }
        headers.update(self.headers)
        http_request = urllib.request.Request(
            self._url_for(last_event_id), headers=headers, method="GET"
        )
        try:
            response = self.opener.open(http_request, timeout=self.timeout)
        except urllib.error.HTTPError as exc:
            exc.close()
            raise ConnectionError(_INVALID_RESPONSE) from exc

        if response.status != HTTPStatus.OK:
            response.close()
            raise ConnectionError(_INVALID_RESPONSE)
        return response