"""Errors raised while talking to a node over RPC."""

from __future__ import annotations

from http import HTTPStatus


class RpcError(Exception):
    """An error object returned in an RPC response."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return self.message


class HttpError(Exception):
    """A non-2xx HTTP status returned by the RPC endpoint."""

    def __init__(self, status_code: int, source: str | BaseException) -> None:
        self.status_code = status_code
        self.source = source
        if isinstance(source, BaseException):
            self.__cause__ = source
        super().__init__(f"Code: {status_code}, err: {source}")

    def is_not_found(self) -> bool:
        return self.status_code == HTTPStatus.NOT_FOUND


class _DetailedError(Exception):
    message = "rpc failure"

    def __init__(self, details: str | None = None) -> None:
        self.details = details
        text = self.message if details is None else f"{self.message}, details: {details}"
        super().__init__(text)


class HandlerError(_DetailedError):
    """Base for failures inside the transport handler."""

    message = "rpc handler failure"


class ParamsMarshalError(HandlerError):
    message = "failed to marshal rpc request's params"


class BuildHttpRequestError(HandlerError):
    message = "failed to build http request"


class ProcessHttpRequestError(HandlerError):
    message = "failed to sent http request"


class ReadHttpResponseBodyError(HandlerError):
    message = "failed to read http response body"


class RpcResponseUnmarshalError(HandlerError):
    message = "failed to unmarshal rpc response"


class ResultUnmarshalError(_DetailedError):
    """The result of an RPC response could not be decoded."""

    message = "failed to unmarshal rpc result"