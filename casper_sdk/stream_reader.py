"""Splits a byte stream into event-stream frames."""

from __future__ import annotations

from collections.abc import Iterator
from typing import BinaryIO

DEFAULT_BUFFER_SIZE = 4096
DEFAULT_MAX_BUFFER_SIZE = 64 * 1024

_SEPARATORS = (b"\r\r", b"\n\n", b"\r\n\n", b"\n\r\n", b"\r\n\r\n")


def _min_pos(a: int, b: int) -> int:
    if a < 0:
        return b
    if b < 0:
        return a
    return min(a, b)


def contains_double_newline(data: bytes | bytearray) -> tuple[int, int]:
    """Return the index and length of the first double newline, index -1 if none."""
    crcr, lflf, crlflf, lfcrlf, crlfcrlf = (data.find(sep) for sep in _SEPARATORS)
    position = _min_pos(crcr, _min_pos(lflf, _min_pos(crlflf, _min_pos(lfcrlf, crlfcrlf))))
    length = 2
    if position == crlfcrlf:
        length = 4
    elif position in (crlflf, lfcrlf):
        length = 3
    return position, length


class EventStreamReader:
    """Reads frames separated by blank lines from a binary stream."""

    def __init__(self, max_buffer_size: int = DEFAULT_MAX_BUFFER_SIZE) -> None:
        self.max_buffer_size = max_buffer_size
        self._stream: BinaryIO | None = None
        self._buffer = bytearray()
        self._eof = False

    def register_stream(self, stream: BinaryIO) -> None:
        if self.max_buffer_size <= 0:
            raise ValueError("max_buffer_size must be positive")
        self._stream = stream
        self._buffer = bytearray()
        self._eof = False

    def read_event(self) -> bytes:
        """Return the next frame; raise EOFError when the stream is exhausted."""
        if self._stream is None:
            raise RuntimeError("no stream registered")
        while True:
            index, length = contains_double_newline(self._buffer)
            if index >= 0:
                token = bytes(self._buffer[:index])
                del self._buffer[: index + length]
                return token
            if self._eof:
                if not self._buffer:
                    raise EOFError("event stream ended")
                token = bytes(self._buffer)
                self._buffer.clear()
                return token
            room = self.max_buffer_size - len(self._buffer)
            if room <= 0:
                raise ValueError("token too long")
            chunk = self._read(min(DEFAULT_BUFFER_SIZE, room))
            if chunk:
                self._buffer.extend(chunk)
            else:
                self._eof = True

    def _read(self, size: int) -> bytes:
        read1 = getattr(self._stream, "read1", None)
        if read1 is not None:
            return read1(size)
        return self._stream.read(size)

    def __iter__(self) -> Iterator[bytes]:
        while True:
            try:
                yield self.read_event()
            except EOFError:
                return