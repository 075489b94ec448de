import io

import pytest

from casper_sdk.stream_reader import EventStreamReader, contains_double_newline


class _TrickleStream:
    """Hands out a few bytes per read to exercise buffering."""

    def __init__(self, data, step=3):
        self._data = data
        self._step = step

    def read(self, size):
        chunk, self._data = self._data[: min(size, self._step)], self._data[min(size, self._step):]
        return chunk


def _reader(data, **kwargs):
    reader = EventStreamReader(**kwargs)
    reader.register_stream(io.BytesIO(data))
    return reader


def test_reads_frames_then_eof():
    reader = _reader(b"data: a\n\ndata: b\n\n")
    assert reader.read_event() == b"data: a"
    assert reader.read_event() == b"data: b"
    with pytest.raises(EOFError):
        reader.read_event()


def test_trailing_frame_without_separator_returned_at_eof():
    assert list(_reader(b"id: 1\ndata: x\n\nid: 2\ndata: y")) == [
        b"id: 1\ndata: x",
        b"id: 2\ndata: y",
    ]


def test_crlf_and_cr_separators():
    frames = list(_reader(b"one\r\n\r\ntwo\r\rthree\n\r\nfour"))
    assert frames == [b"one", b"two", b"three", b"four"]


def test_small_reads_are_buffered():
    reader = EventStreamReader()
    reader.register_stream(_TrickleStream(b"data: first\n\ndata: second\n\n"))
    assert list(reader) == [b"data: first", b"data: second"]


def test_frame_longer_than_buffer_raises():
    with pytest.raises(ValueError, match="token too long"):
        _reader(b"x" * 20, max_buffer_size=8).read_event()


def test_read_without_stream_raises():
    with pytest.raises(RuntimeError):
        EventStreamReader().read_event()


def test_non_positive_buffer_rejected():
    with pytest.raises(ValueError):
        EventStreamReader(max_buffer_size=0).register_stream(io.BytesIO(b""))


@pytest.mark.parametrize("separator", [b"\r\r", b"\n\n", b"\r\n\n", b"\n\r\n", b"\r\n\r\n"])
def test_contains_double_newline_finds_each_separator(separator):
    data = b"ab" + separator + b"cd"
    index, length = contains_double_newline(data)
    assert index == data.index(separator)
    assert data[index : index + length] == separator


def test_contains_double_newline_absent():
    index, _ = contains_double_newline(b"ab\ncd\r")
    assert index < 0