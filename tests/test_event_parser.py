import pytest

from casper_sdk.event_parser import EventParser, trim_prefix
from casper_sdk.sse_errors import UnknownEventTypeError
from casper_sdk.sse_events import EventType


def _parser(*types):
    parser = EventParser()
    for event_type in types:
        parser.register_event(event_type)
    return parser


def test_api_version_event_has_no_id():
    event = _parser(EventType.API_VERSION).parse_raw_event(b'data: {"ApiVersion":"1.0.0"}')
    assert event.event_type == EventType.API_VERSION
    assert event.event_id == 0
    assert event.data == b'{"ApiVersion":"1.0.0"}\n'
    assert event.parse_as_api_version_event().api_version == "1.0.0"


def test_event_with_id_and_crlf_lines():
    parser = _parser(EventType.API_VERSION, EventType.BLOCK_ADDED)
    event = parser.parse_raw_event(b'data: {"BlockAdded":{}}\r\nid: 12')
    assert event.event_type == EventType.BLOCK_ADDED
    assert event.event_id == 12
    assert event.data == b'{"BlockAdded":{}}\n'


def test_unregistered_type_raises():
    parser = _parser(EventType.API_VERSION)
    with pytest.raises(UnknownEventTypeError) as info:
        parser.parse_raw_event(b'id: 1\ndata: {"BlockAdded":{}}')
    assert info.value.raw_data == b'{"BlockAdded":{}}\n'


def test_missing_data_raises_unknown_type():
    with pytest.raises(UnknownEventTypeError):
        _parser(EventType.BLOCK_ADDED).parse_raw_event(b"id: 5")


def test_bad_event_id_raises():
    parser = _parser(EventType.FAULT)
    with pytest.raises(ValueError, match="error parsing event id"):
        parser.parse_raw_event(b'id: abc\ndata: {"Fault":{}}')
    with pytest.raises(ValueError, match="error parsing event id"):
        parser.parse_raw_event(b'data: {"Fault":{}}')


def test_garbage_lines_ignored_and_last_data_wins():
    parser = _parser(EventType.STEP, EventType.FAULT)
    event = parser.parse_raw_event(b': comment\nid: 7\ndata: {"Fault":{}}\ndata: {"Step":{}}')
    assert event.event_type == EventType.STEP
    assert event.event_id == 7


def test_trim_prefix_strips_space_and_newline():
    assert trim_prefix(5, b"data: abc\n") == b"abc"
    assert trim_prefix(5, b"data:abc") == b"abc"


def test_trim_prefix_short_or_missing_data_unchanged():
    assert trim_prefix(10, b"abc") == b"abc"
    assert trim_prefix(3, None) is None