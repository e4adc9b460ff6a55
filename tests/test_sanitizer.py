from __future__ import annotations

import threading
from datetime import date, datetime, timezone
from enum import Enum, IntEnum

import pytest

from log_payload.encoding.sanitizer import (
    is_ascii_printable,
    sanitize,
    sanitize_metadata,
    stringify_key,
)
from log_payload.models import LogLevel, ProcessRef


class Key(Enum):
    NODE = "node"
    REGION = 3


class Priority(IntEnum):
    LOW = 1


class Opaque:
    pass


def test_charlist_becomes_text():
    assert sanitize_metadata({"greeting": [104, 101, 108, 108, 111]}) == {"greeting": "hello"}


def test_charlist_with_control_chars():
    assert sanitize([104, 105, 10, 9]) == "hi\n\t"


def test_empty_list_is_printable():
    assert is_ascii_printable([])
    assert sanitize_metadata({"x": []}) == {"x": ""}


def test_non_printable_list_sanitized_elementwise():
    out = sanitize_metadata({"nums": [1, 2, 3], "mixed": [104, "a", (1, 2)]})
    assert out == {"nums": [1, 2, 3], "mixed": [104, "a", [1, 2]]}


def test_bools_are_not_character_codes():
    assert not is_ascii_printable([True, False])
    assert sanitize([True, 65]) == [True, 65]


def test_nested_tuple_scenario():
    assert sanitize_metadata({"data": {"a": (1, 2, 3)}}) == {"data": {"a": [1, 2, 3]}}


def test_tuples_eliminated_at_every_depth():
    value = {"outer": [({"inner": (0, (1,))},)]}
    assert sanitize_metadata(value) == {"outer": [[{"inner": [0, [1]]}]]}


def test_printable_tuple_becomes_text():
    assert sanitize((72, 105)) == "Hi"


def test_process_refs_become_text():
    out = sanitize_metadata({"pid": ProcessRef(pid=5, thread_id=6), "t": threading.current_thread()})
    assert out["pid"] == "<5.6>"
    assert isinstance(out["t"], str) and out["t"]


def test_exception_becomes_text():
    assert sanitize(ValueError("bad input")) == "ValueError: bad input"


def test_bytes_and_datetimes():
    assert sanitize(b"raw") == "raw"
    assert sanitize(date(2024, 1, 2)) == "2024-01-02"
    assert sanitize(datetime(2024, 1, 2, tzinfo=timezone.utc)) == "2024-01-02T00:00:00+00:00"


def test_enum_values_and_keys_textualized_at_every_level():
    value = {
        Key.NODE: LogLevel.INFO,
        "list": [{Key.REGION: Priority.LOW}],
        "deep": {"deeper": {Key.NODE: [Key.REGION]}},
    }
    assert sanitize_metadata(value) == {
        "node": "info",
        "list": [{"REGION": "LOW"}],
        "deep": {"deeper": {"node": ["REGION"]}},
    }


def test_stringify_key_leaves_plain_keys():
    assert stringify_key("a") == "a"
    assert stringify_key(1) == 1
    assert stringify_key(Key.NODE) == "node"


def test_unknown_values_pass_through():
    obj = Opaque()
    assert sanitize_metadata({"o": obj, "s": {1}})["o"] is obj
    assert sanitize({"s": {1}}) == {"s": {1}}


def test_scalars_unchanged():
    for v in ("text", 1, 1.5, True, None):
        assert sanitize(v) == v


def test_input_not_mutated():
    value = {"a": (1, 2), "b": {"c": [104, 105]}}
    sanitize_metadata(value)
    assert value == {"a": (1, 2), "b": {"c": [104, 105]}}


@pytest.mark.parametrize(
    "value",
    [
        {"a": (72, 105), "b": [1, (2, 3)], "c": {Key.NODE: ProcessRef(pid=1)}},
        {"x": [104, LogLevel.ERROR], "y": [[104, 105], b"z"]},
        {"e": RuntimeError("x"), "d": [date(2024, 1, 1), (None,)]},
    ],
)
def test_sanitize_is_idempotent(value):
    once = sanitize(value)
    assert sanitize(once) == once


def test_non_finite_floats_become_text():
    assert sanitize_metadata({"a": float("nan"), "b": [float("inf"), -float("inf")], "c": 2.5}) == {
        "a": "NaN",
        "b": ["Infinity", "-Infinity"],
        "c": 2.5,
    }
