from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta, timezone

import pytest

from log_payload import PayloadEncodeError, dumps, encode_json
from log_payload.config import get_settings
from log_payload.models import LogLevel
from log_payload.serialization import fallback_payload


class Opaque:
    pass


def test_dumps_compact_unicode():
    assert dumps({"message": "é", "metadata": {"context": {}}}) == (
        '{"message":"é","metadata":{"context":{}}}'
    )


def test_dumps_raises_payload_encode_error():
    with pytest.raises(PayloadEncodeError):
        dumps({"metadata": {"o": Opaque()}})
    with pytest.raises(PayloadEncodeError):
        dumps({"metadata": {"n": float("nan")}})


def test_encode_json_happy_path():
    text = encode_json(
        datetime(2024, 1, 1),
        LogLevel.INFO,
        "boot",
        {"request_id": "abc", "node": "n1"},
        default_keys={"node"},
        tz=timezone.utc,
    )
    assert json.loads(text) == {
        "timestamp": "2024-01-01T00:00:00.000+00:00",
        "level": "info",
        "message": "boot",
        "metadata": {"request_id": "abc", "context": {"node": "n1"}},
    }


def test_encode_json_falls_back_on_unencodable_metadata(caplog):
    with caplog.at_level(logging.WARNING, logger="log_payload.serialization"):
        text = encode_json(
            datetime(2024, 1, 1),
            LogLevel.ERROR,
            b"raw message",
            {"o": Opaque(), "s": {1, 2}},
            default_keys=set(),
            tz=timezone.utc,
        )
    assert json.loads(text) == {
        "timestamp": "2024-01-01T00:00:00.000+00:00",
        "level": "error",
        "message": "raw message",
        "metadata": {"context": {}},
    }
    assert any("fallback payload" in r.getMessage() for r in caplog.records)


def test_fallback_payload_textualizes_odd_timestamp_and_level():
    payload = fallback_payload(Opaque(), Opaque(), "m")
    assert isinstance(payload["timestamp"], str)
    assert isinstance(payload["level"], str)
    dumps(payload)


def test_fallback_uses_configured_local_timezone(monkeypatch):
    monkeypatch.setenv("LOCAL_TIMEZONE", "Asia/Tokyo")
    get_settings.cache_clear()
    try:
        text = encode_json(datetime(2024, 1, 1), "info", "m", {"o": Opaque()}, default_keys=set())
    finally:
        get_settings.cache_clear()
    assert json.loads(text)["timestamp"] == "2024-01-01T00:00:00.000+09:00"


def test_encode_json_out_of_range_timestamp_does_not_raise():
    text = encode_json(
        datetime(1, 1, 1, tzinfo=timezone.utc),
        "info",
        "m",
        {},
        default_keys=set(),
        tz=timezone(timedelta(hours=-5)),
    )
    out = json.loads(text)
    assert out["timestamp"] == "0001-01-01T00:00:00+00:00"
    assert out["metadata"] == {"context": {}}


def test_non_finite_floats_keep_the_metadata():
    text = encode_json(
        "ts",
        "info",
        "m",
        {"ratio": float("nan"), "limits": [float("inf"), -float("inf"), 1.5]},
        default_keys=set(),
        tz=timezone.utc,
    )
    assert json.loads(text)["metadata"] == {
        "ratio": "NaN",
        "limits": ["Infinity", "-Infinity", 1.5],
        "context": {},
    }
