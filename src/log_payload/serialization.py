"""JSON serialization of payloads with a fallback emission path.

The encoding pipeline leaves values it does not recognize untouched, so a
payload can still hold something `json` cannot encode. `dumps` reports that as
`PayloadEncodeError`. `encode_json` is the call-site-safe entry point: when
encoding or serialization fails it logs a warning and serializes a minimal
payload built from the raw timestamp, level and message instead, so the event
is never lost and the caller never sees an exception.
"""
from __future__ import annotations

import json
import logging
from datetime import tzinfo
from typing import Any, Dict, Mapping, Optional

from .config import get_settings
from .encoder import encode
from .encoding.normalizer import encode_message, encode_timestamp
from .encoding.sanitizer import sanitize
from .errors import PayloadEncodeError

__all__ = ["dumps", "fallback_payload", "encode_json"]

logger = logging.getLogger(__name__)


def dumps(payload: Mapping[str, Any]) -> str:
    """Serialize a payload to compact JSON text.

    Raises:
        PayloadEncodeError: when a value is not JSON-encodable
    """
    try:
        return json.dumps(payload, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as e:
        raise PayloadEncodeError(f"payload is not JSON-encodable: {e}") from e


def fallback_payload(timestamp: Any, level: Any, message: Any, *, tz: Optional[tzinfo] = None) -> Dict[str, Any]:
    """Minimal payload from the raw timestamp/level/message, metadata dropped."""
    payload = {
        "timestamp": encode_timestamp(timestamp, tz),
        "level": sanitize(level),
        "message": encode_message(message),
        "metadata": {"context": {}},
    }
    for key in ("timestamp", "level"):
        if not isinstance(payload[key], (str, int, type(None))):
            payload[key] = str(payload[key])
    return payload


def _resolve_tz(tz: Optional[tzinfo]) -> Optional[tzinfo]:
    if tz is not None:
        return tz
    try:
        return get_settings().tzinfo
    except Exception as e:
        logger.warning("settings unavailable, using host local zone: %s", e)
        return None


def encode_json(
    timestamp: Any,
    level: Any,
    message: Any,
    metadata: Optional[Mapping[Any, Any]] = None,
    **kwargs: Any,
) -> str:
    """Encode one event to JSON text, degrading to the fallback payload.

    Keyword arguments are forwarded to `encoder.encode`. The target zone is
    resolved once so the normal and fallback payloads render the same instant.
    """
    kwargs["tz"] = _resolve_tz(kwargs.get("tz"))
    try:
        return dumps(encode(timestamp, level, message, metadata, **kwargs))
    except Exception as e:
        logger.warning("emitting fallback payload, metadata dropped: %s", e)
    return dumps(fallback_payload(timestamp, level, message, tz=kwargs["tz"]))
