"""Public facade for log event to ingestion payload encoding.

This module provides the stable public API for converting the raw inputs of a
logging call into a JSON-safe payload. The stage logic lives in the
log_payload.encoding package; this facade wires the stages together and
threads configuration (default metadata keys, target timezone, stacktrace
formatter) explicitly into them.

Pipeline:
    normalize -> split_context -> to_payload -> sanitize (whole record)

Public Functions:
    new: Normalize and split one event into a SplitLog
    encode: Full pipeline, returns a plain JSON-encodable dict
    encode_event: `encode` for a RawLogEvent model
"""

from __future__ import annotations

from datetime import tzinfo
from typing import AbstractSet, Any, Dict, Mapping, Optional

from .config import get_settings
from .encoding.context_splitter import split_context
from .encoding.normalizer import StacktraceFormatter, normalize
from .encoding.payload_shaper import to_payload
from .encoding.sanitizer import sanitize
from .models.log_event import RawLogEvent, SplitLog

__all__ = ["new", "encode", "encode_event"]


def new(
    timestamp: Any,
    level: Any,
    message: Any,
    metadata: Optional[Mapping[Any, Any]],
    *,
    default_keys: AbstractSet[Any],
    tz: Optional[tzinfo] = None,
    formatter: Optional[StacktraceFormatter] = None,
) -> SplitLog:
    """Normalize one event and split its metadata into system/user context."""
    log = normalize(timestamp, level, message, metadata, tz=tz, formatter=formatter)
    return SplitLog(
        timestamp=log.timestamp,
        level=log.level,
        message=log.message,
        context=split_context(log.metadata, default_keys),
    )


def encode(
    timestamp: Any,
    level: Any,
    message: Any,
    metadata: Optional[Mapping[Any, Any]] = None,
    *,
    default_keys: Optional[AbstractSet[Any]] = None,
    tz: Optional[tzinfo] = None,
    formatter: Optional[StacktraceFormatter] = None,
) -> Dict[str, Any]:
    """Convert one log event into a wire-ready payload.

    Args:
        timestamp: Structured time value (datetime/date/struct_time) or a
            pre-formatted value passed through unchanged
        level: LogLevel member or plain string
        message: Text, bytes or fragment list
        metadata: Free-form metadata; ``pid`` and ``crash_reason`` are reserved
        default_keys: Keys nested under ``metadata.context``; None reads
            DEFAULT_METADATA_KEYS from settings
        tz: Target zone for the timestamp; None reads LOCAL_TIMEZONE from
            settings (host local zone when unset)
        formatter: Stacktrace formatter for ``crash_reason``

    Returns:
        Dict with ``timestamp``, ``level``, ``message`` and ``metadata`` keys,
        every value JSON-safe for the documented metadata value domain
    """
    if default_keys is None or tz is None:
        settings = get_settings()
        if default_keys is None:
            default_keys = settings.default_keys
        if tz is None:
            tz = settings.tzinfo
    split = new(
        timestamp,
        level,
        message,
        metadata,
        default_keys=default_keys,
        tz=tz,
        formatter=formatter,
    )
    return sanitize(to_payload(split).model_dump())


def encode_event(event: RawLogEvent, **kwargs: Any) -> Dict[str, Any]:
    return encode(event.timestamp, event.level, event.message, event.metadata, **kwargs)
