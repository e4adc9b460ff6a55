"""First pipeline stage: message, timestamp and reserved metadata encoding.

Builds a `NormalizedLog` from the four raw inputs of a logging call. Every
helper here is total over the documented input domain: unexpected shapes pass
through unchanged instead of raising, because a failing logging call must
never take down the caller.

Steps (in order):
    encode_message: coerce bytes / fragment lists / objects to one text value
    encode_timestamp: structured time -> local ISO-8601 extended text
    encode_metadata: encode_pid then encode_crash_reason

Reserved Metadata Keys:
    pid: process reference replaced by its canonical text
    crash_reason: removed; replaced by ``stacktrace`` holding formatted text

Input mappings are copied, never mutated.
"""
from __future__ import annotations

import logging
from datetime import date, tzinfo
from typing import Any, Callable, Dict, Mapping, Optional

from ..models.log_event import NormalizedLog
from ..models.values import is_process_ref, process_ref_to_text
from .stacktrace import format_stacktrace
from .time_utils import format_iso_extended, is_structured_time, to_local_datetime

__all__ = [
    "encode_message",
    "encode_timestamp",
    "encode_pid",
    "encode_crash_reason",
    "encode_metadata",
    "normalize",
]

logger = logging.getLogger(__name__)

StacktraceFormatter = Callable[[Any], str]

_BYTES_TYPES = (bytes, bytearray, memoryview)


def _fragment_to_text(fragment: Any) -> str:
    if isinstance(fragment, str):
        return fragment
    if isinstance(fragment, _BYTES_TYPES):
        return bytes(fragment).decode("utf-8", errors="replace")
    if isinstance(fragment, int) and not isinstance(fragment, bool):
        try:
            return chr(fragment)
        except (ValueError, OverflowError):
            return str(fragment)
    if isinstance(fragment, (list, tuple)):
        return "".join(_fragment_to_text(f) for f in fragment)
    return str(fragment)


def encode_message(message: Any) -> str:
    """Coerce a message to a single text value.

    Text is returned as-is, byte sequences are decoded as UTF-8 (invalid bytes
    replaced), lists/tuples of fragments are concatenated recursively
    (integers are code points) and any other object goes through ``str``.
    """
    if isinstance(message, str):
        return message
    if isinstance(message, (list, tuple)) or isinstance(message, _BYTES_TYPES):
        return _fragment_to_text(message)
    if message is None:
        return ""
    return str(message)


def encode_timestamp(timestamp: Any, tz: Optional[tzinfo] = None) -> Any:
    """Render a structured time value as local ISO-8601 extended text.

    Non-structured values (pre-formatted text, epoch numbers, None) pass
    through unchanged. Values that cannot be moved into the target zone
    (near datetime.min/max) keep their own offset.
    """
    if not is_structured_time(timestamp):
        return timestamp
    try:
        return format_iso_extended(to_local_datetime(timestamp, tz))
    except (OverflowError, ValueError, OSError) as e:
        logger.debug("timestamp %r not converted to target zone: %s", timestamp, e)
    if isinstance(timestamp, date):
        return timestamp.isoformat()
    return timestamp


def encode_pid(metadata: Mapping[Any, Any]) -> Dict[Any, Any]:
    meta = dict(metadata)
    pid = meta.get("pid")
    if is_process_ref(pid):
        meta["pid"] = process_ref_to_text(pid)
    return meta


def _extract_trace(crash_reason: Any) -> Any:
    if isinstance(crash_reason, BaseException):
        return crash_reason.__traceback__
    if isinstance(crash_reason, tuple):
        if len(crash_reason) == 2:
            return crash_reason[1]
        if len(crash_reason) == 3:
            # sys.exc_info() triple
            return crash_reason[2]
    return crash_reason


def encode_crash_reason(
    metadata: Mapping[Any, Any],
    formatter: StacktraceFormatter = format_stacktrace,
) -> Dict[Any, Any]:
    """Replace a non-null ``crash_reason`` by a formatted ``stacktrace``.

    The crash reason is expected to be an ``(error, trace)`` pair; exc_info
    triples and bare exception instances are accepted too. The two keys are
    never both present in the result.
    """
    meta = dict(metadata)
    crash_reason = meta.get("crash_reason")
    if crash_reason is None:
        return meta
    del meta["crash_reason"]
    meta["stacktrace"] = formatter(_extract_trace(crash_reason))
    return meta


def encode_metadata(
    metadata: Optional[Mapping[Any, Any]],
    formatter: StacktraceFormatter = format_stacktrace,
) -> Dict[Any, Any]:
    return encode_crash_reason(encode_pid(metadata or {}), formatter)


def normalize(
    timestamp: Any,
    level: Any,
    message: Any,
    metadata: Optional[Mapping[Any, Any]],
    *,
    tz: Optional[tzinfo] = None,
    formatter: Optional[StacktraceFormatter] = None,
) -> NormalizedLog:
    """Build the intermediate record from the raw inputs of one logging call.

    Args:
        timestamp: Structured time value or pre-formatted value
        level: Severity (LogLevel member or plain string)
        message: Text, bytes or fragment list
        metadata: Free-form metadata mapping (None treated as empty)
        tz: Target zone for timestamp rendering; None means host local zone
        formatter: Stacktrace formatter for ``crash_reason``

    Returns:
        NormalizedLog with unsplit metadata
    """
    return NormalizedLog(
        timestamp=encode_timestamp(timestamp, tz),
        level=level,
        message=encode_message(message),
        metadata=encode_metadata(metadata, formatter or format_stacktrace),
    )
