"""Recursive rewrite of arbitrary metadata into JSON-safe values.

One walker handles every structural variant in a single pass, so tuples are
eliminated at any depth and enum keys are textualized at every nesting level
of every mapping, including mappings inside sequences. The ingestion service
must never rebuild symbolic identifiers from untrusted input, so no enum
member survives as a key or value.

Rewrite Rules (first match wins):
    Enum member      -> text (its value when that is text, else its name)
    mapping          -> dict; keys via stringify_key, values recursively
    tuple            -> handled exactly like a list of its elements
    list             -> text when every element is an ASCII-printable code,
                        else element-wise sanitized list (order/length kept)
    process ref      -> canonical text ("<pid.thread>")
    exception        -> "ExcType: message"
    bytes/bytearray  -> UTF-8 text (invalid bytes replaced)
    NaN / +-inf float -> "NaN", "Infinity", "-Infinity"
    datetime/date/time -> ISO-8601 text
    anything else    -> unchanged

The fallback arm leaves unknown objects in place. JSON encoding may then fail
downstream; that is handled by the serialization fallback, never here.

Properties:
    sanitize(sanitize(x)) == sanitize(x)
    [104, 101, 108, 108, 111] -> "hello"
    {"a": (1, 2, 3)} -> {"a": [1, 2, 3]}
"""
from __future__ import annotations

import logging
import math
import traceback
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Dict, Mapping, Sequence

from ..models.values import is_process_ref, process_ref_to_text

__all__ = [
    "is_ascii_printable",
    "stringify_key",
    "sanitize",
    "sanitize_metadata",
]

logger = logging.getLogger(__name__)

# Control characters accepted alongside printable ASCII: \a \b \t \n \v \f \r ESC DEL
_PRINTABLE_CONTROL = frozenset({7, 8, 9, 10, 11, 12, 13, 27, 127})

_JSON_SCALARS = (str, int, float, bool, type(None))


def _is_printable_code(value: Any) -> bool:
    if not isinstance(value, int) or isinstance(value, bool):
        return False
    return 32 <= value <= 126 or value in _PRINTABLE_CONTROL


def is_ascii_printable(seq: Sequence[Any]) -> bool:
    """True when every element is a printable ASCII character code.

    An empty sequence qualifies and sanitizes to the empty string.
    """
    return all(_is_printable_code(v) for v in seq)


def _enum_to_text(value: Enum) -> str:
    return value.value if isinstance(value.value, str) else value.name


def stringify_key(key: Any) -> Any:
    if isinstance(key, Enum):
        return _enum_to_text(key)
    return key


def _exception_to_text(exc: BaseException) -> str:
    return "".join(traceback.format_exception_only(type(exc), exc)).strip()


def _non_finite_to_text(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    return "Infinity" if value > 0 else "-Infinity"


def sanitize(value: Any) -> Any:
    # Enum first: str/int based enums would otherwise match the scalar arm.
    if isinstance(value, Enum):
        return _enum_to_text(value)
    if isinstance(value, float) and not math.isfinite(value):
        return _non_finite_to_text(value)
    if isinstance(value, _JSON_SCALARS):
        return value
    if isinstance(value, Mapping):
        return sanitize_metadata(value)
    if isinstance(value, (list, tuple)):
        if is_ascii_printable(value):
            return "".join(chr(c) for c in value)
        return [sanitize(v) for v in value]
    if is_process_ref(value):
        return process_ref_to_text(value)
    if isinstance(value, BaseException):
        return _exception_to_text(value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    logger.debug("leaving value of type %s unchanged", type(value).__name__)
    return value


def sanitize_metadata(metadata: Mapping[Any, Any]) -> Dict[Any, Any]:
    return {stringify_key(k): sanitize(v) for k, v in metadata.items()}
