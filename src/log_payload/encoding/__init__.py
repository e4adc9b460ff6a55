"""Internal encoding subpackage for the log event normalization pipeline.

This package contains the stages that turn one raw log event into one
JSON-safe payload. Every function within this package is pure (no I/O, no
shared state) and deterministic for a given target timezone.

The public API lives in the top-level `encoder.py` facade. Callers should not
import directly from this package unless accessing a single stage (for
testing or for building a custom pipeline).

Modules:
    normalizer: Message/timestamp coercion and pid/crash_reason encoding
    context_splitter: System/user metadata partition by default key set
    payload_shaper: User metadata on top, system metadata under `context`
    sanitizer: Unified recursive rewrite into JSON-safe values
    stacktrace: Default stacktrace formatter collaborator
    time_utils: Structured time to local ISO-8601 extended text

Design Invariants:
    - No stage raises for the documented metadata value domain
    - Unknown value shapes pass through unchanged
    - Input mappings are never mutated
    - `crash_reason` and `stacktrace` are never both present
"""
from __future__ import annotations

from . import context_splitter as context_splitter  # noqa: F401
from . import normalizer as normalizer  # noqa: F401
from . import payload_shaper as payload_shaper  # noqa: F401
from . import sanitizer as sanitizer  # noqa: F401
from . import stacktrace as stacktrace  # noqa: F401
from . import time_utils as time_utils  # noqa: F401

__all__ = [
    "context_splitter",
    "normalizer",
    "payload_shaper",
    "sanitizer",
    "stacktrace",
    "time_utils",
]
