"""Typed records and metadata value types used by the encoding pipeline."""
from __future__ import annotations

from .log_event import (
    ContextSplit,
    LogLevel,
    NormalizedLog,
    Payload,
    RawLogEvent,
    SplitLog,
)
from .values import ProcessRef, is_process_ref, process_ref_to_text

__all__ = [
    "ContextSplit",
    "LogLevel",
    "NormalizedLog",
    "Payload",
    "ProcessRef",
    "RawLogEvent",
    "SplitLog",
    "is_process_ref",
    "process_ref_to_text",
]
