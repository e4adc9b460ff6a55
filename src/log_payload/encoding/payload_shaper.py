"""Reassembly of a split record into the wire shape.

User metadata is promoted to the top level of the new metadata map and the
system metadata is nested under its ``context`` key. The freshly built map is
sanitized before it is attached, since merging brings raw nested values back
into the record.

Wire Shape:
    {
        "timestamp": ..., "level": ..., "message": "...",
        "metadata": {<user keys>..., "context": {<system keys>...}},
    }

A user key named ``context`` is overwritten by the system context.
"""
from __future__ import annotations

from typing import Any, Dict

from ..models.log_event import Payload, SplitLog
from .sanitizer import sanitize_metadata

__all__ = ["to_payload"]


def to_payload(log: SplitLog) -> Payload:
    metadata: Dict[Any, Any] = {}
    metadata.update(log.context.user or {})
    metadata["context"] = log.context.system or {}
    return Payload(
        timestamp=log.timestamp,
        level=log.level,
        message=log.message,
        metadata=sanitize_metadata(metadata),
    )
