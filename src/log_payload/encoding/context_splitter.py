"""Partition of metadata into system and user context.

Keys that belong to the configured default metadata key set (module,
function, line, pid, ...) are system context; every other key is user
context. The partition is total and disjoint and depends on key membership
only. Values are not touched here.

Enum member keys are matched on their text form so that a key written as
``Key.node`` partitions the same way as ``"node"``.
"""
from __future__ import annotations

from enum import Enum
from typing import AbstractSet, Any, Mapping, Optional

from ..models.log_event import ContextSplit

__all__ = ["split_context"]


def _key_text(key: Any) -> Any:
    if isinstance(key, Enum):
        return key.value if isinstance(key.value, str) else key.name
    return key


def split_context(
    metadata: Optional[Mapping[Any, Any]], default_keys: AbstractSet[Any]
) -> ContextSplit:
    system: dict[Any, Any] = {}
    user: dict[Any, Any] = {}
    for key, value in (metadata or {}).items():
        if key in default_keys or _key_text(key) in default_keys:
            system[key] = value
        else:
            user[key] = value
    return ContextSplit(system=system, user=user)
