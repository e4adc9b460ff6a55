"""Pydantic models for the records that flow through the encoding pipeline.

These models give each stage of the pipeline a typed, named structure:

    RawLogEvent -> NormalizedLog -> SplitLog -> Payload

Metadata values are deliberately typed as `Any`: before sanitization they may
hold process references, tuples, exceptions or enum members, and validation
must never reject (or rewrite) them. Only `Payload` is guaranteed to contain
JSON-safe values, and only after the sanitizer has run.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class LogLevel(str, Enum):
    """Syslog-style severity names accepted by the ingestion service."""

    DEBUG = "debug"
    INFO = "info"
    NOTICE = "notice"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"
    ALERT = "alert"
    EMERGENCY = "emergency"


class _PipelineModel(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)


class RawLogEvent(_PipelineModel):
    """The four raw inputs of one logging call, as produced by the caller."""

    timestamp: Any
    level: Any
    message: Any
    metadata: Dict[Any, Any] = Field(default_factory=dict)


class NormalizedLog(_PipelineModel):
    """Event with message coerced to text, timestamp rendered and
    `pid` / `crash_reason` metadata encoded. Not yet split."""

    timestamp: Any
    level: Any
    message: str
    metadata: Dict[Any, Any] = Field(default_factory=dict)


class ContextSplit(_PipelineModel):
    """System (default-key) and user metadata, disjoint by key."""

    system: Dict[Any, Any] = Field(default_factory=dict)
    user: Dict[Any, Any] = Field(default_factory=dict)


class SplitLog(_PipelineModel):
    """NormalizedLog with `metadata` replaced by the split `context`."""

    timestamp: Any
    level: Any
    message: str
    context: ContextSplit = Field(default_factory=ContextSplit)


class Payload(_PipelineModel):
    """Wire shape: user metadata at the top level, system metadata under
    `metadata["context"]`."""

    timestamp: Any
    level: Any
    message: str
    metadata: Dict[Any, Any] = Field(default_factory=dict)
