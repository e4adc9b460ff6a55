"""Adapter from stdlib `logging.LogRecord` objects to `RawLogEvent`.

A logging handler that ships events to the ingestion service has a
`LogRecord` in hand, not the four raw inputs. This module builds them:

    timestamp: aware datetime from ``record.created``
    level: LogLevel mapped from ``record.levelname`` (unknown names lowercased)
    message: ``record.getMessage()``
    metadata: system fields (logger, module, function, file, line, pid,
        process_name, thread_name, crash_reason) plus every ``extra=``
        attribute set on the record

``crash_reason`` is only present when the record carries ``exc_info``.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from .models.log_event import LogLevel, RawLogEvent
from .models.values import ProcessRef

__all__ = ["event_from_record", "level_from_record"]

_LEVELS: Dict[str, LogLevel] = {
    "DEBUG": LogLevel.DEBUG,
    "INFO": LogLevel.INFO,
    "WARNING": LogLevel.WARNING,
    "WARN": LogLevel.WARNING,
    "ERROR": LogLevel.ERROR,
    "CRITICAL": LogLevel.CRITICAL,
    "FATAL": LogLevel.CRITICAL,
}

# Attributes every LogRecord has; anything else was passed via extra=
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime", "taskName"}


def level_from_record(record: logging.LogRecord) -> Any:
    return _LEVELS.get(record.levelname, record.levelname.lower())


def event_from_record(record: logging.LogRecord) -> RawLogEvent:
    metadata: Dict[str, Any] = {
        "logger": record.name,
        "module": record.module,
        "function": record.funcName,
        "file": record.pathname,
        "line": record.lineno,
        "process_name": record.processName,
        "thread_name": record.threadName,
    }
    if record.process is not None:
        metadata["pid"] = ProcessRef(pid=record.process, thread_id=record.thread)
    if record.exc_info and record.exc_info[1] is not None:
        metadata["crash_reason"] = (record.exc_info[1], record.exc_info[2])
    for key, value in vars(record).items():
        if key not in _RESERVED_ATTRS and not key.startswith("_"):
            metadata[key] = value
    return RawLogEvent(
        timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc),
        level=level_from_record(record),
        message=record.getMessage(),
        metadata=metadata,
    )
