"""Package initialization for log-payload.

Normalizes one raw log event (timestamp, level, message, metadata) into a
JSON-safe payload for a remote log-ingestion service. See `encoder.encode`.
"""

from .encoder import encode, encode_event
from .errors import PayloadEncodeError
from .models import LogLevel, ProcessRef, RawLogEvent
from .records import event_from_record
from .serialization import dumps, encode_json

__all__ = [
    "LogLevel",
    "PayloadEncodeError",
    "ProcessRef",
    "RawLogEvent",
    "dumps",
    "encode",
    "encode_event",
    "encode_json",
    "event_from_record",
]
