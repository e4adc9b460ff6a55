"""Default stacktrace formatter used for `crash_reason` metadata.

The encoder treats the formatter as a collaborator with the signature
``format(trace) -> str``; callers may inject their own. This default accepts
the trace shapes Python code commonly carries around and never raises.

Accepted Traces:
    - traceback objects (``exc.__traceback__``, ``sys.exc_info()[2]``)
    - ``traceback.StackSummary`` or a list of ``FrameSummary`` entries
    - a list of ``(filename, lineno, name, line)`` tuples
    - text (already formatted, returned as-is)
    - None (empty text)

Anything else is rendered with ``repr``.
"""
from __future__ import annotations

import logging
import traceback
from types import TracebackType
from typing import Any

__all__ = ["format_stacktrace"]

logger = logging.getLogger(__name__)


def format_stacktrace(trace: Any) -> str:
    if trace is None:
        return ""
    if isinstance(trace, str):
        return trace
    try:
        if isinstance(trace, TracebackType):
            return "".join(traceback.format_tb(trace))
        if isinstance(trace, (list, traceback.StackSummary)):
            return "".join(traceback.StackSummary.from_list(trace).format())
    except Exception as e:
        logger.debug("stacktrace formatting failed (%s); using repr", e)
    return repr(trace)
