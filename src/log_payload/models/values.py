"""Metadata value types that need special handling before JSON encoding.

Application code can put almost anything into log metadata. Most values are
already JSON-native; the types here cover the rest of the documented value
domain:

    ProcessRef: identity of the process/thread that emitted an event
    is_process_ref: True for ProcessRef and stdlib thread/process handles
    process_ref_to_text: canonical printable form of a process reference

Canonical text form:
    ProcessRef(pid=4242, thread_id=139871) -> "<4242.139871>"
    ProcessRef(pid=4242)                   -> "<4242>"
    threading.Thread / multiprocessing process objects render through the
    same form using their native ids.
"""
from __future__ import annotations

import multiprocessing.process
import os
import threading
from dataclasses import dataclass
from typing import Any, Optional

__all__ = ["ProcessRef", "is_process_ref", "process_ref_to_text"]


@dataclass(frozen=True)
class ProcessRef:
    """Reference to the process (and optionally thread) that emitted an event."""

    pid: int
    thread_id: Optional[int] = None

    @classmethod
    def current(cls) -> "ProcessRef":
        return cls(pid=os.getpid(), thread_id=threading.get_ident())

    def __str__(self) -> str:
        if self.thread_id is None:
            return f"<{self.pid}>"
        return f"<{self.pid}.{self.thread_id}>"


def is_process_ref(value: Any) -> bool:
    return isinstance(
        value, (ProcessRef, threading.Thread, multiprocessing.process.BaseProcess)
    )


def process_ref_to_text(value: Any) -> str:
    """Render a process reference to its canonical text.

    Threads that were never started have no ident yet; they fall back to the
    thread name so the result is never empty.
    """
    if isinstance(value, ProcessRef):
        return str(value)
    if isinstance(value, threading.Thread):
        ident = value.native_id if value.native_id is not None else value.ident
        if ident is None:
            return f"<{os.getpid()}.{value.name}>"
        return str(ProcessRef(pid=os.getpid(), thread_id=ident))
    if isinstance(value, multiprocessing.process.BaseProcess):
        if value.pid is None:
            return f"<{value.name}>"
        return str(ProcessRef(pid=value.pid))
    return str(value)
