"""Structured event logging for scicalc.

Provides an event schema, a filesystem NDJSON sink, and safe emit helpers
that never raise uncaught exceptions.
"""

from scicalc.logging.events import (
    CalcEvent,
    EventLevel,
    EventType,
    emit,
    emit_info,
    emit_warning,
    error_code_for,
    get_sink,
    set_log_dir,
    truncate_context,
)
from scicalc.logging.sink import EventSink

__all__ = [
    "CalcEvent",
    "EventLevel",
    "EventSink",
    "EventType",
    "emit",
    "emit_info",
    "emit_warning",
    "error_code_for",
    "get_sink",
    "set_log_dir",
    "truncate_context",
]
