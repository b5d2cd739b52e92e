"""Crash hooks: uncaught sync and asyncio exceptions become JSONL crash records."""

import json
import os
import sys
import traceback

from ulidkit.identifier import new_str
from ulidkit.internal.logging import get_logger
from ulidkit.utils.timestamp import format_timestamp

# Overridden from LoggingConfig.crash_file by configure()
_crash_log = "logs/crash.log"


def configure(crash_file):
    global _crash_log
    _crash_log = crash_file


def crash_record(exc, context=None):
    """JSON-ready record for ``exc``; a UlidError keeps its own tracking id."""
    record = {
        "id": getattr(exc, "error_id", None) or new_str(),
        "timestamp": format_timestamp(),
        "type": type(exc).__name__ if exc is not None else "Unknown",
        "msg": str(exc) if exc is not None else "",
        "traceback": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)) if exc is not None else None,
    }
    if context:
        record["context"] = context
    return record


def _append(record):
    """Append one JSON line to the crash log. Never raises."""
    try:
        log_dir = os.path.dirname(_crash_log)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        with open(_crash_log, "a") as f:
            f.write(json.dumps(record, default=str) + "\n")
    except Exception:
        pass


def log_crash(exc_type, exc_value, exc_tb):
    """sys.excepthook: structured log line plus crash record."""
    if exc_value is not None and exc_value.__traceback__ is None:
        exc_value = exc_value.with_traceback(exc_tb)
    record = crash_record(exc_value)
    get_logger().error("Uncaught exception", error=record["msg"], crash_id=record["id"], type=record["type"])
    sys.stderr.write(record["traceback"] or "")
    _append(record)


def create_async_handler(logger=None):
    """Event loop exception handler writing crash records."""
    def handler(loop, context):
        exc = context.get("exception")
        record = crash_record(exc, {"message": context.get("message"), "task": str(context.get("future", ""))})
        if exc is None:
            record["type"] = "AsyncError"
            record["msg"] = context.get("message", "Unknown")
        (logger or get_logger()).error("Async exception", error=record["msg"], crash_id=record["id"])
        _append(record)
    return handler


def install_crash_handler():
    sys.excepthook = log_crash
