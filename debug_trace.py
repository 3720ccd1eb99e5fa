"""
debug_trace.py

Trace output for the fetch -> normalize -> import pipeline.

Tracing is off unless FIGSYNC_DEBUG_TRACE is truthy.  Messages are tagged
with a category; the ones FigSync emits are

    MAIN      application start-up, fetch requests from the window
    FETCH     Figma REST calls (URL, payload size)
    PARSE     normalization summaries and stubbed nodes
    IMPORT    clear/render passes and their primitive counts
    RENDER    one line per created primitive (off unless FIGSYNC_TRACE_RENDER)
    SCENE     quick shapes added to the canvas
    SETTINGS  unreadable settings files
    ERROR     exceptions, with traceback
    CRASH     uncaught exceptions

FIGSYNC_TRACE_CATEGORIES (comma separated) restricts output to the listed
categories; ERROR and CRASH are always written.  FIGSYNC_DEBUG_LOG names a
file that receives a copy of every line.
"""

import os
import sys
import time
import traceback
from datetime import datetime
from functools import wraps


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


def _env_categories(name: str) -> frozenset:
    raw = os.environ.get(name, "")
    return frozenset(c.strip().upper() for c in raw.split(",") if c.strip())


DEBUG_TRACE = _env_flag("FIGSYNC_DEBUG_TRACE")

# Per-primitive lines are very verbose for large documents
TRACE_RENDER = _env_flag("FIGSYNC_TRACE_RENDER")

# Empty = every category
TRACE_CATEGORIES = _env_categories("FIGSYNC_TRACE_CATEGORIES")

_ALWAYS = frozenset({"ERROR", "CRASH"})

LOG_FILE = os.environ.get("FIGSYNC_DEBUG_LOG") or None

_log_file = None


def _get_log_file():
    global _log_file
    if LOG_FILE and _log_file is None:
        try:
            _log_file = open(LOG_FILE, "a", encoding="utf-8")
            _log_file.write(f"--- figsync session {datetime.now().isoformat(timespec='seconds')} ---\n")
        except OSError:
            _log_file = None
    return _log_file


def _enabled(category: str) -> bool:
    if not DEBUG_TRACE:
        return False
    if category in _ALWAYS:
        return True
    if category == "RENDER" and not TRACE_RENDER:
        return False
    return not TRACE_CATEGORIES or category in TRACE_CATEGORIES


def trace(msg: str, category: str = "MAIN"):
    """Write a timestamped trace line for *category*."""
    if not _enabled(category):
        return

    timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
    line = f"[{timestamp}] [{category}] {msg}"
    print(line, file=sys.stderr, flush=True)

    log_file = _get_log_file()
    if log_file:
        try:
            log_file.write(line + "\n")
            log_file.flush()
        except OSError:
            pass


def trace_exception(msg: str = "Exception"):
    """Trace the exception currently being handled, with traceback."""
    if DEBUG_TRACE:
        trace(f"{msg}: {traceback.format_exc()}", "ERROR")


def trace_call(category: str = "IMPORT"):
    """Decorator that traces entry, result and elapsed time of a pipeline step.

    Integer results (primitive or node counts) are included in the exit line.
    """
    def decorator(func):
        if not DEBUG_TRACE:
            return func

        @wraps(func)
        def wrapper(*args, **kwargs):
            name = func.__qualname__
            trace(f">>> {name}", category)
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                trace(f"!!! {name} raised {type(e).__name__}: {e}", "ERROR")
                raise
            elapsed_ms = (time.perf_counter() - start) * 1000.0
            summary = f" -> {result}" if isinstance(result, int) else ""
            trace(f"<<< {name}{summary} ({elapsed_ms:.1f} ms)", category)
            return result
        return wrapper
    return decorator


def close_log():
    """Close the trace log file, if one is open."""
    global _log_file
    if _log_file:
        try:
            _log_file.close()
        except OSError:
            pass
        _log_file = None
