"""
Entry rendering: value stringification, stack-trace formatting and the
structlog processors that turn one logging call into a list of text lines.
"""

from __future__ import annotations

import traceback
from collections.abc import Mapping, Set
from pathlib import Path
from types import TracebackType
from typing import Any, Iterable, Sequence

from structlog.typing import EventDict, WrappedLogger

TIMESTAMP_FORMAT = "%d-%m %H:%M:%S"
ERROR_TAG = "[ERROR]"

StackTraceRef = str | TracebackType | traceback.StackSummary | Sequence[traceback.FrameSummary]

_PACKAGE_DIR = str(Path(__file__).resolve().parent)


# =============================================================================
# Value Rendering
# =============================================================================


def render_value(value: Any, _seen: frozenset[int] = frozenset()) -> str:
    """Render an arbitrary value as log text.

    Mappings print as ``{k: v, ...}`` and other collections as ``[v0, v1, ...]``,
    recursively, with nested strings left unquoted. A container that contains
    itself prints as ``{...}`` or ``[...]`` at the repeat. Exceptions print as
    ``TypeName: message``. Everything else uses ``str()``.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, BaseException):
        text = str(value)
        return f"{type(value).__name__}: {text}" if text else type(value).__name__
    if isinstance(value, Mapping):
        if id(value) in _seen:
            return "{...}"
        seen = _seen | {id(value)}
        return "{" + ", ".join(f"{render_value(k, seen)}: {render_value(v, seen)}" for k, v in value.items()) + "}"
    if isinstance(value, (list, tuple, Set)):
        if id(value) in _seen:
            return "[...]"
        seen = _seen | {id(value)}
        return "[" + ", ".join(render_value(v, seen) for v in value) + "]"
    return str(value)


# =============================================================================
# Stack Traces
# =============================================================================


def _is_internal(frame: traceback.FrameSummary) -> bool:
    try:
        return str(Path(frame.filename).resolve()).startswith(_PACKAGE_DIR)
    except (OSError, ValueError):
        return False


def capture_stack(skip: int = 0) -> traceback.StackSummary:
    """Capture the current call stack (outermost first), minus ``skip`` innermost frames."""
    stack = traceback.extract_stack()
    # Drop this function's own frame
    stack.pop()
    for _ in range(skip):
        if stack:
            stack.pop()
    return stack


def format_stack_trace(stack_trace: StackTraceRef | None, limit: int) -> list[str]:
    """Format up to ``limit`` frames, innermost first, skipping logger-internal frames."""
    if stack_trace is None or limit <= 0:
        return []

    if isinstance(stack_trace, str):
        lines = [line.strip() for line in stack_trace.splitlines() if line.strip()]
        return [f"#{i}   {line}" for i, line in enumerate(lines[:limit])]

    if isinstance(stack_trace, TracebackType):
        frames: Iterable[traceback.FrameSummary] = traceback.extract_tb(stack_trace)
    else:
        frames = stack_trace

    kept = [f for f in reversed(list(frames)) if not _is_internal(f)]
    return [f"#{i}   {f.name} ({f.filename}:{f.lineno})" for i, f in enumerate(kept[:limit])]


# =============================================================================
# Pretty Printer (structlog renderer)
# =============================================================================


class PrettyPrinter:
    """Plain-text printer: no boxes, no colors, no emojis.

    Output order is the message line(s), then the error text, then the stack
    frames. An explicit stack trace shows up to ``error_method_count`` frames;
    without one, ``method_count`` frames of the current stack are captured.
    """

    def __init__(self, *, method_count: int = 0, error_method_count: int = 4, timestamp_key: str = "timestamp"):
        self.method_count = method_count
        self.error_method_count = error_method_count
        self.timestamp_key = timestamp_key

    def format(
        self,
        message: Any,
        error: Any = None,
        stack_trace: StackTraceRef | None = None,
    ) -> list[str]:
        lines = render_value(message).split("\n")

        if error is not None:
            lines.extend(render_value(error).split("\n"))

        if stack_trace is None:
            if self.method_count > 0:
                lines.extend(format_stack_trace(capture_stack(), self.method_count))
        else:
            lines.extend(format_stack_trace(stack_trace, self.error_method_count))

        return lines

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
        event = render_value(event_dict.pop("event", ""))
        timestamp = event_dict.pop(self.timestamp_key, None)
        head = f"{timestamp} {event}" if timestamp else event
        lines = self.format(head, event_dict.pop("error", None), event_dict.pop("stack_trace", None))
        return "\n".join(lines)


class LineCollector:
    """structlog wrapped logger that hands the rendered entry back as lines."""

    def msg(self, message: str) -> list[str]:
        return message.split("\n")

    debug = info = warning = error = critical = log = msg


__all__ = [
    "TIMESTAMP_FORMAT",
    "ERROR_TAG",
    "StackTraceRef",
    "render_value",
    "capture_stack",
    "format_stack_trace",
    "PrettyPrinter",
    "LineCollector",
]
