"""
Local diagnostic channel.

Failures inside the logger (initialization, writes, file lookups) are reported
here instead of being raised to the caller.
"""

from __future__ import annotations

import sys
from typing import Any

import structlog

from .exceptions import LoggerExportError


def get_logger(name: str | None = None) -> Any:
    """Get a structlog logger for internal diagnostics.

    Writes to stderr with its own processor chain, independent of any global
    structlog configuration, so diagnostics never mix with console log lines.
    """
    logger = structlog.wrap_logger(
        structlog.PrintLogger(file=sys.stderr),
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=False),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.BoundLogger,
        context_class=dict,
    )
    return logger.bind(logger=name or "logger_export")


class Diagnostics:
    """Reports internal failures through structlog; silent when disabled."""

    def __init__(self, enabled: bool = True, logger: Any = None):
        self.enabled = enabled
        self._logger = logger or get_logger("logger_export")

    def report(self, event: str, error: BaseException | None = None, **context: Any) -> None:
        if not self.enabled:
            return
        if error is not None:
            context["error"] = str(error)
            if isinstance(error, LoggerExportError):
                context["code"] = error.code
                context.update(error.details)
            else:
                context["error_type"] = type(error).__name__
        try:
            self._logger.warning(event, **context)
        except Exception:
            pass  # Diagnostics must never break the caller
