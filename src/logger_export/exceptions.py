"""
Logger exception hierarchy.

These are raised inside the logger and caught at its public boundary: logging
infrastructure never becomes a crash source for the host application.
"""

from __future__ import annotations

from typing import Any


class LoggerExportError(Exception):
    """Base class for every logger failure.

    Carries a stable ``code`` and free-form ``details`` for diagnostics.
    """

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class InitializationError(LoggerExportError):
    """Documents directory resolution or sink construction failed."""

    def __init__(self, *, reason: str, log_file_name: str | None = None) -> None:
        details: dict[str, Any] = {"reason": reason}
        if log_file_name:
            details["log_file_name"] = log_file_name
        super().__init__(f"Logger initialization failed: {reason}", code="INIT_FAILED", details=details)


class WriteError(LoggerExportError):
    """Appending or flushing to the log file failed after initialization."""

    def __init__(self, *, path: str, reason: str) -> None:
        super().__init__(
            f"Failed to write log file '{path}': {reason}",
            code="WRITE_FAILED",
            details={"path": path, "reason": reason},
        )


class LogFileError(LoggerExportError):
    """Looking up or clearing the log file failed."""

    def __init__(self, *, operation: str, reason: str, path: str | None = None) -> None:
        details: dict[str, Any] = {"operation": operation, "reason": reason}
        if path:
            details["path"] = path
        super().__init__(f"Log file {operation} failed: {reason}", code="LOG_FILE_FAILED", details=details)


__all__ = [
    "LoggerExportError",
    "InitializationError",
    "WriteError",
    "LogFileError",
]
