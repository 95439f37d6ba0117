"""
Log sink abstractions and concrete implementations.
"""

from __future__ import annotations

import asyncio
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Any, Callable, Sequence

from .diagnostics import Diagnostics
from .exceptions import WriteError

# =============================================================================
# Sink Abstraction (Strategy Pattern)
# =============================================================================


class BaseSink(ABC):
    """Abstract base class for log sinks."""

    @abstractmethod
    async def emit(self, lines: Sequence[str]) -> None:
        """Emit one log entry (already rendered as lines) to the sink."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close the sink and release resources."""
        ...


class ConsoleOutput(BaseSink):
    """Console sink: one line per write, flushed immediately.

    Args:
        stream: Output stream (default: the current ``sys.stdout``)
    """

    def __init__(self, stream: Any = None):
        self._stream = stream

    @property
    def stream(self) -> Any:
        # Resolved lazily so redirected stdout (e.g. pytest capsys) is honoured
        return self._stream or sys.stdout

    def write_lines(self, lines: Sequence[str]) -> None:
        stream = self.stream
        for line in lines:
            stream.write(line + "\n")
        stream.flush()

    async def emit(self, lines: Sequence[str]) -> None:
        self.write_lines(lines)

    async def close(self) -> None:
        pass


class FileLogOutput(BaseSink):
    """Fans entries out to the console and/or an append-only text file.

    All writes go through one ``asyncio.Lock``, so entries land in each
    destination in the order their ``emit`` calls were issued and two entries
    never interleave.
    """

    def __init__(
        self,
        *,
        log_file_path: str | Path,
        write_log_to_file: bool = True,
        write_log_to_console: bool = True,
        console: ConsoleOutput | None = None,
        diagnostics: Diagnostics | None = None,
    ):
        self.log_file_path = Path(log_file_path)
        self.write_log_to_file = write_log_to_file
        self.write_log_to_console = write_log_to_console
        self._console = console or ConsoleOutput()
        self._diagnostics = diagnostics or Diagnostics()
        self._file: IO[str] | None = None
        self._lock = asyncio.Lock()

    @property
    def is_file_open(self) -> bool:
        return self._file is not None and not self._file.closed

    # -------------------------------------------------------------------------
    # Handle lifecycle
    # -------------------------------------------------------------------------

    def _open(self) -> None:
        if not self.write_log_to_file:
            return
        try:
            self.log_file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self.log_file_path, "a", encoding="utf-8")
        except OSError as exc:
            self._file = None
            self._diagnostics.report("log_file_open_failed", exc, path=str(self.log_file_path))

    def _close(self) -> None:
        if self._file is None:
            return
        try:
            if not self._file.closed:
                self._file.flush()
                self._file.close()
        except OSError as exc:
            self._diagnostics.report("log_file_close_failed", exc, path=str(self.log_file_path))
        finally:
            self._file = None

    async def init(self) -> None:
        """Open the file for append, creating it and its parent directory if needed."""
        async with self._lock:
            await asyncio.to_thread(self._open)

    async def reopen(self, prepare: Callable[[], None] | None = None) -> None:
        """Close the handle, run ``prepare`` (if any) and open again for append.

        ``prepare`` runs while the write lock is held, so no entry can be
        written between the close and the reopen. The handle is reopened even
        when ``prepare`` raises; the error then propagates to the caller.
        """
        async with self._lock:

            def _cycle() -> None:
                self._close()
                try:
                    if prepare is not None:
                        prepare()
                finally:
                    self._open()

            await asyncio.to_thread(_cycle)

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def _append(self, lines: Sequence[str]) -> None:
        if self._file is None:
            raise WriteError(path=str(self.log_file_path), reason="log file is not open")
        try:
            for line in lines:
                self._file.write(line + "\n")
            self._file.flush()
        except (OSError, ValueError) as exc:
            raise WriteError(path=str(self.log_file_path), reason=str(exc)) from exc

    async def emit(self, lines: Sequence[str]) -> None:
        async with self._lock:
            if self.write_log_to_console:
                try:
                    self._console.write_lines(lines)
                except Exception as exc:
                    self._diagnostics.report("console_write_failed", exc)
            if self.write_log_to_file:
                try:
                    await asyncio.to_thread(self._append, lines)
                except WriteError as exc:
                    self._diagnostics.report("log_write_failed", exc)

    async def close(self) -> None:
        """Flush and close the file handle. Safe to call more than once."""
        async with self._lock:
            self._close()


__all__ = ["BaseSink", "ConsoleOutput", "FileLogOutput"]
