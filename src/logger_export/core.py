"""
Logger facade: console + file logging with export helpers.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import structlog

from .config import LoggerConfig
from .diagnostics import Diagnostics
from .exceptions import InitializationError, LogFileError
from .formatters import (
    ERROR_TAG,
    TIMESTAMP_FORMAT,
    LineCollector,
    PrettyPrinter,
    StackTraceRef,
    capture_stack,
    render_value,
)
from .paths import PathProvider, get_path_provider
from .sinks import ConsoleOutput, FileLogOutput


class LoggerInterface(ABC):
    """Operations every logger implementation provides."""

    @abstractmethod
    async def d(self, message: Any, *, stack_trace: StackTraceRef | None = None) -> None:
        """Log a debug message (any value: text, mapping, sequence, object)."""
        ...

    @abstractmethod
    async def e(self, error: Any, *, message: Any = None, stack_trace: StackTraceRef | None = None) -> None:
        """Log an error, with an optional message and stack trace."""
        ...

    @abstractmethod
    async def get_log_file(self) -> Path | None:
        """Return the log file if it exists, else ``None``."""
        ...

    @abstractmethod
    async def clear_log_file(self) -> None:
        """Empty the log file. No-op when it does not exist."""
        ...


class LoggerExport(LoggerInterface):
    """Logger writing to the console and/or a file in the documents directory.

    Construction returns at once; the file path is resolved and the sink opened
    by a background task. Every call waits for that task before writing, and
    calls are written in the order they were issued. No public method raises:
    failures go to the diagnostic channel and the call becomes a no-op.

    Args:
        write_log_to_file: Append entries to the log file (default: True)
        write_log_to_console: Print entries to stdout (default: True)
        error_method_count: Stack frames shown for errors (default: 4)
        log_file_name: Log file name (default: "elog.txt")
        config: Full configuration; keyword arguments above override it
        path_provider: Documents directory resolver (default: process-wide provider)
        console: Console sink (default: stdout)
    """

    def __init__(
        self,
        write_log_to_file: bool | None = None,
        write_log_to_console: bool | None = None,
        error_method_count: int | None = None,
        log_file_name: str | None = None,
        *,
        config: LoggerConfig | None = None,
        path_provider: PathProvider | None = None,
        console: ConsoleOutput | None = None,
    ):
        overrides = {
            k: v
            for k, v in {
                "write_log_to_file": write_log_to_file,
                "write_log_to_console": write_log_to_console,
                "error_method_count": error_method_count,
                "log_file_name": log_file_name,
            }.items()
            if v is not None
        }
        if config is None:
            config = LoggerConfig(**overrides)
        elif overrides:
            config = type(config).model_validate({**config.model_dump(), **overrides})

        self.config = config
        self._path_provider = path_provider
        self._console = console
        self._diagnostics = Diagnostics(enabled=config.diagnostics)
        self._output: FileLogOutput | None = None
        self._ready: asyncio.Future[None] | None = None
        self._init_task: asyncio.Task[None] | None = None
        self._closed = False

        self._logger = structlog.wrap_logger(
            LineCollector(),
            processors=[
                structlog.processors.TimeStamper(fmt=TIMESTAMP_FORMAT, utc=False, key="timestamp"),
                PrettyPrinter(
                    method_count=config.method_count,
                    error_method_count=config.error_method_count,
                ),
            ],
            wrapper_class=structlog.BoundLogger,
            context_class=dict,
        )

        try:
            self._start()
        except RuntimeError:
            # No running loop yet: the first call made inside one starts initialization
            pass

    @classmethod
    def from_config(cls, config: LoggerConfig, *, path_provider: PathProvider | None = None) -> "LoggerExport":
        return cls(config=config, path_provider=path_provider)

    async def __aenter__(self) -> "LoggerExport":
        await self.ready()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    # =========================================================================
    # Initialization
    # =========================================================================

    def _start(self) -> asyncio.Future[None]:
        if self._ready is None:
            loop = asyncio.get_running_loop()
            self._ready = loop.create_future()
            self._init_task = loop.create_task(self._init(self._ready))
        return self._ready

    async def _init(self, ready: asyncio.Future[None]) -> None:
        try:
            log_file_path = await self._get_log_file_path()
            output = FileLogOutput(
                log_file_path=log_file_path,
                write_log_to_file=self.config.write_log_to_file,
                write_log_to_console=self.config.write_log_to_console,
                console=self._console,
                diagnostics=self._diagnostics,
            )
            await output.init()
            self._output = output
            ready.set_result(None)
        except Exception as exc:
            error = exc if isinstance(exc, InitializationError) else InitializationError(
                reason=str(exc) or type(exc).__name__, log_file_name=self.config.log_file_name
            )
            ready.set_exception(error)
            # Mark retrieved: callers observe the failure by awaiting the barrier
            ready.exception()
            self._diagnostics.report("logger_init_failed", error)

    async def _wait_ready(self) -> FileLogOutput:
        await self._start()
        if self._output is None:
            raise InitializationError(reason="logger is closed", log_file_name=self.config.log_file_name)
        return self._output

    async def ready(self) -> bool:
        """Wait for initialization. True if the logger can write."""
        try:
            await self._wait_ready()
        except InitializationError:
            return False
        return True

    async def _get_log_file_path(self) -> Path:
        documents_dir = self.config.documents_dir
        if not documents_dir:
            provider = self._path_provider or get_path_provider()
            try:
                documents_dir = await provider.get_documents_path()
            except Exception as exc:
                raise InitializationError(
                    reason=f"documents directory unavailable: {exc}", log_file_name=self.config.log_file_name
                ) from exc
        if not documents_dir:
            raise InitializationError(reason="documents directory unavailable", log_file_name=self.config.log_file_name)
        return Path(documents_dir) / self.config.log_file_name

    @property
    def log_file_path(self) -> Path | None:
        return self._output.log_file_path if self._output is not None else None

    # =========================================================================
    # Logging
    # =========================================================================

    async def d(self, message: Any, *, stack_trace: StackTraceRef | None = None) -> None:
        try:
            output = await self._wait_ready()
            lines = self._logger.debug(render_value(message), stack_trace=stack_trace)
            await output.emit(lines)
        except Exception as exc:
            self._diagnostics.report("log_debug_failed", exc)

    async def e(self, error: Any, *, message: Any = None, stack_trace: StackTraceRef | None = None) -> None:
        """Log ``[ERROR] <message>`` followed by the error text and its trace.

        Without an explicit ``stack_trace``, an exception that carries a
        ``__traceback__`` is shown with that traceback (where it was raised);
        any other error gets the stack of the ``e()`` call site.
        """
        if stack_trace is None:
            if isinstance(error, BaseException) and error.__traceback__ is not None:
                stack_trace = error.__traceback__
            else:
                # Captured before the first suspension so the caller's frames are still live
                stack_trace = capture_stack(skip=1)
        try:
            output = await self._wait_ready()
            text = "" if message is None else render_value(message)
            lines = self._logger.error(
                f"{ERROR_TAG} {text}",
                error=error,
                stack_trace=stack_trace,
            )
            await output.emit(lines)
        except Exception as exc:
            self._diagnostics.report("log_error_failed", exc)

    debug = d
    error = e

    # =========================================================================
    # Log File Operations
    # =========================================================================

    async def get_log_file(self) -> Path | None:
        try:
            log_file = await self._get_log_file_path()
            if await asyncio.to_thread(log_file.is_file):
                return log_file
        except Exception as exc:
            self._diagnostics.report(
                "log_file_lookup_failed", LogFileError(operation="lookup", reason=str(exc))
            )
        return None

    async def clear_log_file(self) -> None:
        try:
            output = await self._wait_ready()
            log_file = output.log_file_path

            def _recreate() -> None:
                if log_file.exists():
                    log_file.unlink()
                    log_file.touch()

            await output.reopen(prepare=_recreate)
        except Exception as exc:
            self._diagnostics.report(
                "log_file_clear_failed", LogFileError(operation="clear", reason=str(exc))
            )

    async def close(self) -> None:
        """Tear down the sink. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        if self._ready is not None:
            try:
                await self._ready
            except InitializationError:
                pass
        output, self._output = self._output, None
        if output is not None:
            await output.close()


__all__ = ["LoggerInterface", "LoggerExport"]
