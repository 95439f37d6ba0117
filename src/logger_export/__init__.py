"""
Dual-sink logger for console and file, with log export helpers.

Provides debug/error logging to two destinations:
- console: stdout, one line per entry line
- file: append-only UTF-8 text file in the documents directory

Library: structlog for entry rendering and diagnostics, pydantic-settings for configuration.
"""

from .config import LoggerConfig
from .core import LoggerExport, LoggerInterface
from .exceptions import InitializationError, LogFileError, LoggerExportError, WriteError
from .formatters import render_value
from .paths import PathProvider, StaticPathProvider, get_path_provider, reset_path_provider, set_path_provider
from .sinks import BaseSink, ConsoleOutput, FileLogOutput

__all__ = [
    "LoggerExport",
    "LoggerInterface",
    "LoggerConfig",
    "BaseSink",
    "ConsoleOutput",
    "FileLogOutput",
    "PathProvider",
    "StaticPathProvider",
    "get_path_provider",
    "set_path_provider",
    "reset_path_provider",
    "render_value",
    "LoggerExportError",
    "InitializationError",
    "WriteError",
    "LogFileError",
]
