"""
Documents directory resolution.

The logger never hard-codes where its file lives: it asks a ``PathProvider``.
A process-wide provider is kept here so applications (and tests) can swap the
platform lookup for their own.
"""

from __future__ import annotations

import asyncio
import os
import sys
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class PathProvider(Protocol):
    """Resolves the application documents directory."""

    async def get_documents_path(self) -> str: ...


class DefaultPathProvider:
    """Platform lookup: ``XDG_DOCUMENTS_DIR`` on Linux, else ``~/Documents``."""

    async def get_documents_path(self) -> str:
        return await asyncio.to_thread(self._resolve)

    @staticmethod
    def _resolve() -> str:
        if sys.platform.startswith("linux"):
            xdg = os.environ.get("XDG_DOCUMENTS_DIR")
            if xdg:
                return str(Path(os.path.expandvars(xdg)).expanduser())
        # Path.home() raises RuntimeError when no home directory can be found
        return str(Path.home() / "Documents")


class StaticPathProvider:
    """Always answers with a fixed directory."""

    def __init__(self, path: str | os.PathLike[str]):
        self._path = os.fspath(path)

    async def get_documents_path(self) -> str:
        return self._path


# Module-level singleton
_path_provider: PathProvider | None = None


def get_path_provider() -> PathProvider:
    """Return the process-wide provider, creating the platform default on first use."""
    global _path_provider

    if _path_provider is None:
        _path_provider = DefaultPathProvider()
    return _path_provider


def set_path_provider(provider: PathProvider) -> None:
    """Replace the process-wide provider."""
    global _path_provider
    _path_provider = provider


def reset_path_provider() -> None:
    """Drop the cached provider (used by tests)."""
    global _path_provider
    _path_provider = None


__all__ = [
    "PathProvider",
    "DefaultPathProvider",
    "StaticPathProvider",
    "get_path_provider",
    "set_path_provider",
    "reset_path_provider",
]
