"""Async wrapper around MarshalFileSystem.

All calls are delegated to :func:`asyncio.to_thread`, so generator and
marshal functions never run on the event-loop thread.
"""

from __future__ import annotations

import asyncio
import os
from collections.abc import Mapping
from typing import Any

from ._fs import MarshalFileSystem
from ._info import MFSFileInfo
from ._ops import ReadOnlyFSMixin
from ._spec import FileSpec
from ._typing import MarshalFunc, WalkEntry


class AsyncMarshalHandle:
    """Async wrapper for an open file or directory handle."""

    def __init__(self, _sync_handle) -> None:  # type: ignore[no-untyped-def]
        self._h = _sync_handle

    async def read(self, size: int = -1) -> bytes:
        return await asyncio.to_thread(self._h.read, size)

    async def read_at(self, offset: int, size: int = -1) -> bytes:
        return await asyncio.to_thread(self._h.read_at, offset, size)

    async def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        return await asyncio.to_thread(self._h.seek, offset, whence)

    async def tell(self) -> int:
        return await asyncio.to_thread(self._h.tell)

    async def read_dir(self, n: int = -1) -> list[MFSFileInfo]:
        return await asyncio.to_thread(self._h.read_dir, n)

    async def stat(self) -> MFSFileInfo:
        return await asyncio.to_thread(self._h.stat)

    async def close(self) -> None:
        await asyncio.to_thread(self._h.close)

    async def __aenter__(self) -> AsyncMarshalHandle:
        return self

    async def __aexit__(self, *args) -> None:  # type: ignore[no-untyped-def]
        await self.close()


class _AsyncReadOps:
    """Async versions of the read operations shared by the filesystem and its
    sub views."""

    _sync: ReadOnlyFSMixin

    async def open(self, path: str) -> AsyncMarshalHandle:
        h = await asyncio.to_thread(self._sync.open, path)
        return AsyncMarshalHandle(h)

    async def stat(self, path: str) -> MFSFileInfo:
        return await asyncio.to_thread(self._sync.stat, path)

    async def read_file(self, path: str) -> bytes:
        return await asyncio.to_thread(self._sync.read_file, path)

    async def read_text(
        self, path: str, encoding: str = "utf-8", errors: str = "strict"
    ) -> str:
        return await asyncio.to_thread(self._sync.read_text, path, encoding, errors)

    async def read_dir(self, path: str) -> list[MFSFileInfo]:
        return await asyncio.to_thread(self._sync.read_dir, path)

    async def listdir(self, path: str = ".") -> list[str]:
        return await asyncio.to_thread(self._sync.listdir, path)

    async def exists(self, path: str) -> bool:
        return await asyncio.to_thread(self._sync.exists, path)

    async def is_dir(self, path: str) -> bool:
        return await asyncio.to_thread(self._sync.is_dir, path)

    async def is_file(self, path: str) -> bool:
        return await asyncio.to_thread(self._sync.is_file, path)

    async def glob(self, pattern: str) -> list[str]:
        return await asyncio.to_thread(self._sync.glob, pattern)

    async def walk(self, top: str = ".") -> list[WalkEntry]:
        return await asyncio.to_thread(lambda: list(self._sync.walk(top)))

    def sub(self, dir_path: str) -> _AsyncReadOps:
        view = self._sync.sub(dir_path)
        if view is self._sync:
            return self
        return AsyncMarshalSubFileSystem(view)


class AsyncMarshalSubFileSystem(_AsyncReadOps):
    """Async facade over a :class:`MarshalSubFileSystem` view."""

    def __init__(self, view: ReadOnlyFSMixin) -> None:
        self._sync = view

    @property
    def sync(self) -> ReadOnlyFSMixin:
        return self._sync


class AsyncMarshalFileSystem(_AsyncReadOps):
    """Thin async facade over :class:`MarshalFileSystem`.

    Every method delegates to the synchronous implementation via
    ``asyncio.to_thread``, so the event-loop is never blocked.
    """

    _sync: MarshalFileSystem

    def __init__(
        self,
        marshal: MarshalFunc,
        files: Mapping[str, FileSpec] | None = None,
    ) -> None:
        self._sync = MarshalFileSystem(marshal, files)

    @property
    def sync(self) -> MarshalFileSystem:
        return self._sync

    async def paths(self) -> list[str]:
        return await asyncio.to_thread(self._sync.paths)

    async def write_file(self, path: str, spec: FileSpec) -> None:
        await asyncio.to_thread(self._sync.write_file, path, spec)

    async def delete(self, path: str) -> None:
        await asyncio.to_thread(self._sync.delete, path)

    async def replace_all(self, files: Mapping[str, Any]) -> None:
        await asyncio.to_thread(self._sync.replace_all, files)
