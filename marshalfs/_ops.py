"""Read operations derived from ``open`` and the returned handles.

Nothing here touches the path table directly, so the same code serves the
root filesystem and every :meth:`sub` view of it.
"""

from __future__ import annotations

import fnmatch
import posixpath
from collections.abc import Iterator
from typing import TYPE_CHECKING

from ._exceptions import MFSInvalidPathError, MFSNotADirectoryError
from ._handle import MarshalDirHandle, MarshalFileHandle
from ._path import ROOT, has_magic, join, valid_path

if TYPE_CHECKING:
    from ._info import MFSFileInfo
    from ._typing import WalkEntry


class ReadOnlyFSMixin:
    def open(self, path: str) -> MarshalFileHandle | MarshalDirHandle:
        raise NotImplementedError

    def stat(self, path: str) -> MFSFileInfo:
        with self.open(path) as handle:
            return handle.stat()

    def read_file(self, path: str) -> bytes:
        with self.open(path) as handle:
            return handle.read()

    def read_text(
        self, path: str, encoding: str = "utf-8", errors: str = "strict"
    ) -> str:
        return self.read_file(path).decode(encoding, errors)

    def read_dir(self, path: str) -> list[MFSFileInfo]:
        """Return the entries of directory *path*, sorted by name."""
        with self.open(path) as handle:
            if not isinstance(handle, MarshalDirHandle):
                raise MFSNotADirectoryError("readdir", path)
            entries = handle.read_dir(-1)
        entries.sort(key=lambda e: e.name)
        return entries

    def listdir(self, path: str = ROOT) -> list[str]:
        return [e.name for e in self.read_dir(path)]

    def exists(self, path: str) -> bool:
        try:
            self.stat(path)
        except FileNotFoundError:
            return False
        return True

    def is_dir(self, path: str) -> bool:
        try:
            return self.stat(path).is_dir()
        except FileNotFoundError:
            return False

    def is_file(self, path: str) -> bool:
        try:
            return self.stat(path).is_file()
        except FileNotFoundError:
            return False

    def walk(self, top: str = ROOT) -> Iterator[WalkEntry]:
        """Recursively walk the directory tree (top-down).

        Removing names from the yielded ``dirnames`` list prunes the walk,
        as with :func:`os.walk`.
        """
        entries = self.read_dir(top)
        dirnames = [e.name for e in entries if e.is_dir()]
        filenames = [e.name for e in entries if not e.is_dir()]
        yield top, dirnames, filenames
        for name in dirnames:
            yield from self.walk(join(top, name))

    def glob(self, pattern: str) -> list[str]:
        """Return a sorted list of paths matching *pattern*.

        Supports ``*``, ``?`` and ``[seq]`` within a single path element.
        Generator-backed files are never listed, so they only match a
        pattern without metacharacters.
        """
        if not has_magic(pattern):
            return [pattern] if self.exists(pattern) else []
        dir_pattern, file_pattern = posixpath.split(pattern)
        dir_pattern = dir_pattern or ROOT
        if not has_magic(dir_pattern):
            return sorted(self._glob_in(dir_pattern, file_pattern))
        results: list[str] = []
        for dir_path in self.glob(dir_pattern):
            results.extend(self._glob_in(dir_path, file_pattern))
        return sorted(results)

    def _glob_in(self, dir_path: str, pattern: str) -> list[str]:
        try:
            entries = self.read_dir(dir_path)
        except (FileNotFoundError, NotADirectoryError):
            return []
        return [
            join(dir_path, e.name)
            for e in entries
            if fnmatch.fnmatchcase(e.name, pattern)
        ]

    def sub(self, dir_path: str) -> ReadOnlyFSMixin:
        """Return a view of the subtree rooted at *dir_path*."""
        if not valid_path(dir_path):
            raise MFSInvalidPathError("sub", dir_path)
        if dir_path == ROOT:
            return self
        from ._sub import MarshalSubFileSystem

        return MarshalSubFileSystem(self, dir_path)
