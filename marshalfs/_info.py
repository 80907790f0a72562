from __future__ import annotations

import stat
from collections.abc import Callable
from typing import Any

from ._spec import DIR_MODE, FileCommon


def _zero_size() -> int:
    return 0


class MFSFileInfo:
    """Metadata for one file or directory, shaped after :class:`os.DirEntry`.

    Used both as the result of ``stat()`` and as a directory listing entry.
    ``size`` may be computed lazily: for listing entries it calls the
    marshal function on every access.
    """

    __slots__ = ("name", "mode", "mod_time", "sys", "_size")

    def __init__(
        self,
        name: str,
        mode: int,
        mod_time: float = 0.0,
        sys: Any = None,
        size: Callable[[], int] = _zero_size,
    ) -> None:
        self.name: str = name
        self.mode: int = mode
        self.mod_time: float = mod_time
        self.sys: Any = sys
        self._size = size

    @classmethod
    def from_common(
        cls, name: str, common: FileCommon, size: Callable[[], int] = _zero_size
    ) -> MFSFileInfo:
        return cls(name, common.mode, common.mod_time, common.sys, size)

    @classmethod
    def synthesized_dir(cls, name: str) -> MFSFileInfo:
        return cls(name, DIR_MODE)

    @property
    def size(self) -> int:
        return self._size()

    def is_dir(self) -> bool:
        return stat.S_ISDIR(self.mode)

    def is_file(self) -> bool:
        return not self.is_dir()

    def __repr__(self) -> str:
        kind = "dir" if self.is_dir() else "file"
        return f"<MFSFileInfo {self.name!r} {kind} mode={stat.filemode(self.mode)}>"
