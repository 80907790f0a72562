from __future__ import annotations

from ._exceptions import MFSInvalidPathError, MFSPathError
from ._handle import MarshalDirHandle, MarshalFileHandle
from ._ops import ReadOnlyFSMixin
from ._path import ROOT, valid_path


class MarshalSubFileSystem(ReadOnlyFSMixin):
    """A view of the subtree of *parent* rooted at *dir_path*.

    The view shares the parent's table and lock. Errors raised by ``open``
    report paths relative to the view.
    """

    def __init__(self, parent: ReadOnlyFSMixin, dir_path: str) -> None:
        self._parent = parent
        self._dir = dir_path

    def _full_name(self, op: str, path: str) -> str:
        if not valid_path(path):
            raise MFSInvalidPathError(op, path)
        if path == ROOT:
            return self._dir
        return self._dir + "/" + path

    def _short_name(self, path: str) -> str:
        if path == self._dir:
            return ROOT
        prefix = self._dir + "/"
        if path.startswith(prefix):
            return path[len(prefix):]
        return path

    def open(self, path: str) -> MarshalFileHandle | MarshalDirHandle:
        full = self._full_name("open", path)
        try:
            return self._parent.open(full)
        except MFSPathError as exc:
            exc.path = self._short_name(exc.path)
            raise

    def __repr__(self) -> str:
        return f"<MarshalSubFileSystem {self._dir!r} of {self._parent!r}>"
