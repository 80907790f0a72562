from __future__ import annotations

import functools
import logging
from collections.abc import Mapping
from typing import Any

from ._exceptions import (
    MFSGeneratorError,
    MFSInvalidPathError,
    MFSMarshalError,
    MFSNotExistError,
)
from ._handle import MarshalDirHandle, MarshalFileHandle
from ._info import MFSFileInfo
from ._lock import ReadWriteLock
from ._ops import ReadOnlyFSMixin
from ._path import ROOT, base_name, valid_path
from ._spec import FileSpec, ObjectFileSpec
from ._table import PathTable, validate_entry, validate_table
from ._typing import MarshalFunc

logger = logging.getLogger(__name__)


class _Resolved:
    __slots__ = ("spec", "value")

    def __init__(self, spec: FileSpec, value: Any) -> None:
        self.spec = spec
        self.value = value


# ---------------------------------------------------------------------------
#  MarshalFileSystem
# ---------------------------------------------------------------------------


class MarshalFileSystem(ReadOnlyFSMixin):
    """A read-only filesystem whose files are values marshalled on demand.

    *files* maps slash-separated relative paths to :class:`ObjectFileSpec`
    entries, and glob patterns to :class:`GeneratorFileSpec` entries.
    Intermediate directories never need to be declared; they are inferred
    from the paths below them.
    """

    def __init__(
        self,
        marshal: MarshalFunc,
        files: Mapping[str, FileSpec] | None = None,
    ) -> None:
        if not callable(marshal):
            raise TypeError(f"marshal must be callable, got {marshal!r}")
        table = PathTable(files)
        validate_table(table)
        self._marshal: MarshalFunc = marshal
        self._table: PathTable = table
        self._lock = ReadWriteLock()
        logger.debug("installed path table with %d entries", len(table))

    @classmethod
    def from_values(
        cls, marshal: MarshalFunc, values: Mapping[str, Any]
    ) -> MarshalFileSystem:
        """Build a filesystem with one object-backed file per value."""
        return cls(marshal, {path: ObjectFileSpec(v) for path, v in values.items()})

    @property
    def marshal(self) -> MarshalFunc:
        return self._marshal

    # -- resolution --

    def _resolve(self, table: PathTable, op: str, path: str) -> _Resolved | None:
        spec = table.lookup(path)
        if spec is not None:
            return _Resolved(spec, spec.value)
        found = table.match(path)
        if found is None:
            return None
        pattern, gspec = found
        try:
            value = gspec.resolve_value(path)
        except FileNotFoundError as exc:
            raise MFSNotExistError(op, path) from exc
        except Exception as exc:
            logger.debug("generator %r failed for '%s': %r", pattern, path, exc)
            raise MFSGeneratorError(op, path, f"generator failed: {exc}") from exc
        return _Resolved(gspec, value)

    def _materialize(self, op: str, path: str, spec: FileSpec, value: Any) -> bytes:
        if value is None:
            return b""
        marshal = spec.common.marshal or self._marshal
        try:
            data = marshal(value)
        except Exception as exc:
            logger.debug("marshal failed for '%s': %r", path, exc)
            raise MFSMarshalError(op, path, f"marshal failed: {exc}") from exc
        if isinstance(data, str):
            return data.encode("utf-8")
        if isinstance(data, (bytes, bytearray, memoryview)):
            return bytes(data)
        raise MFSMarshalError(
            op, path, f"marshal returned {type(data).__name__}, expected bytes"
        )

    def _lazy_size(self, path: str, spec: ObjectFileSpec) -> int:
        return len(self._materialize("stat", path, spec, spec.value))

    def _list_children(self, table: PathTable, dir_path: str) -> list[MFSFileInfo]:
        entries: dict[str, MFSFileInfo] = {}
        need: set[str] = set()
        prefix = "" if dir_path == ROOT else dir_path + "/"
        for fname, spec in table.files():
            if not fname.startswith(prefix):
                continue
            rest = fname[len(prefix):]
            i = rest.find("/")
            if i >= 0:
                need.add(rest[:i])
            elif spec.common.is_dir:
                entries[rest] = MFSFileInfo.from_common(rest, spec.common)
            else:
                size = functools.partial(self._lazy_size, fname, spec)
                entries[rest] = MFSFileInfo.from_common(rest, spec.common, size)
        for _, parent in table.pattern_dirs():
            key = parent + "/"
            if key.startswith(prefix) and key != prefix:
                rest = key[len(prefix):]
                need.add(rest[:rest.index("/")])
        for name in need - entries.keys():
            entries[name] = MFSFileInfo.synthesized_dir(name)
        return sorted(entries.values(), key=lambda e: e.name)

    # -- public API --

    def open(self, path: str) -> MarshalFileHandle | MarshalDirHandle:
        if not valid_path(path):
            raise MFSInvalidPathError("open", path)
        with self._lock.read_locked():
            table = self._table
            resolved = self._resolve(table, "open", path)
            if resolved is not None and not resolved.spec.common.is_dir:
                data = self._materialize("open", path, resolved.spec, resolved.value)
                info = MFSFileInfo.from_common(base_name(path), resolved.spec.common)
                return MarshalFileHandle(path, info, data)
            entries = self._list_children(table, path)
            found = resolved is not None or table.has_descendants(path)

        if not found and path != ROOT:
            raise MFSNotExistError("open", path)
        name = ROOT if path == ROOT else base_name(path)
        if resolved is None:
            info = MFSFileInfo.synthesized_dir(name)
        else:
            info = MFSFileInfo.from_common(name, resolved.spec.common)
        return MarshalDirHandle(path, info, entries)

    def paths(self) -> list[str]:
        """Return every path and pattern in the table, sorted."""
        with self._lock.read_locked():
            return self._table.paths()

    # -- administrative API (not part of the read-only contract) --

    def write_file(self, path: str, spec: FileSpec) -> None:
        """Insert or replace one entry.

        The new entry is checked against the current table for file/directory
        conflicts before it is installed.
        """
        if path == ROOT or not valid_path(path):
            raise MFSInvalidPathError("write", path)
        with self._lock.write_locked():
            validate_entry(self._table, path, spec)
            self._table = self._table.with_entry(path, spec)
        logger.debug("wrote entry '%s' (%s)", path, type(spec).__name__)

    def delete(self, path: str) -> None:
        with self._lock.write_locked():
            table = self._table.without_entry(path)
            if table is None:
                raise MFSNotExistError("delete", path)
            self._table = table
        logger.debug("deleted entry '%s'", path)

    def replace_all(self, files: Mapping[str, FileSpec]) -> None:
        """Atomically swap the whole table. A table that fails validation is
        never installed."""
        table = PathTable(files)
        validate_table(table, "replace")
        with self._lock.write_locked():
            self._table = table
        logger.debug("replaced path table with %d entries", len(table))

    def __repr__(self) -> str:
        return f"<MarshalFileSystem entries={len(self._table)}>"
