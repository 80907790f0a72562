from __future__ import annotations

import os
from collections.abc import Iterator

from ._exceptions import MFSInvalidArgumentError, MFSIsADirectoryError
from ._info import MFSFileInfo


class MarshalFileHandle:
    """Read-only cursor over bytes materialized when the file was opened.

    The handle owns its bytes and never goes back to the filesystem, so it
    holds no lock and stays valid after the table changes.
    """

    def __init__(self, path: str, info: MFSFileInfo, data: bytes) -> None:
        self._path = path
        self._data = data
        self._info = MFSFileInfo(
            info.name, info.mode, info.mod_time, info.sys, self._length
        )
        self._cursor: int = 0
        self._is_closed: bool = False

    def _length(self) -> int:
        return len(self._data)

    def _assert_open(self) -> None:
        if self._is_closed:
            raise ValueError("I/O operation on closed file.")

    @property
    def name(self) -> str:
        return self._path

    @property
    def closed(self) -> bool:
        return self._is_closed

    def stat(self) -> MFSFileInfo:
        self._assert_open()
        return self._info

    def read(self, size: int = -1) -> bytes:
        self._assert_open()
        if self._cursor < 0:
            raise MFSInvalidArgumentError("read", self._path, "negative offset")
        length = len(self._data)
        if self._cursor >= length:
            return b""
        if size < 0:
            end = length
        else:
            end = min(length, self._cursor + size)
        data = self._data[self._cursor:end]
        self._cursor = end
        return data

    def readinto(self, buffer: bytearray | memoryview) -> int:
        self._assert_open()
        data = self.read(len(buffer))
        n = len(data)
        buffer[:n] = data
        return n

    def readall(self) -> bytes:
        return self.read()

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        self._assert_open()
        if whence == os.SEEK_SET:
            new_pos = offset
        elif whence == os.SEEK_CUR:
            new_pos = self._cursor + offset
        elif whence == os.SEEK_END:
            new_pos = len(self._data) + offset
        else:
            raise MFSInvalidArgumentError(
                "seek", self._path, f"invalid whence value {whence}"
            )
        if new_pos < 0 or new_pos > len(self._data):
            raise MFSInvalidArgumentError(
                "seek", self._path, f"offset {new_pos} out of range"
            )
        self._cursor = new_pos
        return self._cursor

    def tell(self) -> int:
        self._assert_open()
        return self._cursor

    def read_at(self, offset: int, size: int = -1) -> bytes:
        """Read up to *size* bytes at *offset* without moving the cursor.

        A result shorter than *size* means the end of the data was reached.
        """
        self._assert_open()
        if offset < 0 or offset > len(self._data):
            raise MFSInvalidArgumentError(
                "read", self._path, f"offset {offset} out of range"
            )
        if size < 0:
            return self._data[offset:]
        return self._data[offset:offset + size]

    def readinto_at(self, buffer: bytearray | memoryview, offset: int) -> int:
        data = self.read_at(offset, len(buffer))
        n = len(data)
        buffer[:n] = data
        return n

    def readable(self) -> bool:
        self._assert_open()
        return True

    def writable(self) -> bool:
        self._assert_open()
        return False

    def seekable(self) -> bool:
        self._assert_open()
        return True

    def close(self) -> None:
        self._is_closed = True

    def __enter__(self) -> MarshalFileHandle:
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<MarshalFileHandle {self._path!r} size={len(self._data)}>"


class MarshalDirHandle:
    """Paginated cursor over a directory listing computed at open time."""

    def __init__(
        self, path: str, info: MFSFileInfo, entries: list[MFSFileInfo]
    ) -> None:
        self._path = path
        self._info = info
        self._entries = entries
        self._offset: int = 0
        self._is_closed: bool = False

    def _assert_open(self) -> None:
        if self._is_closed:
            raise ValueError("I/O operation on closed directory.")

    @property
    def name(self) -> str:
        return self._path

    @property
    def closed(self) -> bool:
        return self._is_closed

    def stat(self) -> MFSFileInfo:
        self._assert_open()
        return self._info

    def read(self, size: int = -1) -> bytes:
        self._assert_open()
        raise MFSIsADirectoryError("read", self._path)

    def read_dir(self, n: int = -1) -> list[MFSFileInfo]:
        """Return the next *n* entries, or all remaining ones when ``n <= 0``.

        With ``n > 0`` an empty list means the listing is exhausted.
        """
        self._assert_open()
        remaining = len(self._entries) - self._offset
        if n > 0 and remaining > n:
            remaining = n
        entries = self._entries[self._offset:self._offset + remaining]
        self._offset += remaining
        return entries

    def close(self) -> None:
        self._is_closed = True

    def __iter__(self) -> Iterator[MFSFileInfo]:
        while True:
            batch = self.read_dir(1)
            if not batch:
                return
            yield batch[0]

    def __enter__(self) -> MarshalDirHandle:
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<MarshalDirHandle {self._path!r} entries={len(self._entries)}>"
