"""MFSTextHandle: text reading helper.

Wraps a :class:`MarshalFileHandle` to decode marshalled bytes as text,
for code that consumes line-oriented or JSON/YAML-style files.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ._handle import MarshalFileHandle

_CHUNK_SIZE = 256


def _line_end(data: bytes | bytearray) -> int:
    """Return the length of the first line in *data*, terminator included."""
    lf = data.find(b"\n")
    cr = data.find(b"\r")
    if cr < 0 or (0 <= lf < cr):
        return len(data) if lf < 0 else lf + 1
    if data[cr + 1:cr + 2] == b"\n":
        return cr + 2
    return cr + 1


class MFSTextHandle:
    """Text reading helper that wraps MarshalFileHandle.

    Parameters
    ----------
    handle:
        File handle obtained from ``MarshalFileSystem.open()``.
    encoding:
        Text encoding (default ``"utf-8"``).
    errors:
        Decode error handling (default ``"strict"``).

    Example
    -------
    >>> with mfs.open("config/app.json") as f:
    ...     for line in MFSTextHandle(f):
    ...         print(line, end="")
    """

    def __init__(
        self,
        handle: MarshalFileHandle,
        encoding: str = "utf-8",
        errors: str = "strict",
    ) -> None:
        self._handle = handle
        self._encoding = encoding
        self._errors = errors

    @property
    def encoding(self) -> str:
        """Text encoding."""
        return self._encoding

    @property
    def errors(self) -> str:
        """Decode error handling."""
        return self._errors

    def read(self, size: int = -1) -> str:
        """Read bytes and decode them.

        Parameters
        ----------
        size:
            Maximum number of bytes to read. ``-1`` reads everything.
        """
        raw = self._handle.read(size)
        return raw.decode(self._encoding, self._errors)

    def readline(self, limit: int = -1) -> str:
        """Read one line.

        Recognizes ``\\n``, ``\\r\\n``, and bare ``\\r`` as line endings.

        Parameters
        ----------
        limit:
            Maximum number of bytes to read (``-1`` means unlimited).
        """
        pos = self._handle.tell()
        buf = bytearray()
        chunk = _CHUNK_SIZE
        while True:
            want = chunk if limit < 0 else min(chunk, limit - len(buf))
            piece = self._handle.read_at(pos + len(buf), want) if want > 0 else b""
            buf += piece
            end = _line_end(buf)
            # a trailing \r may still be followed by \n
            if not piece or end < len(buf) or buf.endswith(b"\n"):
                break
            if 0 <= limit <= len(buf):
                break
            chunk *= 2
        line = bytes(buf[:end])
        self._handle.seek(pos + len(line))
        return line.decode(self._encoding, self._errors)

    def readlines(self) -> list[str]:
        return list(self)

    def __iter__(self) -> Iterator[str]:
        """Line iterator."""
        return self

    def __next__(self) -> str:
        line = self.readline()
        if not line:
            raise StopIteration
        return line

    def __enter__(self) -> MFSTextHandle:
        return self

    def __exit__(self, *args: object) -> None:
        # Closing the handle is the responsibility of the caller's with mfs.open(...) block
        pass
