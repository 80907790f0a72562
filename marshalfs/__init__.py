from typing import TYPE_CHECKING

from ._exceptions import (
    MFSGeneratorError,
    MFSInvalidArgumentError,
    MFSInvalidPathError,
    MFSIsADirectoryError,
    MFSMarshalError,
    MFSNotADirectoryError,
    MFSNotExistError,
    MFSPathConflictError,
    MFSPathError,
)
from ._fs import MarshalFileSystem
from ._handle import MarshalDirHandle, MarshalFileHandle
from ._info import MFSFileInfo
from ._path import valid_path
from ._spec import (
    DIR_MODE,
    FILE_MODE,
    FileCommon,
    FileSpec,
    GeneratorFileSpec,
    ObjectFileSpec,
    directory_spec,
)
from ._sub import MarshalSubFileSystem
from ._text import MFSTextHandle

if TYPE_CHECKING:
    from ._async import (
        AsyncMarshalFileSystem,
        AsyncMarshalHandle,
        AsyncMarshalSubFileSystem,
    )

_ASYNC_NAMES = (
    "AsyncMarshalFileSystem",
    "AsyncMarshalHandle",
    "AsyncMarshalSubFileSystem",
)


def __getattr__(name: str):  # type: ignore[no-untyped-def]
    if name in _ASYNC_NAMES:
        from . import _async

        for async_name in _ASYNC_NAMES:
            globals()[async_name] = getattr(_async, async_name)
        return globals()[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "MarshalFileSystem",
    "MarshalSubFileSystem",
    "MarshalFileHandle",
    "MarshalDirHandle",
    "MFSFileInfo",
    "MFSTextHandle",
    "FileCommon",
    "FileSpec",
    "ObjectFileSpec",
    "GeneratorFileSpec",
    "directory_spec",
    "FILE_MODE",
    "DIR_MODE",
    "valid_path",
    "MFSPathError",
    "MFSNotExistError",
    "MFSInvalidPathError",
    "MFSInvalidArgumentError",
    "MFSIsADirectoryError",
    "MFSNotADirectoryError",
    "MFSMarshalError",
    "MFSGeneratorError",
    "MFSPathConflictError",
    "AsyncMarshalFileSystem",
    "AsyncMarshalHandle",
    "AsyncMarshalSubFileSystem",
]
__version__ = "0.1.0"
