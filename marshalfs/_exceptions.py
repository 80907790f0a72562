class MFSPathError(OSError):
    """Base class for every marshalfs error. Subclass of OSError.

    Carries the failing operation and path so callers can build their own
    messages; ``str()`` renders ``"<op> <path>: <reason>"``.
    """
    def __init__(self, op: str, path: str, reason: str) -> None:
        self.op = op
        self.path = path
        self.reason = reason
        super().__init__(f"{op} {path}: {reason}")

    def __str__(self) -> str:
        return f"{self.op} {self.path}: {self.reason}"


class MFSNotExistError(MFSPathError, FileNotFoundError):
    """Raised when a path has no entry, no generator and no descendants."""
    def __init__(self, op: str, path: str, reason: str = "file does not exist") -> None:
        super().__init__(op, path, reason)


class MFSInvalidPathError(MFSNotExistError):
    """Raised for malformed paths. Malformed paths never exist."""
    def __init__(self, op: str, path: str) -> None:
        super().__init__(op, path, "invalid path")


class MFSInvalidArgumentError(MFSPathError, ValueError):
    """Raised for out-of-range offsets and structural misuse of a handle."""


class MFSIsADirectoryError(MFSInvalidArgumentError, IsADirectoryError):
    def __init__(self, op: str, path: str) -> None:
        super().__init__(op, path, "is a directory")


class MFSNotADirectoryError(MFSInvalidArgumentError, NotADirectoryError):
    def __init__(self, op: str, path: str) -> None:
        super().__init__(op, path, "not a directory")


class MFSMarshalError(MFSPathError):
    """Raised when the marshal function fails. The original error is the ``__cause__``."""


class MFSGeneratorError(MFSPathError):
    """Raised when a generator fails with anything other than FileNotFoundError."""


class MFSPathConflictError(MFSPathError, FileExistsError):
    """Raised when a file path is also an ancestor of another path in the table."""
    def __init__(self, op: str, path: str, descendant: str) -> None:
        self.descendant = descendant
        super().__init__(
            op, path, f"file path conflicts with descendant '{descendant}'"
        )
