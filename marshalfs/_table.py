from __future__ import annotations

from collections.abc import Iterator, Mapping

from ._exceptions import MFSInvalidPathError, MFSPathConflictError
from ._path import ROOT, literal_parent, match_pattern, valid_path
from ._spec import FileSpec, GeneratorFileSpec, ObjectFileSpec

# ---------------------------------------------------------------------------
#  Path Table
# ---------------------------------------------------------------------------


class PathTable:
    """An immutable snapshot of the path -> FileSpec mapping.

    Object-backed entries are looked up by exact path. Generator-backed
    entries are keyed by a glob pattern and tried in registration order.
    Mutations never touch a snapshot; :meth:`with_entry` and
    :meth:`without_entry` return a new one.
    """

    __slots__ = ("_files", "_patterns")

    def __init__(self, files: Mapping[str, FileSpec] | None = None) -> None:
        self._files: dict[str, ObjectFileSpec] = {}
        self._patterns: dict[str, GeneratorFileSpec] = {}
        if files is None:
            return
        for path, spec in files.items():
            self._insert(path, spec)

    def _insert(self, path: str, spec: FileSpec) -> None:
        if not isinstance(path, str) or path == ROOT or not valid_path(path):
            raise MFSInvalidPathError("validate", str(path))
        if isinstance(spec, ObjectFileSpec):
            self._patterns.pop(path, None)
            self._files[path] = spec
        elif isinstance(spec, GeneratorFileSpec):
            self._files.pop(path, None)
            self._patterns[path] = spec
        else:
            raise TypeError(
                f"Expected ObjectFileSpec or GeneratorFileSpec for '{path}', "
                f"got {type(spec).__name__}"
            )

    def _copy(self) -> PathTable:
        table = PathTable()
        table._files = dict(self._files)
        table._patterns = dict(self._patterns)
        return table

    # -- lookups --

    def lookup(self, path: str) -> ObjectFileSpec | None:
        return self._files.get(path)

    def match(self, path: str) -> tuple[str, GeneratorFileSpec] | None:
        """Return the first generator (in registration order) matching *path*."""
        for pattern, spec in self._patterns.items():
            if match_pattern(pattern, path):
                return pattern, spec
        return None

    def files(self) -> Iterator[tuple[str, ObjectFileSpec]]:
        return iter(self._files.items())

    def pattern_dirs(self) -> Iterator[tuple[str, str]]:
        """Yield ``(pattern, directory)`` for every generator pattern whose
        leading segments name a literal directory."""
        for pattern in self._patterns:
            parent = literal_parent(pattern)
            if parent:
                yield pattern, parent

    def has_descendants(self, path: str) -> bool:
        """Report whether any entry, generator patterns included, lies below
        *path*."""
        prefix = path + "/"
        if any(fname.startswith(prefix) for fname in self._files):
            return True
        return any(
            parent == path or parent.startswith(prefix)
            for _, parent in self.pattern_dirs()
        )

    def paths(self) -> list[str]:
        return sorted([*self._files, *self._patterns])

    def __contains__(self, path: object) -> bool:
        return path in self._files or path in self._patterns

    def __len__(self) -> int:
        return len(self._files) + len(self._patterns)

    # -- copy-on-write updates --

    def with_entry(self, path: str, spec: FileSpec) -> PathTable:
        table = self._copy()
        table._insert(path, spec)
        return table

    def without_entry(self, path: str) -> PathTable | None:
        if path not in self:
            return None
        table = self._copy()
        table._files.pop(path, None)
        table._patterns.pop(path, None)
        return table


# ---------------------------------------------------------------------------
#  Conflict Validation
# ---------------------------------------------------------------------------


def _ancestors(path: str) -> Iterator[str]:
    i = path.find("/")
    while i >= 0:
        yield path[:i]
        i = path.find("/", i + 1)


def validate_table(table: PathTable, op: str = "validate") -> None:
    """Reject a table in which a file path is also an ancestor of another path.

    Entries carrying the directory mode bit describe explicit directories
    and may have descendants. The literal directory in front of a generator
    pattern counts as an ancestor of that pattern.
    """
    descendant_of: dict[str, str] = {}
    for path, _spec in sorted(table.files()):
        for parent in _ancestors(path):
            descendant_of.setdefault(parent, path)
    for pattern, parent in table.pattern_dirs():
        for ancestor in _ancestors(parent + "/"):
            descendant_of.setdefault(ancestor, pattern)
    for path, spec in sorted(table.files()):
        if not spec.common.is_dir and path in descendant_of:
            raise MFSPathConflictError(op, path, descendant_of[path])


def validate_entry(
    table: PathTable, path: str, spec: FileSpec, op: str = "write"
) -> None:
    """Check a single new entry against an already valid *table*."""
    if isinstance(spec, GeneratorFileSpec):
        parent = literal_parent(path)
        if not parent:
            return
        for ancestor in _ancestors(parent + "/"):
            ancestor_spec = table.lookup(ancestor)
            if ancestor_spec is not None and not ancestor_spec.common.is_dir:
                raise MFSPathConflictError(op, ancestor, path)
        return
    if not spec.common.is_dir:
        prefix = path + "/"
        for fname in sorted(fname for fname, _ in table.files()):
            if fname.startswith(prefix):
                raise MFSPathConflictError(op, path, fname)
        for pattern, parent in table.pattern_dirs():
            if parent == path or parent.startswith(prefix):
                raise MFSPathConflictError(op, path, pattern)
    for parent in _ancestors(path):
        parent_spec = table.lookup(parent)
        if parent_spec is not None and not parent_spec.common.is_dir:
            raise MFSPathConflictError(op, parent, path)
