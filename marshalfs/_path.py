import fnmatch

ROOT = "."


def valid_path(path: str) -> bool:
    """Report whether *path* is a valid marshalfs path.

    Paths are slash-separated and relative, with no empty, ``.`` or ``..``
    elements. The root is spelled ``"."``.
    """
    if path == ROOT:
        return True
    if not path:
        return False
    for part in path.split("/"):
        if part in ("", ".", ".."):
            return False
    return True


def join(dir_path: str, name: str) -> str:
    if dir_path == ROOT:
        return name
    return dir_path + "/" + name


def base_name(path: str) -> str:
    return path[path.rfind("/") + 1:]


def has_magic(pattern: str) -> bool:
    return any(c in pattern for c in "*?[")


def match_pattern(pattern: str, path: str) -> bool:
    """Match *path* against a glob *pattern* one segment at a time.

    ``*`` and ``?`` never match a ``/``, so both must have the same depth.
    """
    pattern_parts = pattern.split("/")
    path_parts = path.split("/")
    if len(pattern_parts) != len(path_parts):
        return False
    return all(
        fnmatch.fnmatchcase(name, part)
        for part, name in zip(pattern_parts, path_parts)
    )


def literal_parent(pattern: str) -> str:
    """Return the directory part of *pattern* before its first wildcard.

    ``"fruit/*.json"`` gives ``"fruit"``; ``"*.json"`` gives ``""``. A pattern
    without wildcards gives its parent directory.
    """
    parts = pattern.split("/")[:-1]
    for i, part in enumerate(parts):
        if has_magic(part):
            return "/".join(parts[:i])
    return "/".join(parts)
