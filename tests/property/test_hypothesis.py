"""Property-based tests using Hypothesis."""
import hypothesis.strategies as st
from hypothesis import assume, given, settings

from marshalfs import (
    MarshalFileSystem,
    MFSInvalidArgumentError,
    MFSPathConflictError,
    ObjectFileSpec,
)
from marshalfs._path import join, valid_path
from marshalfs._pytest_plugin import json_marshal

segment = st.text(alphabet="abcXYZ019_-é", min_size=1, max_size=4)
path_st = st.lists(segment, min_size=1, max_size=4).map("/".join)
json_values = st.recursive(
    st.none() | st.booleans() | st.integers() | st.text(),
    lambda children: st.lists(children) | st.dictionaries(st.text(), children),
    max_leaves=10,
)


def _leaves_only(paths):
    return [p for p in paths if not any(q.startswith(p + "/") for q in paths)]


@given(paths=st.lists(path_st, min_size=1, max_size=12, unique=True))
@settings(max_examples=60)
def test_walk_reaches_every_file_through_its_ancestors(paths):
    paths = _leaves_only(paths)
    mfs = MarshalFileSystem.from_values(json_marshal, {p: p for p in paths})
    walked = set()
    for top, _, filenames in mfs.walk():
        walked.update(join(top, name) for name in filenames)
    assert walked == set(paths)
    for p in paths:
        parts = p.split("/")
        for depth in range(len(parts)):
            ancestor = "/".join(parts[:depth]) or "."
            assert mfs.is_dir(ancestor)
            assert parts[depth] in mfs.listdir(ancestor)


@given(paths=st.lists(path_st, min_size=2, max_size=12, unique=True))
@settings(max_examples=60)
def test_listings_are_sorted_and_unique(paths):
    mfs = MarshalFileSystem.from_values(json_marshal, {p: 0 for p in _leaves_only(paths)})
    for top, _, _ in mfs.walk():
        names = mfs.listdir(top)
        encoded = [n.encode("utf-8") for n in names]
        assert encoded == sorted(encoded)
        assert len(set(names)) == len(names)


@given(value=json_values)
@settings(max_examples=50)
def test_repeated_opens_give_identical_bytes(value):
    mfs = MarshalFileSystem.from_values(json_marshal, {"v.json": value})
    assert mfs.read_file("v.json") == mfs.read_file("v.json")


@given(paths=st.lists(path_st, min_size=1, max_size=8, unique=True), child=segment)
@settings(max_examples=50)
def test_conflicting_table_is_never_installed(paths, child):
    files = {p: ObjectFileSpec(1) for p in paths}
    files[paths[0] + "/" + child] = ObjectFileSpec(2)
    mfs = MarshalFileSystem.from_values(json_marshal, {"keep": 0})
    try:
        mfs.replace_all(files)
    except MFSPathConflictError:
        pass
    else:
        raise AssertionError("conflicting table was installed")
    assert mfs.paths() == ["keep"]


@given(
    data=st.binary(max_size=200),
    offset=st.integers(-300, 300),
    whence=st.sampled_from([0, 1, 2]),
)
@settings(max_examples=100)
def test_seek_stays_within_data(data, offset, whence):
    mfs = MarshalFileSystem(lambda v: v, {"f": ObjectFileSpec(data)})
    with mfs.open("f") as f:
        f.read(len(data) // 2)
        before = f.tell()
        try:
            pos = f.seek(offset, whence)
        except MFSInvalidArgumentError:
            assert f.tell() == before
        else:
            assert 0 <= pos <= len(data)
            assert f.read() == data[pos:]


@given(path=st.text(alphabet="ab./", max_size=8))
@settings(max_examples=100)
def test_invalid_paths_never_exist(path):
    assume(not valid_path(path))
    mfs = MarshalFileSystem.from_values(json_marshal, {"a/b": 1})
    assert not mfs.exists(path)


@given(parent=st.one_of(st.just("."), path_st), name=segment)
def test_join_produces_valid_paths(parent, name):
    joined = join(parent, name)
    assert valid_path(joined)
    assert joined.rsplit("/", 1)[-1] == name
