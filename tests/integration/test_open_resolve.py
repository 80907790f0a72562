import json
import os

import pytest
from marshalfs import (
    GeneratorFileSpec,
    MFSInvalidPathError,
    MFSMarshalError,
    MFSNotExistError,
    MarshalDirHandle,
    MarshalFileHandle,
    MarshalFileSystem,
    ObjectFileSpec,
    directory_spec,
)
from marshalfs._pytest_plugin import json_marshal


def test_open_object_file_returns_marshalled_value(tree_fs):
    with tree_fs.open("my/file") as f:
        assert isinstance(f, MarshalFileHandle)
        assert json.loads(f.read()) == {"Info": "Some interesting info.\n"}


def test_open_file_stat(tree_fs):
    with tree_fs.open("a/b/c.json") as f:
        info = f.stat()
    assert info.name == "c.json"
    assert info.size == len(b"[1, 2, 3]")
    assert info.is_file()


def test_none_value_is_empty_without_marshal_call():
    calls = []

    def marshal(v):
        calls.append(v)
        return b"x"

    mfs = MarshalFileSystem(marshal, {"empty": ObjectFileSpec(None)})
    with mfs.open("empty") as f:
        assert f.read() == b""
        assert f.stat().size == 0
    assert calls == []


@pytest.mark.parametrize("path", ["", "/my/file", "my/file/", "my//file", "./my", "my/../your", ".."])
def test_malformed_paths_do_not_exist(tree_fs, path):
    with pytest.raises(MFSInvalidPathError) as excinfo:
        tree_fs.open(path)
    assert isinstance(excinfo.value, FileNotFoundError)
    assert excinfo.value.op == "open"
    assert excinfo.value.path == path


def test_missing_path(tree_fs):
    with pytest.raises(MFSNotExistError):
        tree_fs.open("nope")
    with pytest.raises(FileNotFoundError):
        tree_fs.open("a/b/nope.json")


def test_missing_prefix_sibling_is_not_directory(tree_fs):
    """'a/b' has children; 'a/b.json' and 'a/bb' do not exist."""
    with pytest.raises(FileNotFoundError):
        tree_fs.open("a/bb")


def test_open_synthesized_directory(tree_fs):
    with tree_fs.open("a/b") as d:
        assert isinstance(d, MarshalDirHandle)
        info = d.stat()
        assert info.name == "b"
        assert info.is_dir()
        assert [e.name for e in d.read_dir()] == ["c.json", "d.json"]


def test_root_exists_for_empty_table():
    mfs = MarshalFileSystem(json_marshal)
    with mfs.open(".") as d:
        assert d.stat().name == "."
        assert d.stat().is_dir()
        assert d.read_dir() == []


def test_root_listing_scenario():
    v1 = {"Info": "Some interesting info.\n"}
    v2 = {"Thingy": "hello, world\n", "Number": 10}
    mfs = MarshalFileSystem(
        json_marshal, {"my/file": ObjectFileSpec(v1), "your/file": ObjectFileSpec(v2)}
    )
    entries = mfs.read_dir(".")
    assert [e.name for e in entries] == ["my", "your"]
    for e in entries:
        assert e.is_dir()
        assert e.size == 0
    assert mfs.read_file("my/file") == json_marshal(v1)


def test_explicit_directory_metadata():
    mfs = MarshalFileSystem(
        json_marshal,
        {
            "conf": directory_spec(mod_time=1234.0, sys="explicit"),
            "conf/app.json": ObjectFileSpec({"x": 1}),
        },
    )
    with mfs.open("conf") as d:
        info = d.stat()
        assert info.is_dir()
        assert info.mod_time == 1234.0
        assert info.sys == "explicit"
        assert [e.name for e in d.read_dir()] == ["app.json"]
    root = mfs.read_dir(".")
    assert len(root) == 1
    assert root[0].mod_time == 1234.0
    assert root[0].sys == "explicit"


def test_explicit_empty_directory_exists():
    mfs = MarshalFileSystem(json_marshal, {"empty": directory_spec()})
    with mfs.open("empty") as d:
        assert d.read_dir() == []


def test_per_file_marshal_override():
    mfs = MarshalFileSystem(
        json_marshal,
        {
            "a.json": ObjectFileSpec({"k": 1}),
            "a.txt": ObjectFileSpec({"k": 1}, marshal=lambda v: f"k={v['k']}"),
        },
    )
    assert mfs.read_file("a.json") == b'{"k": 1}'
    assert mfs.read_file("a.txt") == b"k=1"


def test_marshal_may_return_str_or_bytearray():
    mfs = MarshalFileSystem(
        json.dumps, {"s": ObjectFileSpec([1]), "b": ObjectFileSpec(2, marshal=lambda v: bytearray(b"\x02"))}
    )
    assert mfs.read_file("s") == b"[1]"
    assert mfs.read_file("b") == b"\x02"


def test_marshal_failure_raised_at_open():
    def marshal(v):
        raise RuntimeError("cannot encode")

    mfs = MarshalFileSystem(marshal, {"bad": ObjectFileSpec(object())})
    with pytest.raises(MFSMarshalError) as excinfo:
        mfs.open("bad")
    assert excinfo.value.op == "open"
    assert excinfo.value.path == "bad"
    assert isinstance(excinfo.value.__cause__, RuntimeError)


def test_marshal_returning_wrong_type():
    mfs = MarshalFileSystem(lambda v: 42, {"bad": ObjectFileSpec(1)})
    with pytest.raises(MFSMarshalError, match="expected bytes"):
        mfs.open("bad")


def test_marshal_called_once_per_open():
    calls = []

    def marshal(v):
        calls.append(v)
        return b"0123456789"

    mfs = MarshalFileSystem(marshal, {"f": ObjectFileSpec("v")})
    with mfs.open("f") as f:
        f.read(3)
        f.stat().size
        f.seek(0, os.SEEK_END)
        f.read_at(2, 4)
        f.stat().size
    assert calls == ["v"]
    mfs.read_file("f")
    assert len(calls) == 2


def test_repeated_opens_are_byte_identical(tree_fs):
    first = tree_fs.read_file("your/file")
    second = tree_fs.read_file("your/file")
    assert first == second


def test_seek_bounds_through_open(tree_fs):
    with tree_fs.open("top.json") as f:
        length = f.stat().size
        with pytest.raises(ValueError):
            f.seek(-1, os.SEEK_SET)
        assert f.seek(0, os.SEEK_END) == length
        assert f.read() == b""


def test_handles_are_independent(tree_fs):
    with tree_fs.open("top.json") as f1, tree_fs.open("top.json") as f2:
        f1.read(3)
        assert f2.tell() == 0
        assert f2.read() == tree_fs.read_file("top.json")


def test_constructor_validates_marshal():
    with pytest.raises(TypeError, match="callable"):
        MarshalFileSystem("json")


def test_from_values():
    mfs = MarshalFileSystem.from_values(json_marshal, {"a/x.json": 1, "b.json": "two"})
    assert mfs.read_file("a/x.json") == b"1"
    assert mfs.read_file("b.json") == b'"two"'
    assert mfs.listdir(".") == ["a", "b.json"]


def test_generator_shadowed_by_exact_entry():
    mfs = MarshalFileSystem(
        json_marshal,
        {
            "*.json": GeneratorFileSpec(lambda p: "generated"),
            "fixed.json": ObjectFileSpec("fixed"),
        },
    )
    assert mfs.read_file("fixed.json") == b'"fixed"'
    assert mfs.read_file("other.json") == b'"generated"'
