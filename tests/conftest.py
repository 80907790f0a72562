import pytest
from marshalfs import MarshalFileSystem, ObjectFileSpec
from marshalfs._pytest_plugin import json_marshal, mfs  # noqa: F401


@pytest.fixture
def tree_fs() -> MarshalFileSystem:
    """A filesystem with nested files and no declared directories."""
    return MarshalFileSystem(
        json_marshal,
        {
            "my/file": ObjectFileSpec({"Info": "Some interesting info.\n"}),
            "your/file": ObjectFileSpec({"Thingy": "hello, world\n", "Number": 10}),
            "a/b/c.json": ObjectFileSpec([1, 2, 3]),
            "a/b/d.json": ObjectFileSpec("d"),
            "a/e.json": ObjectFileSpec(None),
            "top.json": ObjectFileSpec({"top": True}),
        },
    )
