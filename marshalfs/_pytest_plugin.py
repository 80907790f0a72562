"""pytest fixture plugin.

Usage::

    # conftest.py
    pytest_plugins = ["marshalfs._pytest_plugin"]

This makes the ``mfs`` fixture automatically available::

    def test_something(mfs):
        mfs.write_file("config.json", ObjectFileSpec({"debug": True}))
        assert load_config(mfs)["debug"] is True
"""

import json
from typing import Any

import pytest

from ._fs import MarshalFileSystem


def json_marshal(value: Any) -> bytes:
    return json.dumps(value).encode("utf-8")


@pytest.fixture
def mfs() -> MarshalFileSystem:
    """An empty :class:`MarshalFileSystem` that marshals values as JSON.

    Provides an independent instance per test (function scope).
    """
    return MarshalFileSystem(json_marshal)
