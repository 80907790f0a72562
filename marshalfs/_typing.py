from collections.abc import Callable
from typing import Any, TypeAlias

MarshalOutput: TypeAlias = bytes | bytearray | memoryview | str
MarshalFunc: TypeAlias = Callable[[Any], MarshalOutput]
GeneratorFunc: TypeAlias = Callable[[str], Any]
WalkEntry: TypeAlias = tuple[str, list[str], list[str]]
