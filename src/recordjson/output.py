"""
Interface to the JSON writer which receives converted records.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

__all__ = [
    "CLASS_KEY",
    "Output",
    "DictOutput",
    "class_name",
]

CLASS_KEY = "class"
"""
Key under which `DictOutput` stores the record's type tag.
"""


def class_name(cls: type, /) -> str:
    """
    Get the fully qualified name used to tag a record's type, e.g.
    `"package.module.Point"`.
    """
    return f"{cls.__module__}.{cls.__qualname__}"


@runtime_checkable
class Output(Protocol):
    """
    Sink receiving a record's type and properties as it's converted to JSON.
    """

    def add_class(self, cls: type, /):
        """
        Announce the type of the record being written, enabling it to be
        reconstructed later.
        """
        ...

    def add(self, name: str, value: Any, /):
        """
        Write a property.
        """
        ...


class DictOutput:
    """
    Output collecting properties into a dict, suitable for passing to `json.dumps()`.
    """

    obj: dict[str, Any]
    """
    Properties written so far.
    """

    class_key: str | None
    """
    Key under which to store the type tag, or `None` to omit it.
    """

    def __init__(self, *, class_key: str | None = CLASS_KEY):
        self.obj = {}
        self.class_key = class_key

    def __repr__(self) -> str:
        return f"DictOutput({self.obj})"

    def add_class(self, cls: type, /):
        if self.class_key is not None:
            self.obj[self.class_key] = class_name(cls)

    def add(self, name: str, value: Any, /):
        self.obj[name] = value
