"""
Exception classes.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass
from typing import Generator, Literal

__all__ = [
    "RecordJSONError",
    "DiscoveryError",
    "InstantiationError",
    "UnsupportedConversionError",
    "ConfigError",
    "PropertyErrorDetail",
]

type ActionType = Literal["read", "write"]
"""
Direction of conversion: `"read"` invokes getters (record to JSON), `"write"`
invokes setters (JSON to record).
"""


@dataclass
class PropertyErrorDetail:
    """
    Details about a single property which could not be converted.
    """

    record_type: type
    """
    Record type being converted.
    """

    property_name: str
    """
    Name of property whose accessor or mutator failed.
    """

    exc: Exception
    """
    The exception encountered.
    """

    action: ActionType
    """
    Whether the getter or setter failed.
    """

    @property
    def path(self) -> str:
        """
        Qualified property path, e.g. `"Point.x"`.
        """
        return f"{self.record_type.__qualname__}.{self.property_name}"

    def format_error(self) -> Generator[str, None, None]:
        """
        Format this error for display.
        """
        verb = "excluded" if self.action == "read" else "not set"
        yield f"{self.path}: {verb}: {type(self.exc).__name__}"
        # details from the exception string
        yield from (f"  {m}" for m in str(self.exc).splitlines())
        # traceback for debugging in the case of assertion
        if isinstance(self.exc, AssertionError):
            yield from traceback.format_exception(self.exc)


class RecordJSONError(Exception):
    """
    Base class for errors raised by this package.
    """


class DiscoveryError(RecordJSONError):
    """
    The record type could not be introspected for accessors.
    """


class InstantiationError(RecordJSONError):
    """
    The record type could not be constructed without arguments.
    """

    record_type: type

    def __init__(self, record_type: type, reason: str):
        self.record_type = record_type
        super().__init__(
            f"Failed to instantiate {record_type.__qualname__} without arguments: "
            f"{reason}"
        )


class UnsupportedConversionError(RecordJSONError):
    """
    The requested conversion direction is disabled for this convertor.
    """


class ConfigError(RecordJSONError):
    """
    Invalid convertor configuration.
    """
