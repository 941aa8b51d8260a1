"""
Per-property results of a single conversion.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .exceptions import ActionType, PropertyErrorDetail

__all__ = [
    "ConversionReport",
]


@dataclass
class ConversionReport:
    """
    Outcome of converting one record, populated by the convertor as each property
    is processed.

    Failures of individual getters or setters don't abort a conversion; they are
    collected here in addition to being logged.
    """

    record_type: type
    """
    Record type converted.
    """

    action: ActionType
    """
    `"read"` for record to JSON, `"write"` for JSON to record.
    """

    processed: list[str] = field(default_factory=list)
    """
    Properties successfully read or written.
    """

    errors: list[PropertyErrorDetail] = field(default_factory=list)
    """
    Properties which failed.
    """

    ignored: list[str] = field(default_factory=list)
    """
    Input keys without a corresponding setter, only applicable when writing.
    """

    @property
    def ok(self) -> bool:
        return not self.errors

    def append_error(self, property_name: str, exc: Exception):
        self.errors.append(
            PropertyErrorDetail(self.record_type, property_name, exc, self.action)
        )

    def format(self) -> str:
        """
        Format a summary of this report.
        """
        name = self.record_type.__qualname__
        if self.ok:
            return f"Converted {name} ({self.action}): {len(self.processed)} properties"

        plural = "s" if len(self.errors) > 1 else ""
        lines = [f"Error{plural} occurred converting {name} ({self.action}):"]
        for error in self.errors:
            lines += list(error.format_error())
        return "\n".join(lines)
