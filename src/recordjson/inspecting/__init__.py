"""
Introspection of record types.
"""

from .accessors import (
    AccessorTable,
    Getter,
    Setter,
    derive_property_name,
    discover_accessors,
)
from .functions import ParameterInfo, SignatureInfo

__all__ = [
    "AccessorTable",
    "Getter",
    "Setter",
    "derive_property_name",
    "discover_accessors",
    "ParameterInfo",
    "SignatureInfo",
]
