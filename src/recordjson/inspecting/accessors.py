"""
Discovery of a record type's property accessors and mutators.

A record exposes its properties through public methods following the bean naming
convention:

- `get<Name>()` or `is<Name>()` with no arguments, returning a value
- `set<Name>(value)` with a single argument

The property name is derived by stripping the prefix and lower-casing the first
remaining character, so `getFirstName()` and `setFirstName()` both map to
`"firstName"`. The snake_case forms `get_first_name()`/`set_first_name()` map to
`"first_name"`. Python properties are additionally registered under their own
attribute name.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass
from types import (
    BuiltinFunctionType,
    ClassMethodDescriptorType,
    MappingProxyType,
    MethodDescriptorType,
    WrapperDescriptorType,
)
from typing import Any

from ..exceptions import DiscoveryError
from ..numeric import NumberType, get_number_type, is_number
from .annotations import unwrap_optional
from .functions import EMPTY, SignatureInfo

__all__ = [
    "Getter",
    "Setter",
    "AccessorTable",
    "IncludeFunc",
    "derive_property_name",
    "discover_accessors",
]

logger = logging.getLogger(__name__)

type IncludeFunc = Callable[[str, Any], bool]
"""
Predicate taking a derived property name and the member it was derived from,
returning whether the property should be registered.
"""

GETTER_PREFIXES = ("is", "get")
SETTER_PREFIX = "set"

BUILTIN_METHOD_TYPES = (
    BuiltinFunctionType,
    ClassMethodDescriptorType,
    MethodDescriptorType,
    WrapperDescriptorType,
)


@dataclass(frozen=True)
class Getter:
    """
    Accessor producing a property value from a record instance.

    The accessor is looked up by name on the instance, so overrides in subclasses
    of the discovered type are honored.
    """

    property_name: str

    member_name: str
    """
    Name of method or attribute on the record.
    """

    func: Callable[[Any], Any]
    """
    Function found on the discovered type.
    """

    is_attribute: bool = False
    """
    Whether the member is a Python property rather than a getter method.
    """

    def invoke(self, obj: Any, /) -> Any:
        if self.is_attribute:
            return getattr(obj, self.member_name)
        return getattr(obj, self.member_name)()


@dataclass(frozen=True)
class Setter:
    """
    Mutator receiving a property value, with optional coercion for numeric
    properties.
    """

    property_name: str
    member_name: str
    func: Callable[[Any, Any], Any]

    number_type: NumberType | None = None
    """
    Coercion applied to numeric values before invoking the mutator.
    """

    is_attribute: bool = False

    @property
    def is_property_number(self) -> bool:
        return self.number_type is not None

    def invoke(self, obj: Any, value: Any, /):
        """
        Invoke the mutator, coercing `value` first if it's a number and this is a
        numeric property.
        """
        if self.number_type is not None and is_number(value):
            value = self.number_type.get_actual_value(value)
        if self.is_attribute:
            setattr(obj, self.member_name, value)
        else:
            getattr(obj, self.member_name)(value)


@dataclass(frozen=True)
class AccessorTable:
    """
    Getters and setters discovered on a record type, keyed by property name.
    """

    getters: MappingProxyType[str, Getter]
    setters: MappingProxyType[str, Setter]


def derive_property_name(name: str, prefix: str, /) -> str | None:
    """
    Derive a property name from a method name by stripping `prefix` and
    lower-casing the first remaining character. Returns `None` if nothing remains,
    e.g. for a method named just `get`.
    """
    if not name.startswith(prefix):
        return None
    suffix = name[len(prefix) :]
    if suffix.startswith("_"):
        suffix = suffix[1:]
    if not suffix:
        return None
    return suffix[0].lower() + suffix[1:]


def discover_accessors(
    record_type: type, include: IncludeFunc | None = None, /
) -> AccessorTable:
    """
    Scan `record_type` and its bases for public getters and setters.

    :param record_type: Class to scan
    :param include: Optional predicate to filter properties
    :raises DiscoveryError: If `record_type` is not a class or can't be inspected
    :return: Discovered getters and setters
    """
    if not isinstance(record_type, type):
        raise DiscoveryError(f"Not a class: {record_type!r}")

    try:
        members = _get_members(record_type)
    except (TypeError, AttributeError) as e:
        raise DiscoveryError(
            f"Failed to enumerate members of {record_type.__qualname__}: {e}"
        ) from e

    getters: dict[str, Getter] = {}
    setters: dict[str, Setter] = {}

    def check_include(name: str, member: Any) -> bool:
        return include is None or include(name, member)

    # register properties first so explicit get/set methods take precedence
    try:
        for name, member in members.items():
            if isinstance(member, property):
                _register_property(name, member, getters, setters, check_include)

        for name, member in members.items():
            if inspect.isfunction(member):
                sig_info = SignatureInfo(member, method=True)
            elif _is_method_like(member):
                # e.g. a function wrapped by functools.cache
                try:
                    sig_info = SignatureInfo(member, method=True)
                except (TypeError, ValueError) as e:
                    logger.debug(
                        "Skipping %s.%s, no signature: %s",
                        record_type.__qualname__,
                        name,
                        e,
                    )
                    continue
            else:
                continue
            _register_method(name, member, sig_info, getters, setters, check_include)
    except (TypeError, ValueError) as e:
        raise DiscoveryError(
            f"Failed to inspect {record_type.__qualname__}.{name}: {e}"
        ) from e

    logger.debug(
        "Discovered %d getter(s), %d setter(s) on %s",
        len(getters),
        len(setters),
        record_type.__qualname__,
    )

    return AccessorTable(MappingProxyType(getters), MappingProxyType(setters))


def _get_members(record_type: type) -> dict[str, Any]:
    """
    Get public members, resolving overrides, in order of definition from the
    topmost base class. Static methods and class methods are omitted, as are
    members of `object`.
    """
    names: dict[str, None] = {}
    for cls in reversed(record_type.__mro__):
        if cls is object:
            continue
        names.update((n, None) for n in vars(cls) if not n.startswith("_"))

    members: dict[str, Any] = {}
    for name in names:
        member = inspect.getattr_static(record_type, name)
        if isinstance(member, (staticmethod, classmethod)):
            continue
        if member is getattr(object, name, None):
            continue
        members[name] = member

    return members


def _is_method_like(member: Any) -> bool:
    """
    Check whether member is a callable which binds to instances like a method.
    Methods implemented in C by builtin bases are excluded.
    """
    if isinstance(member, (type, *BUILTIN_METHOD_TYPES)):
        return False
    return callable(member) and hasattr(type(member), "__get__")


def _register_method(
    name: str,
    func: Callable[..., Any],
    sig_info: SignatureInfo,
    getters: dict[str, Getter],
    setters: dict[str, Setter],
    include: IncludeFunc,
):
    match sig_info.arity:
        case 0:
            if sig_info.returns_none:
                return
            for prefix in GETTER_PREFIXES:
                if name.startswith(prefix):
                    property_name = derive_property_name(name, prefix)
                    break
            else:
                return
            if property_name and include(property_name, func):
                getters[property_name] = Getter(property_name, name, func)
        case 1:
            property_name = derive_property_name(name, SETTER_PREFIX)
            if property_name and include(property_name, func):
                (param,) = sig_info.get_params(positional=True)
                setters[property_name] = Setter(
                    property_name,
                    name,
                    func,
                    _lookup_number_type(param.annotation),
                )


def _register_property(
    name: str,
    prop: property,
    getters: dict[str, Getter],
    setters: dict[str, Setter],
    include: IncludeFunc,
):
    if not include(name, prop):
        return

    if prop.fget is not None:
        getters[name] = Getter(name, name, prop.fget, is_attribute=True)

    if prop.fset is not None:
        annotation = EMPTY
        params = SignatureInfo(prop.fset, method=True).get_params(positional=True)
        if params:
            annotation = params[0].annotation
        if annotation is EMPTY and prop.fget is not None:
            annotation = SignatureInfo(prop.fget, method=True).return_annotation
        setters[name] = Setter(
            name,
            name,
            prop.fset,
            _lookup_number_type(annotation),
            is_attribute=True,
        )


def _lookup_number_type(annotation: Any) -> NumberType | None:
    if annotation is EMPTY:
        return None
    return get_number_type(unwrap_optional(annotation))
