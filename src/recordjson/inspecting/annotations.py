"""
Utilities to normalize type annotations found on accessors.
"""

from __future__ import annotations

from types import GenericAlias, NoneType, UnionType
from typing import (
    Annotated,
    Any,
    TypeAliasType,
    Union,
    get_args,
    get_origin,
)

__all__ = [
    "is_union",
    "is_none",
    "unwrap_alias",
    "normalize_annotation",
    "flatten_union",
    "unwrap_optional",
]


def is_union(annotation: Any, /) -> bool:
    """
    Check whether annotation is a union, e.g. `int | None` or `Optional[int]`.
    """
    return isinstance(annotation, UnionType) or get_origin(annotation) is Union


def is_none(annotation: Any, /) -> bool:
    """
    Check whether annotation denotes `None`, including as a stringized annotation
    which couldn't be resolved.
    """
    return annotation in (None, NoneType, "None")


def unwrap_alias(annotation: Any, /) -> Any:
    """
    If annotation is a `TypeAlias`, extract the corresponding definition.
    """
    if isinstance(annotation, TypeAliasType):
        return annotation.__value__
    if isinstance(annotation, GenericAlias):
        origin = get_origin(annotation)
        if isinstance(origin, TypeAliasType):
            return origin.__value__
    return annotation


def normalize_annotation(annotation: Any, /) -> Any:
    """
    Unwrap aliases and `Annotated[]`, discarding extras.
    """
    annotation_ = unwrap_alias(annotation)
    while get_origin(annotation_) is Annotated:
        annotation_ = unwrap_alias(get_args(annotation_)[0])
    return annotation_


def flatten_union(annotation: Any, /) -> tuple[Any, ...]:
    """
    If annotation is a union, recursively flatten it into its constituent types;
    otherwise return the normalized annotation by itself.
    """
    annotation_ = normalize_annotation(annotation)
    if not is_union(annotation_):
        return (annotation_,)

    args: list[Any] = []
    for arg in get_args(annotation_):
        args += flatten_union(arg)
    return tuple(args)


def unwrap_optional(annotation: Any, /) -> Any:
    """
    Get the single non-`None` type of an annotation like `int | None`. Other
    annotations are returned normalized, and unions of several non-`None` types
    are returned as-is since no single type can be determined.
    """
    types = [t for t in flatten_union(annotation) if not is_none(t)]
    if len(types) == 1:
        return types[0]
    return normalize_annotation(annotation)
