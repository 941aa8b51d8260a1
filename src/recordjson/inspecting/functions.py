"""
Utilities to inspect functions.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass
from inspect import Parameter
from types import MappingProxyType
from typing import (
    Any,
    get_type_hints,
)

from .annotations import is_none

__all__ = [
    "EMPTY",
    "ParameterInfo",
    "SignatureInfo",
]

logger = logging.getLogger(__name__)

EMPTY = Parameter.empty
"""
Marker for a missing annotation.
"""

POSITIONAL_KINDS = (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD)


@dataclass
class ParameterInfo:
    """
    Encapsulates information about a function parameter.
    """

    parameter: Parameter
    """
    Parameter from `inspect` module.
    """

    annotation: Any
    """
    Annotation as extracted by `get_type_hints()`, resolving any stringized
    annotations, or `EMPTY` if not annotated.
    """

    @property
    def name(self) -> str:
        return self.parameter.name

    @property
    def is_positional(self) -> bool:
        return self.parameter.kind in POSITIONAL_KINDS

    @property
    def is_required(self) -> bool:
        """
        Whether a value must be passed for this parameter.
        """
        return self.parameter.default is EMPTY and self.parameter.kind not in (
            Parameter.VAR_POSITIONAL,
            Parameter.VAR_KEYWORD,
        )


class SignatureInfo:
    """
    Encapsulates information extracted from a function signature.

    If `method` is `True`, the function is taken as an unbound method and its first
    positional parameter (`self`) is omitted.
    """

    func: Callable[..., Any]
    """
    Function passed in.
    """

    params: MappingProxyType[str, ParameterInfo]
    """
    Mapping of parameter name to info.
    """

    return_annotation: Any
    """
    Return annotation, or `EMPTY` if not annotated.
    """

    def __init__(self, func: Callable[..., Any], /, *, method: bool = False):
        self.func = func

        sig = inspect.signature(func)
        type_hints = _get_type_hints(func, sig)

        self.return_annotation = type_hints.get("return", EMPTY)

        params = list(sig.parameters.values())
        if method and params and params[0].kind in POSITIONAL_KINDS:
            params = params[1:]

        self.params = MappingProxyType(
            {
                param.name: ParameterInfo(param, type_hints.get(param.name, EMPTY))
                for param in params
            }
        )

    def __repr__(self) -> str:
        return f"{self.func.__name__}({self.params}) -> {self.return_annotation}"

    @property
    def returns_none(self) -> bool:
        """
        Whether the function is annotated as returning `None`. An unannotated
        function is assumed to return a value.
        """
        return is_none(self.return_annotation)

    def get_params(
        self, *, positional: bool | None = None, required: bool | None = None
    ) -> list[ParameterInfo]:
        """
        Get params, optionally filtered by whether they're positional and/or
        required.
        """
        return [
            p
            for p in self.params.values()
            if (positional is None or p.is_positional == positional)
            and (required is None or p.is_required == required)
        ]

    @property
    def arity(self) -> int | None:
        """
        Number of positional arguments this function takes, or `None` if it can't
        be called with a fixed number of positional arguments alone, i.e. it has
        required keyword-only params.
        """
        if self.get_params(positional=False, required=True):
            return None
        positional = self.get_params(positional=True)
        required = [p for p in positional if p.is_required]
        return len(required) if len(required) == len(positional) else None


def _get_type_hints(func: Callable[..., Any], sig: inspect.Signature) -> dict[str, Any]:
    """
    Get type hints, resolving stringized annotations from `__future__` import.
    Falls back to the raw signature annotations if they can't be resolved.
    """
    try:
        return get_type_hints(func, include_extras=True)
    except (NameError, AttributeError, TypeError) as e:
        logger.debug("Unresolvable type hints for %s: %s", func, e)

    hints = {
        name: param.annotation
        for name, param in sig.parameters.items()
        if param.annotation is not EMPTY
    }
    if sig.return_annotation is not inspect.Signature.empty:
        hints["return"] = sig.return_annotation
    return hints
