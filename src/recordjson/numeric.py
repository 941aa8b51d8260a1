"""
Fixed-width numeric kinds and the strategies used to coerce generic JSON numbers
into them.

JSON has a single numeric representation, whereas a record's mutators may expect a
specific width. Each `NumberType` narrows or widens any real number to exactly one
kind, following the usual two's complement and IEEE 754 conversion rules:

- integer inputs wrap around to the target width
- floating point inputs truncate toward zero, saturate to the target range, and
  map NaN to 0
- 32-bit floats round to the nearest single precision value, overflowing to
  infinity
- the builtin `int` is unbounded: integers pass through and floats truncate
  toward zero
"""

from __future__ import annotations

import math
import numbers
import struct
from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType
from typing import Any

__all__ = [
    "int16",
    "int32",
    "int64",
    "float32",
    "float64",
    "NumberType",
    "SHORT",
    "INTEGER",
    "LONG",
    "INTEGRAL",
    "FLOAT",
    "DOUBLE",
    "NUMBER_TYPES",
    "get_number_type",
    "is_number",
]


class int16(int):
    """
    16-bit signed integer.
    """


class int32(int):
    """
    32-bit signed integer.
    """


class int64(int):
    """
    64-bit signed integer.
    """


class float32(float):
    """
    IEEE 754 single precision float.
    """


class float64(float):
    """
    IEEE 754 double precision float.
    """


@dataclass(frozen=True, eq=False)
class NumberType:
    """
    Coercion strategy producing one numeric kind from any real number.
    """

    name: str
    """
    Name of the numeric kind, e.g. `"long"`.
    """

    target: type
    """
    Type of the values produced.
    """

    _convert: Callable[[Any], Any]

    def __repr__(self) -> str:
        return f"NumberType({self.name})"

    def __call__(self, number: Any, /) -> Any:
        return self.get_actual_value(number)

    def get_actual_value(self, number: Any, /) -> Any:
        """
        Coerce `number` to this kind. Callers must ensure `number` is numeric, see
        `is_number()`.
        """
        return self._convert(number)


def is_number(value: Any, /) -> bool:
    """
    Check whether `value` is a number which may be coerced. Booleans are not
    considered numbers, even though `bool` subclasses `int`.
    """
    if isinstance(value, bool):
        return False
    return isinstance(value, (numbers.Real, Decimal))


def _wrap(value: int, bits: int) -> int:
    mask = (1 << bits) - 1
    value &= mask
    if value >> (bits - 1):
        value -= 1 << bits
    return value


def _saturate(value: float, bits: int) -> int:
    if math.isnan(value):
        return 0
    low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    if value <= low:
        return low
    if value >= high:
        return high
    return int(value)


def _to_float(number: Any) -> float:
    try:
        return float(number)
    except OverflowError:
        # only reachable for huge integers
        return math.inf if number > 0 else -math.inf


def _to_integral(number: Any, bits: int, saturate_bits: int | None = None) -> int:
    if isinstance(number, numbers.Integral):
        return _wrap(int(number), bits)

    # floating point kinds first saturate to their conversion width, so that e.g.
    # shorts go through a 32-bit intermediate
    return _wrap(_saturate(_to_float(number), saturate_bits or bits), bits)


def _to_single(number: Any) -> float:
    value = _to_float(number)
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _short(number: Any) -> int16:
    return int16(_to_integral(number, 16, saturate_bits=32))


def _integer(number: Any) -> int32:
    return int32(_to_integral(number, 32))


INT64_MIN, INT64_MAX = -(1 << 63), (1 << 63) - 1


def _long(number: Any) -> int:
    # builtin ints within range are already longs
    if type(number) is int64 or (
        type(number) is int and INT64_MIN <= number <= INT64_MAX
    ):
        return number
    return int64(_to_integral(number, 64))


def _integral(number: Any) -> int:
    if type(number) is int:
        return number
    try:
        # truncates toward zero, exact for ints, decimals and fractions
        return int(number)
    except (ValueError, OverflowError):
        # NaN or infinity
        return _saturate(_to_float(number), 64)


def _float(number: Any) -> float32:
    return float32(_to_single(number))


def _double(number: Any) -> float:
    if type(number) in (float, float64):
        return number
    return float64(_to_float(number))


SHORT = NumberType("short", int16, _short)
INTEGER = NumberType("int", int32, _integer)
LONG = NumberType("long", int64, _long)
INTEGRAL = NumberType("integral", int, _integral)
FLOAT = NumberType("float", float32, _float)
DOUBLE = NumberType("double", float64, _double)

NUMBER_TYPES: MappingProxyType[type, NumberType] = MappingProxyType(
    {
        int16: SHORT,
        int32: INTEGER,
        int64: LONG,
        int: INTEGRAL,
        float32: FLOAT,
        float64: DOUBLE,
        float: DOUBLE,
    }
)
"""
Mapping of target type to coercion strategy. The builtin `float` is treated as a
double, while the builtin `int` is unbounded and never wraps.
"""


def get_number_type(type_: Any, /) -> NumberType | None:
    """
    Get the coercion strategy for the exact type `type_`, or `None` if it's not a
    recognized numeric type.
    """
    try:
        return NUMBER_TYPES.get(type_)
    except TypeError:
        # unhashable annotation
        return None
