"""
Convertors between records and JSON-compatible values.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any, Protocol, Self, runtime_checkable

from .config import ConvertorConfig
from .exceptions import InstantiationError, UnsupportedConversionError
from .inspecting.accessors import Getter, Setter, discover_accessors
from .output import DictOutput, Output
from .report import ConversionReport

__all__ = [
    "Convertor",
    "RecordConvertor",
]

logger = logging.getLogger(__name__)


@runtime_checkable
class Convertor(Protocol):
    """
    Converts objects of a particular type to and from JSON. Consumed by a JSON codec
    which dispatches to convertors by type.
    """

    def to_json(self, obj: Any, out: Output, /):
        """
        Write `obj` to `out`.
        """
        ...

    def from_json(self, obj: Mapping[str, Any], /) -> Any:
        """
        Create an object from a parsed JSON object.
        """
        ...


class RecordConvertor[RecordT]:
    """
    Converts records to and from JSON objects via their getters and setters.

    Getters and setters are discovered once upon construction; the convertor is
    immutable afterward and may be shared between threads. Unlike a generic object
    convertor, `from_json()` returns an actual record rather than a mapping, with
    numeric values coerced to the width each setter expects.

    Failure of an individual getter or setter does not abort a conversion: the
    property is skipped and a warning is logged.
    """

    __record_type: type[RecordT]
    __excluded: frozenset[str]
    __from_json: bool
    __getters: MappingProxyType[str, Getter]
    __setters: MappingProxyType[str, Setter]

    def __init__(
        self,
        record_type: type[RecordT],
        /,
        excluded: Iterable[str] | None = None,
        *,
        from_json: bool = True,
    ):
        """
        :param record_type: Record type to convert
        :param excluded: Property names to omit when reading and writing
        :param from_json: Whether records may be constructed from JSON
        :raises DiscoveryError: If `record_type` can't be introspected
        """
        self.__record_type = record_type
        self.__excluded = frozenset(excluded or ())
        self.__from_json = from_json

        table = discover_accessors(record_type, self._include_field)
        self.__getters = table.getters
        self.__setters = table.setters

    @classmethod
    def from_config(cls, record_type: type[RecordT], config: ConvertorConfig) -> Self:
        """
        Create convertor with parameters from `config`.
        """
        return cls(record_type, config.excluded, from_json=config.from_json)

    def __repr__(self) -> str:
        return "{}({}, getters={}, setters={})".format(
            type(self).__name__,
            self.__record_type.__qualname__,
            list(self.__getters),
            list(self.__setters),
        )

    @property
    def record_type(self) -> type[RecordT]:
        return self.__record_type

    @property
    def excluded(self) -> frozenset[str]:
        return self.__excluded

    @property
    def excluded_count(self) -> int:
        return len(self.__excluded)

    @property
    def from_json_enabled(self) -> bool:
        return self.__from_json

    @property
    def getters(self) -> MappingProxyType[str, Getter]:
        return self.__getters

    @property
    def setters(self) -> MappingProxyType[str, Setter]:
        return self.__setters

    def to_json(
        self, obj: RecordT, out: Output, /, *, report: ConversionReport | None = None
    ):
        """
        Write the record's type and each of its properties to `out`.

        :param obj: Record to convert
        :param out: Sink to write to
        :param report: Optional report to populate with per-property results
        """
        out.add_class(self.__record_type)

        for name, getter in self.__getters.items():
            try:
                value = getter.invoke(obj)
            except Exception as e:
                logger.warning(
                    "%s property '%s' excluded. (errors)",
                    self.__record_type.__qualname__,
                    name,
                    exc_info=True,
                )
                if report is not None:
                    report.append_error(name, e)
                continue

            out.add(name, value)
            if report is not None:
                report.processed.append(name)

    def to_dict(
        self, obj: RecordT, /, *, report: ConversionReport | None = None
    ) -> dict[str, Any]:
        """
        Convert the record to a dict tagged with its type.
        """
        out = DictOutput()
        self.to_json(obj, out, report=report)
        return out.obj

    def from_json(
        self, obj: Mapping[str, Any], /, *, report: ConversionReport | None = None
    ) -> RecordT:
        """
        Create a record using its default constructor and set each property present
        in `obj`. Keys without a corresponding setter are ignored.

        :param obj: Parsed JSON object
        :param report: Optional report to populate with per-property results
        :raises UnsupportedConversionError: If convertor was created with \
        `from_json=False`
        :raises InstantiationError: If the record can't be constructed
        :return: New record
        """
        if not self.__from_json:
            raise UnsupportedConversionError(
                f"Conversion from JSON is disabled for {self.__record_type.__qualname__}"
            )

        record = self._instantiate()

        for name, value in obj.items():
            setter = self.__setters.get(name)
            if setter is None:
                if report is not None:
                    report.ignored.append(name)
                continue

            try:
                setter.invoke(record, value)
            except Exception as e:
                logger.warning(
                    "%s property '%s' not set. (errors)",
                    self.__record_type.__qualname__,
                    name,
                    exc_info=True,
                )
                if report is not None:
                    report.append_error(name, e)
                continue

            if report is not None:
                report.processed.append(name)

        return record

    def _instantiate(self) -> RecordT:
        try:
            return self.__record_type()
        except Exception as e:
            raise InstantiationError(self.__record_type, str(e) or repr(e)) from e

    def _include_field(self, name: str, member: Any) -> bool:
        """
        Whether to register a property during discovery. Subclasses may override to
        filter properties by other criteria.
        """
        return name not in self.__excluded
