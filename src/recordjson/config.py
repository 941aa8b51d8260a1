"""
Loading of convertor construction parameters from TOML documents (via `tomlkit`).

Each record type is configured in a table keyed by its qualified class name:

```toml
[convertors."package.module.Point"]
excluded = ["y"]
from_json = false
```
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Self

import tomlkit
from tomlkit.exceptions import TOMLKitError

from .exceptions import ConfigError
from .output import class_name

__all__ = [
    "CONVERTORS_KEY",
    "ConvertorConfig",
    "load_configs",
]

CONVERTORS_KEY = "convertors"
"""
Top-level table containing per-record-type tables.
"""


@dataclass(frozen=True)
class ConvertorConfig:
    """
    Construction parameters of a convertor.
    """

    excluded: frozenset[str] = field(default_factory=frozenset)
    """
    Property names to omit when reading and writing.
    """

    from_json: bool = True
    """
    Whether records may be constructed from JSON.
    """

    @classmethod
    def from_dict(cls, obj: Any, /, *, name: str = "<root>") -> Self:
        """
        Create config from a parsed table, validating its values.
        """
        if not isinstance(obj, dict):
            raise ConfigError(f"{name}: Expected table, got {type(obj).__name__}")

        unknown = set(obj) - {"excluded", "from_json"}
        if unknown:
            raise ConfigError(f"{name}: Unknown field(s): {sorted(unknown)}")

        excluded = obj.get("excluded", [])
        if not isinstance(excluded, list) or not all(
            isinstance(e, str) for e in excluded
        ):
            raise ConfigError(f"{name}.excluded: Expected array of strings")

        from_json = obj.get("from_json", True)
        if not isinstance(from_json, bool):
            raise ConfigError(f"{name}.from_json: Expected boolean")

        return cls(excluded=frozenset(excluded), from_json=from_json)

    @classmethod
    def loads(cls, string: str, record_type: type, /) -> Self:
        """
        Get config for `record_type` from a TOML string, or the default config if
        the record type isn't configured.
        """
        name = class_name(record_type)
        table = _parse_tables(string).get(name)
        if table is None:
            return cls()
        return cls.from_dict(table, name=f"{CONVERTORS_KEY}.{name}")

    @classmethod
    def load(cls, path: Path | str, record_type: type, /) -> Self:
        """
        Get config for `record_type` from a TOML file.
        """
        return cls.loads(Path(path).read_text(), record_type)


def load_configs(string: str, /) -> dict[str, ConvertorConfig]:
    """
    Parse all convertor configs in a TOML string, keyed by qualified class name.
    """
    return {
        name: ConvertorConfig.from_dict(table, name=f"{CONVERTORS_KEY}.{name}")
        for name, table in _parse_tables(string).items()
    }


def _parse_tables(string: str) -> dict[str, Any]:
    try:
        document = tomlkit.parse(string).unwrap()
    except TOMLKitError as e:
        raise ConfigError(f"Invalid TOML: {e}") from e

    tables = document.get(CONVERTORS_KEY, {})
    if not isinstance(tables, dict):
        raise ConfigError(f"{CONVERTORS_KEY}: Expected table")
    return tables
