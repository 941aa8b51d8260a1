"""
Conversion between typed records and JSON-compatible values, driven by the
records' getters and setters.
"""

from .config import ConvertorConfig, load_configs
from .convertor import Convertor, RecordConvertor
from .exceptions import (
    ConfigError,
    DiscoveryError,
    InstantiationError,
    PropertyErrorDetail,
    RecordJSONError,
    UnsupportedConversionError,
)
from .numeric import (
    DOUBLE,
    FLOAT,
    INTEGER,
    INTEGRAL,
    LONG,
    SHORT,
    NumberType,
    float32,
    float64,
    get_number_type,
    int16,
    int32,
    int64,
)
from .output import CLASS_KEY, DictOutput, Output, class_name
from .report import ConversionReport

__all__ = [
    "ConvertorConfig",
    "load_configs",
    "Convertor",
    "RecordConvertor",
    "ConfigError",
    "DiscoveryError",
    "InstantiationError",
    "PropertyErrorDetail",
    "RecordJSONError",
    "UnsupportedConversionError",
    "DOUBLE",
    "FLOAT",
    "INTEGER",
    "INTEGRAL",
    "LONG",
    "SHORT",
    "NumberType",
    "float32",
    "float64",
    "get_number_type",
    "int16",
    "int32",
    "int64",
    "CLASS_KEY",
    "DictOutput",
    "Output",
    "class_name",
    "ConversionReport",
]
