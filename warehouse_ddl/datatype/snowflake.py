"""Snowflake datatypes."""

from .base import (
    BASETYPE_BOOLEAN,
    BASETYPE_DATE,
    BASETYPE_FLOAT,
    BASETYPE_INTEGER,
    BASETYPE_NUMERIC,
    BASETYPE_STRING,
    BASETYPE_TIMESTAMP,
    Definition,
)
from .lengths import IntegerLength, NumericLength

_NUMBER_TYPES = ("NUMBER", "DECIMAL", "NUMERIC")
_INTEGER_TYPES = ("INT", "INTEGER", "BIGINT", "SMALLINT", "TINYINT", "BYTEINT")
_FLOAT_TYPES = ("FLOAT", "FLOAT4", "FLOAT8", "DOUBLE", "DOUBLE PRECISION", "REAL")
_STRING_TYPES = ("VARCHAR", "CHAR", "CHARACTER", "STRING", "TEXT")
_BINARY_TYPES = ("BINARY", "VARBINARY")
_TIMESTAMP_TYPES = ("DATETIME", "TIMESTAMP", "TIMESTAMP_NTZ", "TIMESTAMP_LTZ", "TIMESTAMP_TZ")
_SEMI_STRUCTURED_TYPES = ("VARIANT", "OBJECT", "ARRAY", "GEOGRAPHY")


class Snowflake(Definition):
    """Snowflake column datatype. Snowflake has no per-column compression."""

    ENGINE = "Snowflake"
    TYPES = (
        _NUMBER_TYPES
        + _INTEGER_TYPES
        + _FLOAT_TYPES
        + _STRING_TYPES
        + ("BOOLEAN", "DATE", "TIME")
        + _TIMESTAMP_TYPES
        + _BINARY_TYPES
        + _SEMI_STRUCTURED_TYPES
    )

    LENGTH_RULES = {
        **{name: NumericLength(max_precision=38) for name in _NUMBER_TYPES},
        **{name: IntegerLength(1, 16777216) for name in _STRING_TYPES},
        **{name: IntegerLength(1, 8388608) for name in _BINARY_TYPES},
        **{name: IntegerLength(0, 9) for name in _TIMESTAMP_TYPES + ("TIME",)},
    }

    BASETYPE_MAP = {
        **dict.fromkeys(_INTEGER_TYPES, BASETYPE_INTEGER),
        **dict.fromkeys(_NUMBER_TYPES, BASETYPE_NUMERIC),
        **dict.fromkeys(_FLOAT_TYPES, BASETYPE_FLOAT),
        "BOOLEAN": BASETYPE_BOOLEAN,
        "DATE": BASETYPE_DATE,
        **dict.fromkeys(_TIMESTAMP_TYPES, BASETYPE_TIMESTAMP),
    }

    BASETYPE_TYPES = {
        BASETYPE_INTEGER: "INTEGER",
        BASETYPE_NUMERIC: "NUMBER",
        BASETYPE_FLOAT: "FLOAT",
        BASETYPE_BOOLEAN: "BOOLEAN",
        BASETYPE_DATE: "DATE",
        BASETYPE_TIMESTAMP: "TIMESTAMP_NTZ",
        BASETYPE_STRING: "VARCHAR",
    }
