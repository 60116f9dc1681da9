"""Teradata datatypes."""

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

_INTEGER_TYPES = ("BYTEINT", "SMALLINT", "INTEGER", "INT", "BIGINT")
_NUMERIC_TYPES = ("DECIMAL", "DEC", "NUMERIC", "NUMBER")
_FLOAT_TYPES = ("FLOAT", "REAL", "DOUBLE PRECISION")
_CHARACTER_TYPES = ("CHAR", "CHARACTER", "VARCHAR", "CHARACTER VARYING", "CHAR VARYING")
_BYTE_TYPES = ("BYTE", "VARBYTE")
_LOB_TYPES = ("BLOB", "BINARY LARGE OBJECT", "CLOB", "CHARACTER LARGE OBJECT")
_TIME_TYPES = ("TIME", "TIME WITH TIME ZONE")
_TIMESTAMP_TYPES = ("TIMESTAMP", "TIMESTAMP WITH TIME ZONE")

# DBC.ColumnsV.ColumnType code -> type name
COLUMN_TYPE_CODES = {
    "I1": "BYTEINT",
    "I2": "SMALLINT",
    "I": "INTEGER",
    "I8": "BIGINT",
    "D": "DECIMAL",
    "N": "NUMBER",
    "F": "FLOAT",
    "CF": "CHAR",
    "CV": "VARCHAR",
    "CO": "CLOB",
    "BF": "BYTE",
    "BV": "VARBYTE",
    "BO": "BLOB",
    "DA": "DATE",
    "AT": "TIME",
    "TZ": "TIME WITH TIME ZONE",
    "TS": "TIMESTAMP",
    "SZ": "TIMESTAMP WITH TIME ZONE",
    "JN": "JSON",
    "XM": "XML",
}


class Teradata(Definition):
    """Teradata column datatype. No compression option: MVC is value based, not a codec."""

    ENGINE = "Teradata"
    TYPES = (
        _INTEGER_TYPES
        + _NUMERIC_TYPES
        + _FLOAT_TYPES
        + _CHARACTER_TYPES
        + ("LONG VARCHAR",)
        + _BYTE_TYPES
        + _LOB_TYPES
        + ("DATE",)
        + _TIME_TYPES
        + _TIMESTAMP_TYPES
        + ("JSON", "XML")
    )

    LENGTH_RULES = {
        **{name: NumericLength(max_precision=38) for name in _NUMERIC_TYPES},
        **{name: IntegerLength(1, 64000) for name in _CHARACTER_TYPES + _BYTE_TYPES},
        **{name: IntegerLength(1, 2097088000) for name in _LOB_TYPES},
        **{name: IntegerLength(0, 6) for name in _TIME_TYPES + _TIMESTAMP_TYPES},
    }

    # TIME has no date part and stays STRING
    BASETYPE_MAP = {
        **dict.fromkeys(_INTEGER_TYPES, BASETYPE_INTEGER),
        **dict.fromkeys(_NUMERIC_TYPES, BASETYPE_NUMERIC),
        **dict.fromkeys(_FLOAT_TYPES, BASETYPE_FLOAT),
        "DATE": BASETYPE_DATE,
        **dict.fromkeys(_TIMESTAMP_TYPES, BASETYPE_TIMESTAMP),
    }

    BASETYPE_TYPES = {
        BASETYPE_INTEGER: "BIGINT",
        BASETYPE_NUMERIC: "DECIMAL",
        BASETYPE_FLOAT: "FLOAT",
        BASETYPE_BOOLEAN: "BYTEINT",
        BASETYPE_DATE: "DATE",
        BASETYPE_TIMESTAMP: "TIMESTAMP",
        BASETYPE_STRING: "VARCHAR",
    }
