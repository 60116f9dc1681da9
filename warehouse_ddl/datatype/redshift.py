"""Amazon Redshift datatypes."""

from .base import (
    BASETYPE_BOOLEAN,
    BASETYPE_DATE,
    BASETYPE_FLOAT,
    BASETYPE_INTEGER,
    BASETYPE_NUMERIC,
    BASETYPE_STRING,
    BASETYPE_TIMESTAMP,
    BASETYPES,
    Definition,
)
from .lengths import IntegerLength, NumericLength

_INTEGER_TYPES = ("SMALLINT", "INT2", "INTEGER", "INT", "INT4", "BIGINT", "INT8")
_NUMERIC_TYPES = ("DECIMAL", "NUMERIC")
_FLOAT_TYPES = ("REAL", "FLOAT4", "DOUBLE PRECISION", "FLOAT8", "FLOAT")
_BOOLEAN_TYPES = ("BOOLEAN", "BOOL")
_CHAR_TYPES = ("CHAR", "CHARACTER", "NCHAR", "BPCHAR")
_VARCHAR_TYPES = ("VARCHAR", "CHARACTER VARYING", "NVARCHAR", "TEXT")
_TIMESTAMP_TYPES = (
    "TIMESTAMP",
    "TIMESTAMP WITHOUT TIME ZONE",
    "TIMESTAMPTZ",
    "TIMESTAMP WITH TIME ZONE",
)

_ALL = frozenset(BASETYPES)
_NUMBERS_AND_TIME = frozenset({BASETYPE_INTEGER, BASETYPE_NUMERIC, BASETYPE_DATE, BASETYPE_TIMESTAMP})
_NUMBERS = frozenset({BASETYPE_INTEGER, BASETYPE_NUMERIC})


class Redshift(Definition):
    """Redshift column datatype with optional ``ENCODE`` compression."""

    ENGINE = "Redshift"
    TYPES = (
        _INTEGER_TYPES
        + _NUMERIC_TYPES
        + _FLOAT_TYPES
        + _BOOLEAN_TYPES
        + _CHAR_TYPES
        + _VARCHAR_TYPES
        + ("DATE",)
        + _TIMESTAMP_TYPES
    )
    OPTIONS = frozenset({"length", "nullable", "default", "compression"})
    LENGTH_IN_BYTES = True

    LENGTH_RULES = {
        **{name: NumericLength(max_precision=37) for name in _NUMERIC_TYPES},
        **{name: IntegerLength(1, 65535) for name in _VARCHAR_TYPES},
        **{name: IntegerLength(1, 4096) for name in _CHAR_TYPES},
        **{name: IntegerLength(0, 9) for name in _TIMESTAMP_TYPES},
    }

    BASETYPE_MAP = {
        **dict.fromkeys(_INTEGER_TYPES, BASETYPE_INTEGER),
        **dict.fromkeys(_NUMERIC_TYPES, BASETYPE_NUMERIC),
        **dict.fromkeys(_FLOAT_TYPES, BASETYPE_FLOAT),
        **dict.fromkeys(_BOOLEAN_TYPES, BASETYPE_BOOLEAN),
        "DATE": BASETYPE_DATE,
        **dict.fromkeys(_TIMESTAMP_TYPES, BASETYPE_TIMESTAMP),
    }

    COMPRESSIONS = {
        "RAW": _ALL,
        "RUNLENGTH": _ALL,
        "ZSTD": _ALL,
        "BYTEDICT": _ALL - {BASETYPE_BOOLEAN},
        "LZO": _ALL - {BASETYPE_BOOLEAN, BASETYPE_FLOAT},
        "AZ64": _NUMBERS_AND_TIME,
        "DELTA": _NUMBERS_AND_TIME,
        "DELTA32K": _NUMBERS_AND_TIME,
        "MOSTLY8": _NUMBERS,
        "MOSTLY16": _NUMBERS,
        "MOSTLY32": _NUMBERS,
        "TEXT255": frozenset({BASETYPE_STRING}),
        "TEXT32K": frozenset({BASETYPE_STRING}),
    }

    BASETYPE_TYPES = {
        BASETYPE_INTEGER: "BIGINT",
        BASETYPE_NUMERIC: "NUMERIC",
        BASETYPE_FLOAT: "DOUBLE PRECISION",
        BASETYPE_BOOLEAN: "BOOLEAN",
        BASETYPE_DATE: "DATE",
        BASETYPE_TIMESTAMP: "TIMESTAMP",
        BASETYPE_STRING: "VARCHAR",
    }
