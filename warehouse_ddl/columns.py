"""
Column definitions and ordered column collections.

A column pairs a name with a validated datatype definition of its engine.
``create_from_db`` rebuilds a column from one row of the engine's catalog
describe query and runs exactly the same validation as manual construction.
"""

import re
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Type

from .datatype import Definition, Redshift, Snowflake, Teradata
from .datatype.teradata import COLUMN_TYPE_CODES
from .exceptions import InvalidColumnError, InvalidLengthError, InvalidTypeError


def row_value(row: Mapping[str, Any], key: str, default: Any = None) -> Any:
    """Case-insensitive lookup; drivers disagree on the case of catalog column names."""
    if key in row:
        return row[key]
    lowered = key.lower()
    for candidate, value in row.items():
        if candidate.lower() == lowered:
            return value
    return default


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _catalog_int(row: Mapping[str, Any], key: str) -> Optional[int]:
    value = _strip(row_value(row, key))
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidLengthError(
            f"Catalog field {key} must be an integer, got {value!r}", option="length", value=value
        ) from None


@dataclass(frozen=True)
class Column:
    """Named column with an engine datatype definition."""

    DEFINITION_CLASS: ClassVar[Type[Definition]] = Definition
    GENERIC_TYPE: ClassVar[str] = "VARCHAR"
    GENERIC_LENGTH: ClassVar[Optional[str]] = None

    name: str
    definition: Definition

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise InvalidColumnError(f"Column name must be a non-empty string, got {self.name!r}", value=self.name)
        if not isinstance(self.definition, self.DEFINITION_CLASS):
            raise InvalidColumnError(
                f"Column '{self.name}' requires a {self.DEFINITION_CLASS.__name__} definition, "
                f"got {type(self.definition).__name__}",
                value=self.definition,
            )

    @classmethod
    def create_generic_column(cls, name: str) -> "Column":
        """Unbounded NOT NULL string column, used when no explicit definition is known."""
        return cls(name, cls.DEFINITION_CLASS(cls.GENERIC_TYPE, {"length": cls.GENERIC_LENGTH, "nullable": False}))

    @classmethod
    def create_from_db(cls, row: Mapping[str, Any]) -> "Column":
        raise NotImplementedError

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, **self.definition.to_dict()}


class RedshiftColumn(Column):
    """Column backed by ``information_schema.columns`` rows."""

    DEFINITION_CLASS = Redshift
    GENERIC_LENGTH = "65535"

    _PRECISION_TYPES = frozenset({"DECIMAL", "NUMERIC"})

    @classmethod
    def create_from_db(cls, row: Mapping[str, Any]) -> "RedshiftColumn":
        data_type = row_value(row, "data_type")
        type_name = " ".join(str(data_type).split()).upper() if data_type is not None else data_type

        length = None
        precision = row_value(row, "numeric_precision")
        char_length = row_value(row, "character_maximum_length")
        if type_name in cls._PRECISION_TYPES and precision is not None:
            length = f"{precision},{row_value(row, 'numeric_scale') or 0}"
        elif char_length is not None:
            length = str(char_length)

        encoding = _strip(row_value(row, "encoding"))
        compression = encoding if encoding and encoding.lower() != "none" else None

        return cls(
            row_value(row, "column_name"),
            Redshift(
                type_name,
                {
                    "length": length,
                    "nullable": _strip(row_value(row, "is_nullable", "YES")) == "YES",
                    "default": row_value(row, "column_default"),
                    "compression": compression,
                },
            ),
        )


class SnowflakeColumn(Column):
    """Column backed by ``DESC TABLE`` rows."""

    DEFINITION_CLASS = Snowflake

    _DESCRIBED_TYPE = re.compile(r"^\s*([A-Za-z_][A-Za-z0-9_ ]*?)\s*(?:\((.*)\))?\s*$")

    @classmethod
    def create_from_db(cls, row: Mapping[str, Any]) -> "SnowflakeColumn":
        described = row_value(row, "type")
        match = cls._DESCRIBED_TYPE.match(described) if isinstance(described, str) else None
        if match is None:
            raise InvalidTypeError(f"Cannot parse Snowflake type '{described}'", option="type", value=described)
        type_name, length = match.groups()

        return cls(
            row_value(row, "name"),
            Snowflake(
                type_name,
                {
                    "length": length,
                    "nullable": row_value(row, "null?", "Y") == "Y",
                    "default": row_value(row, "default"),
                },
            ),
        )


class TeradataColumn(Column):
    """Column backed by ``DBC.ColumnsV`` rows."""

    DEFINITION_CLASS = Teradata
    GENERIC_LENGTH = "32000"

    _CHARACTER_CODES = frozenset({"CF", "CV", "CO"})
    _BYTE_CODES = frozenset({"BF", "BV", "BO"})
    _DECIMAL_CODES = frozenset({"D", "N"})
    _FRACTIONAL_CODES = frozenset({"AT", "TZ", "TS", "SZ"})
    _UNICODE_CHAR_TYPE = 2

    @classmethod
    def create_from_db(cls, row: Mapping[str, Any]) -> "TeradataColumn":
        code = _strip(row_value(row, "ColumnType"))
        if code not in COLUMN_TYPE_CODES:
            raise InvalidTypeError(f"Unknown Teradata column type code '{code}'", option="type", value=code)

        length = None
        if code in cls._CHARACTER_CODES:
            length = _catalog_int(row, "ColumnLength")
            if length is None:
                raise InvalidLengthError(
                    f"Catalog row for type code '{code}' has no ColumnLength", option="length", value=None
                )
            # ColumnLength is in bytes, UNICODE stores two per character
            if (_catalog_int(row, "CharType") or 1) == cls._UNICODE_CHAR_TYPE:
                length //= 2
        elif code in cls._BYTE_CODES:
            length = _catalog_int(row, "ColumnLength")
        elif code in cls._DECIMAL_CODES:
            digits = _catalog_int(row, "DecimalTotalDigits")
            # NUMBER(*) reports a negative digit count
            if digits is not None and digits >= 0:
                length = f"{digits},{_catalog_int(row, 'DecimalFractionalDigits') or 0}"
        elif code in cls._FRACTIONAL_CODES:
            length = _catalog_int(row, "DecimalFractionalDigits")

        return cls(
            _strip(row_value(row, "ColumnName")),
            Teradata(
                COLUMN_TYPE_CODES[code],
                {
                    "length": length,
                    "nullable": _strip(row_value(row, "Nullable", "Y")) == "Y",
                    "default": row_value(row, "DefaultValue"),
                },
            ),
        )


@dataclass(frozen=True)
class ColumnCollection:
    """Ordered columns, unique by name; order is the column order of rendered DDL."""

    columns: Tuple[Column, ...] = ()

    def __post_init__(self):
        columns = tuple(self.columns)
        seen = set()
        for column in columns:
            if not isinstance(column, Column):
                raise InvalidColumnError(f"Expected a Column, got {type(column).__name__}", value=column)
            if column.name in seen:
                raise InvalidColumnError(f"Column '{column.name}' is already defined", value=column.name)
            seen.add(column.name)
        object.__setattr__(self, "columns", columns)

    def __iter__(self) -> Iterator[Column]:
        return iter(self.columns)

    def __len__(self) -> int:
        return len(self.columns)

    def __contains__(self, name: object) -> bool:
        return any(column.name == name for column in self.columns)

    def get(self, name: str) -> Column:
        for column in self.columns:
            if column.name == name:
                return column
        raise KeyError(name)

    def get_columns_names(self) -> List[str]:
        return [column.name for column in self.columns]

    def with_column(self, column: Column) -> "ColumnCollection":
        """Return a new collection with ``column`` appended."""
        return ColumnCollection(self.columns + (column,))

    @classmethod
    def from_rows(cls, column_class: Type[Column], rows: Iterable[Mapping[str, Any]]) -> "ColumnCollection":
        return cls(column_class.create_from_db(row) for row in rows)
