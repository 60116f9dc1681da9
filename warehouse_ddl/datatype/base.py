"""
Shared contract for engine datatype definitions.

A definition is immutable once constructed and always internally consistent:
its type belongs to the engine, its length parses under the type's grammar and
its compression (if any) is compatible with the type. Engines only declare
constant tables; all validation and rendering lives here.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, FrozenSet, List, Mapping, Optional, Tuple

from ..exceptions import InvalidCompressionError, InvalidLengthError, InvalidOptionError, InvalidTypeError
from .lengths import NoLength

BASETYPE_INTEGER = "INTEGER"
BASETYPE_NUMERIC = "NUMERIC"
BASETYPE_FLOAT = "FLOAT"
BASETYPE_BOOLEAN = "BOOLEAN"
BASETYPE_DATE = "DATE"
BASETYPE_TIMESTAMP = "TIMESTAMP"
BASETYPE_STRING = "STRING"

BASETYPES = (
    BASETYPE_INTEGER,
    BASETYPE_NUMERIC,
    BASETYPE_FLOAT,
    BASETYPE_BOOLEAN,
    BASETYPE_DATE,
    BASETYPE_TIMESTAMP,
    BASETYPE_STRING,
)

METADATA_PREFIX = "KBC.datatype."

NO_LENGTH = NoLength()


def _normalize_length(length: Any) -> Optional[str]:
    if length is None:
        return None
    # `length: yes` in YAML loads as True
    if isinstance(length, bool) or not isinstance(length, (str, int)):
        raise InvalidLengthError(
            f"Length must be a string or an integer, got {length!r}",
            option="length",
            value=length,
        )
    if isinstance(length, int):
        return str(length)
    length = length.strip()
    return length or None


@dataclass(frozen=True, init=False)
class Definition:
    """Validated column datatype for one engine."""

    ENGINE: ClassVar[str] = ""
    TYPES: ClassVar[Tuple[str, ...]] = ()
    OPTIONS: ClassVar[FrozenSet[str]] = frozenset({"length", "nullable", "default"})
    LENGTH_RULES: ClassVar[Mapping[str, Any]] = {}
    BASETYPE_MAP: ClassVar[Mapping[str, str]] = {}
    # codec -> basetypes it may be applied to
    COMPRESSIONS: ClassVar[Mapping[str, FrozenSet[str]]] = {}
    # basetype -> type used when only the basetype is known
    BASETYPE_TYPES: ClassVar[Mapping[str, str]] = {}
    # string lengths count bytes rather than characters
    LENGTH_IN_BYTES: ClassVar[bool] = False

    type: str
    length: Optional[str]
    nullable: bool
    default: Optional[str]
    compression: Optional[str]

    def __init__(self, type_name: str, options: Optional[Mapping[str, Any]] = None):
        options = dict(options or {})
        type_name = self._normalize_type(type_name)
        self._validate_options(options)

        length = _normalize_length(options.get("length"))
        self.LENGTH_RULES.get(type_name, NO_LENGTH).validate(type_name, length)

        nullable = options.get("nullable", True)
        if not isinstance(nullable, bool):
            raise InvalidOptionError(
                f"Option 'nullable' must be a boolean, got {nullable!r}",
                option="nullable",
                value=nullable,
            )

        default = options.get("default")
        if default is not None and not isinstance(default, str):
            default = str(default)

        compression = self._normalize_compression(type_name, options.get("compression"))

        object.__setattr__(self, "type", type_name)
        object.__setattr__(self, "length", length)
        object.__setattr__(self, "nullable", nullable)
        object.__setattr__(self, "default", default)
        object.__setattr__(self, "compression", compression)

    @classmethod
    def _normalize_type(cls, type_name: Any) -> str:
        if not isinstance(type_name, str):
            raise InvalidTypeError(f"Type name must be a string, got {type_name!r}", option="type", value=type_name)
        normalized = " ".join(type_name.split()).upper()
        if normalized not in cls.TYPES:
            raise InvalidTypeError(
                f"'{type_name}' is not a valid {cls.ENGINE} type",
                option="type",
                value=type_name,
            )
        return normalized

    @classmethod
    def _validate_options(cls, options: Mapping[str, Any]) -> None:
        unknown = sorted(set(options) - cls.OPTIONS)
        if unknown:
            raise InvalidOptionError(
                f"Option '{unknown[0]}' not supported by {cls.ENGINE}, allowed: {', '.join(sorted(cls.OPTIONS))}",
                option=unknown[0],
                value=options[unknown[0]],
            )

    @classmethod
    def _normalize_compression(cls, type_name: str, compression: Any) -> Optional[str]:
        if compression is None:
            return None
        normalized = str(compression).strip().upper()
        if not normalized:
            return None
        if normalized not in cls.COMPRESSIONS:
            raise InvalidCompressionError(
                f"'{compression}' is not a valid {cls.ENGINE} compression",
                option="compression",
                value=compression,
            )
        basetype = cls.BASETYPE_MAP.get(type_name, BASETYPE_STRING)
        if basetype not in cls.COMPRESSIONS[normalized]:
            raise InvalidCompressionError(
                f"Compression {normalized} cannot be used with type {type_name}",
                option="compression",
                value=compression,
            )
        return normalized

    @classmethod
    def for_basetype(cls, basetype: str, nullable: bool = True, length: Optional[str] = None) -> "Definition":
        """Definition of the engine's default type for ``basetype``."""
        return cls(cls.BASETYPE_TYPES[basetype], {"nullable": nullable, "length": length})

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Definition":
        """Rebuild a definition from the output of :meth:`to_dict`."""
        options = {key: value for key, value in data.items() if key != "type"}
        return cls(data["type"], options)

    def evolve(self, **options: Any) -> "Definition":
        """Return a new definition with ``options`` replaced."""
        current = {key: value for key, value in self.to_dict().items() if key != "type"}
        current.update(options)
        return type(self)(self.type, current)

    def get_basetype(self) -> str:
        return self.BASETYPE_MAP.get(self.type, BASETYPE_STRING)

    def get_type_sql(self) -> str:
        if self.length is None:
            return self.type
        return f"{self.type}({self.length})"

    def get_compression_sql(self) -> str:
        if self.compression is None:
            return ""
        return f" ENCODE {self.compression}"

    def get_sql_definition(self) -> str:
        """Render ``TYPE[(length)][ ENCODE codec]``."""
        return self.get_type_sql() + self.get_compression_sql()

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "type": self.type,
            "length": self.length,
            "nullable": self.nullable,
            "default": self.default,
        }
        if "compression" in self.OPTIONS:
            data["compression"] = self.compression
        return data

    def to_metadata(self) -> List[Dict[str, Any]]:
        """Key/value records describing the definition; optional fields only when set."""
        metadata = [
            {"key": METADATA_PREFIX + "type", "value": self.type},
            {"key": METADATA_PREFIX + "nullable", "value": self.nullable},
            {"key": METADATA_PREFIX + "basetype", "value": self.get_basetype()},
        ]
        if self.length is not None:
            metadata.append({"key": METADATA_PREFIX + "length", "value": self.length})
        if self.default is not None:
            metadata.append({"key": METADATA_PREFIX + "default", "value": self.default})
        if self.compression is not None:
            metadata.append({"key": METADATA_PREFIX + "compression", "value": self.compression})
        return metadata
