"""Table definition value object."""

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from .columns import ColumnCollection
from .exceptions import InvalidPrimaryKeyError


@dataclass(frozen=True)
class TableDefinition:
    """
    Schema-qualified table with ordered columns and primary keys.

    Every primary key must name a column of the collection; the check runs
    at construction so builders can rely on it.
    """

    schema_name: str
    table_name: str
    is_temporary: bool
    columns: ColumnCollection
    primary_keys: Tuple[str, ...] = ()

    def __post_init__(self):
        primary_keys = tuple(self.primary_keys)
        for key in primary_keys:
            if key not in self.columns:
                raise InvalidPrimaryKeyError(
                    f"Primary key '{key}' is not a column of {self.schema_name}.{self.table_name}",
                    option="primary_keys",
                    value=key,
                )
        if len(set(primary_keys)) != len(primary_keys):
            raise InvalidPrimaryKeyError(
                f"Primary keys of {self.schema_name}.{self.table_name} contain duplicates",
                option="primary_keys",
                value=primary_keys,
            )
        object.__setattr__(self, "primary_keys", primary_keys)

    def get_columns_names(self) -> List[str]:
        return self.columns.get_columns_names()

    def get_primary_keys_names(self) -> List[str]:
        return list(self.primary_keys)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema_name": self.schema_name,
            "table_name": self.table_name,
            "temporary": self.is_temporary,
            "columns": [column.to_dict() for column in self.columns],
            "primary_keys": list(self.primary_keys),
        }
