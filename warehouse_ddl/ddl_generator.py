"""DDL generation for Redshift, Snowflake and Teradata tables."""

from __future__ import annotations

import logging
from typing import ClassVar, Iterable, Sequence, Type

from .columns import Column, ColumnCollection, RedshiftColumn, SnowflakeColumn, TeradataColumn
from .exceptions import InvalidColumnError, InvalidPrimaryKeyError
from .quoting import quote_identifier, quote_identifiers, quote_qualified
from .table import TableDefinition


class DDLGenerator:
    """
    Render table DDL for one engine.

    Pure string templates with no I/O: the same input always renders the
    same statement. Only CREATE carries a statement terminator.
    """

    COLUMN_CLASS: ClassVar[Type[Column]] = Column

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    def _create_prefix(self, schema_name: str, table_name: str, is_temporary: bool) -> str:
        temporary = "TEMPORARY " if is_temporary else ""
        return f"CREATE {temporary}TABLE {quote_qualified(schema_name, table_name)}"

    def _create_suffix(self, is_temporary: bool) -> str:
        return ";"

    def column_sql(self, column: Column) -> str:
        """Render ``"name" TYPE[(length)][ DEFAULT x][ ENCODE codec][ NOT NULL]``."""
        definition = column.definition
        sql = f"{quote_identifier(column.name)} {definition.get_type_sql()}"
        if definition.default is not None:
            sql += f" DEFAULT {definition.default}"
        sql += definition.get_compression_sql()
        if not definition.nullable:
            sql += " NOT NULL"
        return sql

    def _check_columns(self, columns: ColumnCollection, primary_keys: Sequence[str]) -> None:
        if len(columns) == 0:
            raise InvalidColumnError("Table needs at least one column")
        for column in columns:
            if not isinstance(column, self.COLUMN_CLASS):
                raise InvalidColumnError(
                    f"{self.__class__.__name__} cannot render {type(column).__name__} '{column.name}'",
                    value=column.name,
                )
        for key in primary_keys:
            if key not in columns:
                raise InvalidPrimaryKeyError(f"Primary key '{key}' is not a column", option="primary_keys", value=key)

    def create_table_sql(
        self,
        schema_name: str,
        table_name: str,
        columns: ColumnCollection,
        primary_keys: Iterable[str] = (),
        is_temporary: bool = False,
    ) -> str:
        """Generate CREATE TABLE; the PRIMARY KEY clause is emitted only for a non-empty key list."""
        primary_keys = list(primary_keys)
        self._check_columns(columns, primary_keys)

        definitions = [self.column_sql(column) for column in columns]
        if primary_keys:
            definitions.append(f"PRIMARY KEY ({quote_identifiers(primary_keys)})")

        sql = (
            self._create_prefix(schema_name, table_name, is_temporary)
            + "\n(\n"
            + ",\n".join(definitions)
            + "\n)"
            + self._create_suffix(is_temporary)
        )
        self.logger.debug(f"Rendered CREATE for {schema_name}.{table_name}: {sql}")
        return sql

    def create_table_from_definition_sql(self, definition: TableDefinition, include_primary_keys: bool = False) -> str:
        return self.create_table_sql(
            definition.schema_name,
            definition.table_name,
            definition.columns,
            definition.primary_keys if include_primary_keys else (),
            is_temporary=definition.is_temporary,
        )

    def rename_table_sql(self, schema_name: str, old_table_name: str, new_table_name: str) -> str:
        return (
            f"ALTER TABLE {quote_qualified(schema_name, old_table_name)} "
            f"RENAME TO {quote_qualified(schema_name, new_table_name)}"
        )

    def truncate_table_sql(self, schema_name: str, table_name: str) -> str:
        return f"TRUNCATE TABLE {quote_qualified(schema_name, table_name)}"

    def drop_table_sql(self, schema_name: str, table_name: str) -> str:
        return f"DROP TABLE {quote_qualified(schema_name, table_name)}"


class SnowflakeDDLGenerator(DDLGenerator):
    COLUMN_CLASS = SnowflakeColumn


class RedshiftDDLGenerator(DDLGenerator):
    """Redshift temporary tables live in a session schema and cannot be qualified."""

    COLUMN_CLASS = RedshiftColumn

    def _create_prefix(self, schema_name: str, table_name: str, is_temporary: bool) -> str:
        if is_temporary:
            return f"CREATE TEMPORARY TABLE {quote_identifier(table_name)}"
        return super()._create_prefix(schema_name, table_name, is_temporary)

    def rename_table_sql(self, schema_name: str, old_table_name: str, new_table_name: str) -> str:
        # the new name stays in the same schema and must not be qualified
        return (
            f"ALTER TABLE {quote_qualified(schema_name, old_table_name)} "
            f"RENAME TO {quote_identifier(new_table_name)}"
        )


class TeradataDDLGenerator(DDLGenerator):
    COLUMN_CLASS = TeradataColumn

    def _create_prefix(self, schema_name: str, table_name: str, is_temporary: bool) -> str:
        if is_temporary:
            return f"CREATE MULTISET VOLATILE TABLE {quote_qualified(schema_name, table_name)}, NO LOG"
        return f"CREATE MULTISET TABLE {quote_qualified(schema_name, table_name)}, FALLBACK"

    def _create_suffix(self, is_temporary: bool) -> str:
        if is_temporary:
            return "\nON COMMIT PRESERVE ROWS;"
        return ";"

    def rename_table_sql(self, schema_name: str, old_table_name: str, new_table_name: str) -> str:
        return (
            f"RENAME TABLE {quote_qualified(schema_name, old_table_name)} "
            f"TO {quote_qualified(schema_name, new_table_name)}"
        )

    def truncate_table_sql(self, schema_name: str, table_name: str) -> str:
        return f"DELETE FROM {quote_qualified(schema_name, table_name)} ALL"
