"""
Schema and table reflection over a query executor.

Reads catalog metadata back so callers can confirm that a table matches the
definition it was created from. Column rows are turned into columns through
each engine's ``create_from_db``.
"""

import logging
from typing import ClassVar, Iterable, List, Type

from .columns import Column, ColumnCollection, RedshiftColumn, SnowflakeColumn, TeradataColumn, row_value
from .connection import QueryExecutor, Row
from .exceptions import QueryExecutionError
from .quoting import quote_identifier, quote_literal, quote_qualified
from .table import TableDefinition


class SchemaReflection:
    """List tables and views of one schema (Teradata: database)."""

    _NAME_KEY = "name"

    def __init__(self, connection: QueryExecutor, schema_name: str):
        self.connection = connection
        self.schema_name = schema_name
        self.logger = logging.getLogger(self.__class__.__name__)

    def database_exists(self) -> bool:
        raise NotImplementedError

    def _tables_query(self) -> str:
        raise NotImplementedError

    def _views_query(self) -> str:
        raise NotImplementedError

    def _names(self, sql: str) -> List[str]:
        return [str(row_value(row, self._NAME_KEY)).strip() for row in self.connection.execute(sql)]

    def get_tables_names(self) -> List[str]:
        return self._names(self._tables_query())

    def get_views_names(self) -> List[str]:
        return self._names(self._views_query())

    def tables_exist(self, table_names: Iterable[str]) -> bool:
        existing = set(self.get_tables_names())
        return all(name in existing for name in table_names)

    def _probe(self, sql: str) -> bool:
        # the one place a backend failure becomes a result instead of an error
        try:
            self.connection.execute(sql)
            return True
        except QueryExecutionError as e:
            self.logger.debug(f"{self.schema_name} not found: {e}")
            return False


class SnowflakeSchemaReflection(SchemaReflection):
    def database_exists(self) -> bool:
        return self._probe(f"DESC SCHEMA {quote_identifier(self.schema_name)}")

    def _tables_query(self) -> str:
        return f"SHOW TABLES IN SCHEMA {quote_identifier(self.schema_name)}"

    def _views_query(self) -> str:
        return f"SHOW VIEWS IN SCHEMA {quote_identifier(self.schema_name)}"


class RedshiftSchemaReflection(SchemaReflection):
    _NAME_KEY = "table_name"

    def database_exists(self) -> bool:
        rows = self.connection.execute(
            f"SELECT nspname FROM pg_namespace WHERE nspname = {quote_literal(self.schema_name)}"
        )
        return len(rows) > 0

    def _kind_query(self, table_type: str) -> str:
        return (
            "SELECT table_name FROM information_schema.tables "
            f"WHERE table_schema = {quote_literal(self.schema_name)} AND table_type = {quote_literal(table_type)} "
            "ORDER BY table_name"
        )

    def _tables_query(self) -> str:
        return self._kind_query("BASE TABLE")

    def _views_query(self) -> str:
        return self._kind_query("VIEW")


class TeradataSchemaReflection(SchemaReflection):
    _NAME_KEY = "TableName"

    def database_exists(self) -> bool:
        return self._probe(f"HELP DATABASE {quote_identifier(self.schema_name)}")

    def _kind_query(self, kinds: str) -> str:
        return (
            "SELECT TableName FROM DBC.TablesV "
            f"WHERE TableKind IN ({kinds}) AND DataBaseName = {quote_literal(self.schema_name)}"
        )

    def _tables_query(self) -> str:
        # 'O' is a table without a primary index
        return self._kind_query("'T', 'O'")

    def _views_query(self) -> str:
        return self._kind_query("'V'")


class TableReflection:
    """Columns, keys and row count of one existing table."""

    COLUMN_CLASS: ClassVar[Type[Column]] = Column
    _COUNT_KEY = "count"

    def __init__(self, connection: QueryExecutor, schema_name: str, table_name: str):
        self.connection = connection
        self.schema_name = schema_name
        self.table_name = table_name
        self.logger = logging.getLogger(self.__class__.__name__)

    def _describe_query(self) -> str:
        raise NotImplementedError

    def _primary_keys_query(self) -> str:
        raise NotImplementedError

    def _primary_keys(self, rows: List[Row]) -> List[str]:
        return [str(row_value(row, "column_name")).strip() for row in rows]

    def _describe_rows(self) -> List[Row]:
        return self.connection.execute(self._describe_query())

    def is_temporary(self) -> bool:
        raise NotImplementedError

    def get_columns_definitions(self) -> ColumnCollection:
        return ColumnCollection.from_rows(self.COLUMN_CLASS, self._describe_rows())

    def get_columns_names(self) -> List[str]:
        return self.get_columns_definitions().get_columns_names()

    def get_primary_keys_names(self) -> List[str]:
        return self._primary_keys(self.connection.execute(self._primary_keys_query()))

    def get_rows_count(self) -> int:
        rows = self.connection.execute(
            f"SELECT COUNT(*) AS {self._COUNT_KEY} FROM {quote_qualified(self.schema_name, self.table_name)}"
        )
        return int(row_value(rows[0], self._COUNT_KEY))

    def get_table_definition(self) -> TableDefinition:
        self.logger.debug(f"Reflecting {self.schema_name}.{self.table_name}")
        return TableDefinition(
            self.schema_name,
            self.table_name,
            self.is_temporary(),
            self.get_columns_definitions(),
            tuple(self.get_primary_keys_names()),
        )


class SnowflakeTableReflection(TableReflection):
    COLUMN_CLASS = SnowflakeColumn

    def _describe_rows(self) -> List[Row]:
        # DESC TABLE also lists virtual columns
        return [row for row in super()._describe_rows() if row_value(row, "kind", "COLUMN") == "COLUMN"]

    def _describe_query(self) -> str:
        return f"DESC TABLE {quote_qualified(self.schema_name, self.table_name)}"

    def _primary_keys_query(self) -> str:
        return f"SHOW PRIMARY KEYS IN TABLE {quote_qualified(self.schema_name, self.table_name)}"

    def _primary_keys(self, rows: List[Row]) -> List[str]:
        rows = sorted(rows, key=lambda row: int(row_value(row, "key_sequence", 0)))
        return super()._primary_keys(rows)

    def is_temporary(self) -> bool:
        rows = self.connection.execute(
            f"SHOW TABLES LIKE {quote_literal(self.table_name)} IN SCHEMA {quote_identifier(self.schema_name)}"
        )
        return any(
            row_value(row, "name") == self.table_name and row_value(row, "kind") == "TEMPORARY" for row in rows
        )


class RedshiftTableReflection(TableReflection):
    COLUMN_CLASS = RedshiftColumn

    def _describe_query(self) -> str:
        return (
            "SELECT c.column_name, c.data_type, c.character_maximum_length, c.numeric_precision, c.numeric_scale, "
            "c.is_nullable, c.column_default, format_encoding(a.attencodingtype::integer) AS encoding "
            "FROM information_schema.columns c "
            "JOIN pg_namespace n ON n.nspname = c.table_schema "
            "JOIN pg_class t ON t.relnamespace = n.oid AND t.relname = c.table_name "
            "LEFT JOIN pg_attribute a ON a.attrelid = t.oid AND a.attname = c.column_name "
            f"WHERE c.table_schema = {quote_literal(self.schema_name)} "
            f"AND c.table_name = {quote_literal(self.table_name)} "
            "ORDER BY c.ordinal_position"
        )

    def _primary_keys_query(self) -> str:
        return (
            "SELECT kcu.column_name FROM information_schema.table_constraints tc "
            "JOIN information_schema.key_column_usage kcu "
            "ON tc.constraint_name = kcu.constraint_name AND tc.table_schema = kcu.table_schema "
            "AND tc.table_name = kcu.table_name "
            f"WHERE tc.constraint_type = 'PRIMARY KEY' AND tc.table_schema = {quote_literal(self.schema_name)} "
            f"AND tc.table_name = {quote_literal(self.table_name)} "
            "ORDER BY kcu.ordinal_position"
        )

    def is_temporary(self) -> bool:
        rows = self.connection.execute(
            "SELECT n.nspname FROM pg_class c JOIN pg_namespace n ON n.oid = c.relnamespace "
            f"WHERE c.relname = {quote_literal(self.table_name)} AND n.nspname LIKE 'pg_temp_%'"
        )
        return len(rows) > 0


class TeradataTableReflection(TableReflection):
    COLUMN_CLASS = TeradataColumn
    _COUNT_KEY = "NumberOfRows"

    def _describe_query(self) -> str:
        return (
            "SELECT ColumnName, ColumnType, ColumnLength, DecimalTotalDigits, DecimalFractionalDigits, "
            "CharType, Nullable, DefaultValue FROM DBC.ColumnsV "
            f"WHERE DataBaseName = {quote_literal(self.schema_name)} AND TableName = {quote_literal(self.table_name)} "
            "ORDER BY ColumnId"
        )

    def _primary_keys_query(self) -> str:
        return (
            "SELECT ColumnName FROM DBC.IndicesV "
            f"WHERE DataBaseName = {quote_literal(self.schema_name)} AND TableName = {quote_literal(self.table_name)} "
            "AND IndexType = 'K' ORDER BY ColumnPosition"
        )

    def _primary_keys(self, rows: List[Row]) -> List[str]:
        return [str(row_value(row, "ColumnName")).strip() for row in rows]

    def is_temporary(self) -> bool:
        rows = self.connection.execute("HELP VOLATILE TABLE")
        return any(str(row_value(row, "Table Name", "")).strip() == self.table_name for row in rows)
