"""Registry of the supported engines and their variant classes."""

from dataclasses import dataclass
from typing import Dict, Type

from .columns import Column, RedshiftColumn, SnowflakeColumn, TeradataColumn
from .datatype import Definition, Redshift, Snowflake, Teradata
from .ddl_generator import DDLGenerator, RedshiftDDLGenerator, SnowflakeDDLGenerator, TeradataDDLGenerator
from .reflection import (
    RedshiftSchemaReflection,
    RedshiftTableReflection,
    SchemaReflection,
    SnowflakeSchemaReflection,
    SnowflakeTableReflection,
    TableReflection,
    TeradataSchemaReflection,
    TeradataTableReflection,
)


@dataclass(frozen=True)
class Engine:
    name: str
    definition_class: Type[Definition]
    column_class: Type[Column]
    generator_class: Type[DDLGenerator]
    schema_reflection_class: Type[SchemaReflection]
    table_reflection_class: Type[TableReflection]


ENGINES: Dict[str, Engine] = {
    "redshift": Engine(
        "redshift", Redshift, RedshiftColumn, RedshiftDDLGenerator, RedshiftSchemaReflection, RedshiftTableReflection
    ),
    "snowflake": Engine(
        "snowflake", Snowflake, SnowflakeColumn, SnowflakeDDLGenerator, SnowflakeSchemaReflection, SnowflakeTableReflection
    ),
    "teradata": Engine(
        "teradata", Teradata, TeradataColumn, TeradataDDLGenerator, TeradataSchemaReflection, TeradataTableReflection
    ),
}


def get_engine(name: str) -> Engine:
    try:
        return ENGINES[name.lower()]
    except KeyError:
        raise ValueError(f"Unsupported engine '{name}', expected one of: {', '.join(sorted(ENGINES))}") from None
