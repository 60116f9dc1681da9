"""
Engine-neutral table definitions rendered into Redshift, Snowflake and
Teradata DDL.

Datatype definitions are validated against each engine's type grammar at
construction, so the DDL generators can only ever render valid columns.
"""

from .columns import Column, ColumnCollection, RedshiftColumn, SnowflakeColumn, TeradataColumn
from .datatype import Definition, Redshift, Snowflake, Teradata
from .ddl_generator import DDLGenerator, RedshiftDDLGenerator, SnowflakeDDLGenerator, TeradataDDLGenerator
from .engines import ENGINES, Engine, get_engine
from .exceptions import (
    DefinitionError,
    InvalidColumnError,
    InvalidCompressionError,
    InvalidLengthError,
    InvalidOptionError,
    InvalidPrimaryKeyError,
    InvalidTypeError,
    QueryExecutionError,
    TableVerificationError,
)
from .table import TableDefinition

__all__ = [
    'Column',
    'ColumnCollection',
    'RedshiftColumn',
    'SnowflakeColumn',
    'TeradataColumn',
    'Definition',
    'Redshift',
    'Snowflake',
    'Teradata',
    'DDLGenerator',
    'RedshiftDDLGenerator',
    'SnowflakeDDLGenerator',
    'TeradataDDLGenerator',
    'ENGINES',
    'Engine',
    'get_engine',
    'DefinitionError',
    'InvalidColumnError',
    'InvalidCompressionError',
    'InvalidLengthError',
    'InvalidOptionError',
    'InvalidPrimaryKeyError',
    'InvalidTypeError',
    'QueryExecutionError',
    'TableVerificationError',
    'TableDefinition',
]

__version__ = '1.0.0'
