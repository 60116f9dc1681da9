"""
Engine datatype definitions.

Each engine is a table-driven variant of :class:`Definition`; adding an engine
means declaring its type, length, basetype and compression tables.
"""

from .base import (
    BASETYPE_BOOLEAN,
    BASETYPE_DATE,
    BASETYPE_FLOAT,
    BASETYPE_INTEGER,
    BASETYPE_NUMERIC,
    BASETYPE_STRING,
    BASETYPE_TIMESTAMP,
    BASETYPES,
    METADATA_PREFIX,
    Definition,
)
from .redshift import Redshift
from .snowflake import Snowflake
from .teradata import Teradata

__all__ = [
    'BASETYPE_BOOLEAN',
    'BASETYPE_DATE',
    'BASETYPE_FLOAT',
    'BASETYPE_INTEGER',
    'BASETYPE_NUMERIC',
    'BASETYPE_STRING',
    'BASETYPE_TIMESTAMP',
    'BASETYPES',
    'METADATA_PREFIX',
    'Definition',
    'Redshift',
    'Snowflake',
    'Teradata',
]
