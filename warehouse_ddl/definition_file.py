"""
YAML table definition files.

The file shape is validated with pydantic; column options are handed to the
engine's datatype constructor untouched, so a bad option still surfaces as
``InvalidOptionError`` rather than a pydantic error.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field

from .columns import ColumnCollection
from .engines import Engine, get_engine
from .table import TableDefinition


class ColumnSpec(BaseModel):
    """One column entry; every key besides ``name`` and ``type`` is a datatype option."""
    model_config = ConfigDict(extra='allow')

    name: str
    type: str

    @property
    def options(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})


class TableSpec(BaseModel):
    model_config = ConfigDict(extra='forbid')

    schema_name: str
    table_name: str
    temporary: bool = False
    columns: List[ColumnSpec] = Field(min_length=1)
    primary_keys: List[str] = Field(default_factory=list)


def build_table_definition(data: Mapping[str, Any], engine: Union[Engine, str]) -> TableDefinition:
    """Build a validated TableDefinition from a plain mapping."""
    if isinstance(engine, str):
        engine = get_engine(engine)
    spec = TableSpec.model_validate(data)
    columns = ColumnCollection(
        engine.column_class(column.name, engine.definition_class(column.type, column.options))
        for column in spec.columns
    )
    return TableDefinition(spec.schema_name, spec.table_name, spec.temporary, columns, tuple(spec.primary_keys))


def read_table_mapping(path: Union[str, Path]) -> Dict[str, Any]:
    with Path(path).open() as f:
        return yaml.safe_load(f) or {}


def load_table_definition_yaml(path: Union[str, Path], engine: Union[Engine, str]) -> TableDefinition:
    return build_table_definition(read_table_mapping(path), engine)


def export_table_definition_yaml(definition: TableDefinition, output_dir: Union[str, Path]) -> Path:
    """Write the definition to ``<output_dir>/<table>_schema.yaml``."""
    path = Path(output_dir) / f"{definition.table_name.lower()}_schema.yaml"
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w") as f:
        yaml.safe_dump(definition.to_dict(), f, sort_keys=False)
    return path
