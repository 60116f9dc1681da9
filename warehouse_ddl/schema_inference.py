"""Simple column inference for CSV sources."""

from __future__ import annotations
from typing import Union
import pandas as pd

from .columns import ColumnCollection
from .datatype import (
    BASETYPE_BOOLEAN,
    BASETYPE_FLOAT,
    BASETYPE_INTEGER,
    BASETYPE_STRING,
    BASETYPE_TIMESTAMP,
)
from .datatype.lengths import IntegerLength
from .engines import Engine, get_engine


def _infer_basetype(series: pd.Series) -> str:
    sample = series.dropna()
    if sample.empty:
        return BASETYPE_STRING
    if pd.api.types.is_bool_dtype(series):
        return BASETYPE_BOOLEAN
    if pd.api.types.is_integer_dtype(series):
        return BASETYPE_INTEGER
    if pd.api.types.is_float_dtype(series):
        if (sample == sample.astype(int)).all():
            return BASETYPE_INTEGER
        return BASETYPE_FLOAT
    if all(str(x).lower() in {"true", "false"} for x in sample.head(20)):
        return BASETYPE_BOOLEAN
    try:
        pd.to_datetime(sample, errors="raise")
        return BASETYPE_TIMESTAMP
    except (ValueError, TypeError):
        return BASETYPE_STRING


def _string_length(series: pd.Series, engine: Engine) -> str:
    """Longest sampled value, clamped to what the engine's string type accepts."""
    values = series.dropna().astype(str)
    if engine.definition_class.LENGTH_IN_BYTES:
        longest = int(values.map(lambda value: len(value.encode("utf-8"))).max())
    else:
        longest = int(values.str.len().max())
    string_type = engine.definition_class.BASETYPE_TYPES[BASETYPE_STRING]
    rule = engine.definition_class.LENGTH_RULES.get(string_type)
    if isinstance(rule, IntegerLength):
        longest = rule.clamp(longest)
    return str(longest)


def infer_columns_csv(
    path: str,
    engine: Union[Engine, str],
    sample_rows: int = 1000,
    generic: bool = False,
) -> ColumnCollection:
    """Infer engine columns for a CSV file using basic profiling.

    With ``generic`` every column becomes the engine's generic string column.
    """
    if isinstance(engine, str):
        engine = get_engine(engine)
    df = pd.read_csv(path, nrows=sample_rows)
    if generic:
        return ColumnCollection(engine.column_class.create_generic_column(str(col)) for col in df.columns)

    columns = []
    for col in df.columns:
        series = df[col]
        nullable = bool(series.isna().any())
        basetype = _infer_basetype(series)
        length = None
        if basetype == BASETYPE_STRING and not series.dropna().empty:
            length = _string_length(series, engine)
        definition = engine.definition_class.for_basetype(basetype, nullable=nullable, length=length)
        columns.append(engine.column_class(str(col), definition))
    return ColumnCollection(columns)
