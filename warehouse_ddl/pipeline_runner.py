from __future__ import annotations
"""Create configured tables and command line entry point."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml
from tabulate import tabulate

from .config import Config
from .connection import QueryExecutor, create_connection
from .definition_file import (
    build_table_definition,
    export_table_definition_yaml,
    load_table_definition_yaml,
    read_table_mapping,
)
from .engines import ENGINES, Engine, get_engine
from .exceptions import DefinitionError, QueryExecutionError, TableVerificationError
from .logging_config import setup_logging
from .schema_inference import infer_columns_csv
from .settings import Settings
from .table import TableDefinition

logger = logging.getLogger(__name__)


def load_table_definitions(config: Config, engine: Engine) -> List[TableDefinition]:
    """Build every configured table; ``target_schema`` fills in a missing schema name."""
    definitions = []
    for entry in config.tables:
        if isinstance(entry, str):
            path = Path(entry)
            if not path.is_absolute():
                path = config.base_dir / path
            data = read_table_mapping(path)
        else:
            data = dict(entry)
        if config.target_schema and "schema_name" not in data:
            data["schema_name"] = config.target_schema
        definitions.append(build_table_definition(data, engine))
    return definitions


def verify_table(conn: QueryExecutor, engine: Engine, definition: TableDefinition) -> None:
    """Compare reflected column and key names with the definition, ignoring identifier case folding."""
    reflection = engine.table_reflection_class(conn, definition.schema_name, definition.table_name)

    expected = [name.lower() for name in definition.get_columns_names()]
    actual = [name.lower() for name in reflection.get_columns_names()]
    if actual != expected:
        raise TableVerificationError(
            f"Columns of {definition.schema_name}.{definition.table_name} do not match",
            expected=expected,
            actual=actual,
        )

    if definition.primary_keys:
        expected_keys = [name.lower() for name in definition.get_primary_keys_names()]
        actual_keys = [name.lower() for name in reflection.get_primary_keys_names()]
        if actual_keys != expected_keys:
            raise TableVerificationError(
                f"Primary keys of {definition.schema_name}.{definition.table_name} do not match",
                expected=expected_keys,
                actual=actual_keys,
            )


def run_pipeline(config_path: str = "config.yaml") -> None:
    """Create every table described by the config file."""
    config = Config(config_path)
    engine = get_engine(config.engine)
    generator = engine.generator_class()
    definitions = load_table_definitions(config, engine)

    conn = create_connection(engine.name, config.settings)
    try:
        for definition in definitions:
            name = f"{definition.schema_name}.{definition.table_name}"
            if not definition.is_temporary:
                schema = engine.schema_reflection_class(conn, definition.schema_name)
                if schema.tables_exist([definition.table_name]):
                    if not config.replace_existing:
                        logger.info(f"Table {name} already exists, skipping")
                        continue
                    logger.info(f"Dropping existing table {name}")
                    conn.execute(generator.drop_table_sql(definition.schema_name, definition.table_name))

            logger.info(f"Creating table {name}")
            conn.execute(generator.create_table_from_definition_sql(definition, include_primary_keys=True))

            if config.export_schema_dir:
                export_table_definition_yaml(definition, config.export_schema_dir)
            if config.verify and not definition.is_temporary:
                verify_table(conn, engine, definition)
                logger.info(f"Table {name} verified")
    finally:
        conn.close()


def _render(args: argparse.Namespace) -> str:
    engine = get_engine(args.engine)
    generator = engine.generator_class()
    definition = load_table_definition_yaml(args.definition, engine)
    if args.statement == "create":
        return generator.create_table_from_definition_sql(definition, include_primary_keys=not args.no_primary_keys)
    if args.statement == "drop":
        return generator.drop_table_sql(definition.schema_name, definition.table_name)
    if args.statement == "truncate":
        return generator.truncate_table_sql(definition.schema_name, definition.table_name)
    if not args.new_name:
        raise ValueError("rename needs --new-name")
    return generator.rename_table_sql(definition.schema_name, definition.table_name, args.new_name)


def _infer(args: argparse.Namespace) -> str:
    engine = get_engine(args.engine)
    columns = infer_columns_csv(args.csv, engine, sample_rows=args.sample_rows, generic=args.generic)
    definition = TableDefinition(args.schema, args.table, False, columns)
    return engine.generator_class().create_table_from_definition_sql(definition)


def _describe(args: argparse.Namespace) -> str:
    config = Config(args.config)
    engine = get_engine(config.engine)
    schema = args.schema or config.target_schema
    conn = create_connection(engine.name, config.settings)
    try:
        columns = engine.table_reflection_class(conn, schema, args.table).get_columns_definitions()
    finally:
        conn.close()
    headers = ["name", "type", "length", "nullable", "default"]
    rows = [[column.to_dict().get(key) for key in headers] for column in columns]
    return tabulate(rows, headers=headers, tablefmt="grid")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="warehouse-ddl", description="Render and apply warehouse table DDL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("run", help="Create the tables described by a config file")
    run.add_argument("--config", default="config.yaml")

    render = subparsers.add_parser("render", help="Print DDL for a YAML table definition")
    render.add_argument("--engine", required=True, choices=sorted(ENGINES))
    render.add_argument("--definition", required=True)
    render.add_argument("--statement", default="create", choices=["create", "drop", "truncate", "rename"])
    render.add_argument("--new-name")
    render.add_argument("--no-primary-keys", action="store_true")

    infer = subparsers.add_parser("infer", help="Print CREATE TABLE inferred from a CSV sample")
    infer.add_argument("--engine", required=True, choices=sorted(ENGINES))
    infer.add_argument("--csv", required=True)
    infer.add_argument("--schema", required=True)
    infer.add_argument("--table", required=True)
    infer.add_argument("--sample-rows", type=int, default=1000)
    infer.add_argument("--generic", action="store_true")

    describe = subparsers.add_parser("describe", help="Show the reflected columns of an existing table")
    describe.add_argument("--config", default="config.yaml")
    describe.add_argument("--schema")
    describe.add_argument("--table", required=True)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(Settings().logging)
    try:
        if args.command == "run":
            run_pipeline(args.config)
        elif args.command == "render":
            print(_render(args))
        elif args.command == "infer":
            print(_infer(args))
        else:
            print(_describe(args))
    except (DefinitionError, QueryExecutionError, TableVerificationError,
            ValueError, OSError, yaml.YAMLError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
