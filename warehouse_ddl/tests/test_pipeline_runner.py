import logging

import pytest
import yaml

from warehouse_ddl.connection import SnowflakeConnection
from warehouse_ddl.exceptions import TableVerificationError
from warehouse_ddl.pipeline_runner import main, run_pipeline


commands = []


class DummyConn(SnowflakeConnection):
    existing_tables = []
    described_columns = ["id", "name"]
    closed = False

    def __init__(self, *args, **kwargs):
        pass

    def execute(self, sql):
        commands.append(sql)
        if sql.startswith("SHOW TABLES IN SCHEMA"):
            return [{"name": name} for name in self.existing_tables]
        if sql.startswith("DESC TABLE"):
            return [
                {"name": name.upper(), "type": "VARCHAR(100)", "kind": "COLUMN", "null?": "Y"}
                for name in self.described_columns
            ]
        if sql.startswith("SHOW PRIMARY KEYS"):
            return [{"column_name": "ID", "key_sequence": 1}]
        return []

    def close(self):
        DummyConn.closed = True


@pytest.fixture(autouse=True)
def dummy_conn(monkeypatch):
    commands.clear()
    DummyConn.existing_tables = []
    DummyConn.described_columns = ["id", "name"]
    DummyConn.closed = False
    monkeypatch.setattr("warehouse_ddl.pipeline_runner.create_connection", lambda engine, settings: DummyConn())
    # main() reconfigures the root logger
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", list(root.handlers))


def _write_config(tmp_path, **overrides):
    config = {
        "engine": "snowflake",
        "target_schema": "PUBLIC",
        "export_schema_dir": str(tmp_path / "schemas"),
        "tables": [
            {
                "table_name": "CUSTOMERS",
                "columns": [
                    {"name": "id", "type": "VARCHAR", "length": 100, "nullable": False},
                    {"name": "name", "type": "VARCHAR", "length": 100},
                ],
                "primary_keys": ["id"],
            }
        ],
    }
    config.update(overrides)
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(yaml.safe_dump(config))
    return cfg_file


def test_run_pipeline(tmp_path):
    run_pipeline(str(_write_config(tmp_path)))
    assert commands[0] == 'SHOW TABLES IN SCHEMA "PUBLIC"'
    assert commands[1] == (
        'CREATE TABLE "PUBLIC"."CUSTOMERS"\n(\n'
        '"id" VARCHAR(100) NOT NULL,\n'
        '"name" VARCHAR(100),\n'
        'PRIMARY KEY ("id")\n);'
    )
    assert 'DESC TABLE "PUBLIC"."CUSTOMERS"' in commands
    assert (tmp_path / "schemas" / "customers_schema.yaml").exists()
    assert DummyConn.closed


def test_run_pipeline_table_files(tmp_path):
    (tmp_path / "customers.yaml").write_text(yaml.safe_dump({
        "schema_name": "CRM",
        "table_name": "CUSTOMERS",
        "columns": [{"name": "id", "type": "VARCHAR", "length": 100}, {"name": "name", "type": "VARCHAR"}],
    }))
    run_pipeline(str(_write_config(tmp_path, tables=["customers.yaml"], verify=False)))
    assert commands == [
        'SHOW TABLES IN SCHEMA "CRM"',
        'CREATE TABLE "CRM"."CUSTOMERS"\n(\n"id" VARCHAR(100),\n"name" VARCHAR\n);',
    ]


def test_existing_table_is_skipped(tmp_path):
    DummyConn.existing_tables = ["CUSTOMERS"]
    run_pipeline(str(_write_config(tmp_path)))
    assert not any(c.startswith("CREATE") for c in commands)
    assert not (tmp_path / "schemas" / "customers_schema.yaml").exists()


def test_existing_table_is_replaced(tmp_path):
    DummyConn.existing_tables = ["CUSTOMERS"]
    run_pipeline(str(_write_config(tmp_path, replace_existing=True)))
    assert commands[1] == 'DROP TABLE "PUBLIC"."CUSTOMERS"'
    assert commands[2].startswith('CREATE TABLE "PUBLIC"."CUSTOMERS"')


def test_verification_failure(tmp_path):
    DummyConn.described_columns = ["id"]
    with pytest.raises(TableVerificationError) as e:
        run_pipeline(str(_write_config(tmp_path)))
    assert e.value.expected == ["id", "name"]
    assert e.value.actual == ["id"]
    assert DummyConn.closed


def test_render_command(tmp_path, capsys):
    definition = tmp_path / "orders.yaml"
    definition.write_text(yaml.safe_dump({
        "schema_name": "s",
        "table_name": "t",
        "columns": [{"name": "col1", "type": "VARCHAR", "nullable": False}],
        "primary_keys": ["col1"],
    }))
    assert main(["render", "--engine", "snowflake", "--definition", str(definition)]) == 0
    assert capsys.readouterr().out == 'CREATE TABLE "s"."t"\n(\n"col1" VARCHAR NOT NULL,\nPRIMARY KEY ("col1")\n);\n'

    assert main(["render", "--engine", "teradata", "--definition", str(definition), "--statement", "truncate"]) == 0
    assert capsys.readouterr().out == 'DELETE FROM "s"."t" ALL\n'

    assert main(["render", "--engine", "snowflake", "--definition", str(definition), "--statement", "rename"]) == 1


def test_render_command_invalid_definition(tmp_path):
    definition = tmp_path / "bad.yaml"
    definition.write_text(yaml.safe_dump({
        "schema_name": "s",
        "table_name": "t",
        "columns": [{"name": "col1", "type": "VARCHAR", "compression": "ZSTD"}],
    }))
    assert main(["render", "--engine", "snowflake", "--definition", str(definition)]) == 1


def test_infer_command(tmp_path, capsys):
    csv = tmp_path / "dummy.csv"
    csv.write_text("id,name\n1,alice\n2,bob\n")
    assert main([
        "infer", "--engine", "redshift", "--csv", str(csv), "--schema", "s", "--table", "t", "--generic",
    ]) == 0
    assert capsys.readouterr().out == (
        'CREATE TABLE "s"."t"\n(\n"id" VARCHAR(65535) NOT NULL,\n"name" VARCHAR(65535) NOT NULL\n);\n'
    )


def test_describe_command(tmp_path, capsys):
    assert main(["describe", "--config", str(_write_config(tmp_path)), "--table", "CUSTOMERS"]) == 0
    out = capsys.readouterr().out
    assert "VARCHAR" in out
    assert "ID" in out and "NAME" in out
    assert commands == ['DESC TABLE "PUBLIC"."CUSTOMERS"']


def test_render_command_missing_definition(tmp_path):
    assert main(["render", "--engine", "snowflake", "--definition", str(tmp_path / "missing.yaml")]) == 1


def test_render_command_malformed_yaml(tmp_path):
    definition = tmp_path / "broken.yaml"
    definition.write_text("columns: [unclosed\n")
    assert main(["render", "--engine", "snowflake", "--definition", str(definition)]) == 1


def test_infer_command_missing_csv(tmp_path):
    assert main(["infer", "--engine", "redshift", "--csv", str(tmp_path / "missing.csv"),
                 "--schema", "s", "--table", "t"]) == 1
