import pytest

from warehouse_ddl.schema_inference import infer_columns_csv


CSV = (
    "id,name,price,active,created\n"
    "1,alice,1.5,true,2024-01-01\n"
    "2,bob,2.25,false,2024-01-02\n"
    "3,carol,,true,2024-01-03\n"
)


def _write_csv(tmp_path):
    path = tmp_path / "dummy.csv"
    path.write_text(CSV)
    return path


def test_infer_columns_csv(tmp_path):
    columns = infer_columns_csv(_write_csv(tmp_path), "snowflake")
    assert columns.get_columns_names() == ["id", "name", "price", "active", "created"]
    assert [column.definition.get_sql_definition() for column in columns] == [
        "INTEGER", "VARCHAR(5)", "FLOAT", "BOOLEAN", "TIMESTAMP_NTZ",
    ]
    assert columns.get("id").definition.nullable is False
    assert columns.get("price").definition.nullable is True


def test_infer_columns_csv_uses_engine_types(tmp_path):
    columns = infer_columns_csv(_write_csv(tmp_path), "teradata")
    assert columns.get("id").definition.type == "BIGINT"
    assert columns.get("active").definition.type == "BYTEINT"
    assert columns.get("name").definition.get_sql_definition() == "VARCHAR(5)"


def test_infer_generic_columns(tmp_path):
    columns = infer_columns_csv(_write_csv(tmp_path), "redshift", generic=True)
    assert len(columns) == 5
    assert {column.definition.get_sql_definition() for column in columns} == {"VARCHAR(65535)"}
    assert all(not column.definition.nullable for column in columns)


@pytest.mark.parametrize("engine,expected", [
    ("redshift", "VARCHAR(65535)"),
    ("teradata", "VARCHAR(64000)"),
    ("snowflake", "VARCHAR(70000)"),
])
def test_infer_long_values_clamped_to_engine_maximum(tmp_path, engine, expected):
    path = tmp_path / "notes.csv"
    path.write_text("id,note\n1," + "x" * 70000 + "\n2,short\n")
    columns = infer_columns_csv(path, engine)
    assert columns.get("note").definition.get_sql_definition() == expected


@pytest.mark.parametrize("engine,expected", [
    ("redshift", "VARCHAR(6)"),
    ("snowflake", "VARCHAR(5)"),
    ("teradata", "VARCHAR(5)"),
])
def test_infer_multibyte_lengths(tmp_path, engine, expected):
    path = tmp_path / "cities.csv"
    path.write_text("city\nhéllo\nwörld\nabc\n", encoding="utf-8")
    columns = infer_columns_csv(path, engine)
    assert columns.get("city").definition.get_sql_definition() == expected
