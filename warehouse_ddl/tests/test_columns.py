import pytest

from warehouse_ddl.columns import ColumnCollection, RedshiftColumn, SnowflakeColumn, TeradataColumn
from warehouse_ddl.datatype import Redshift, Snowflake
from warehouse_ddl.exceptions import InvalidColumnError, InvalidLengthError, InvalidTypeError


@pytest.mark.parametrize("column_class,expected_sql", [
    (SnowflakeColumn, "VARCHAR"),
    (RedshiftColumn, "VARCHAR(65535)"),
    (TeradataColumn, "VARCHAR(32000)"),
])
def test_generic_column(column_class, expected_sql):
    column = column_class.create_generic_column("col1")
    assert column.name == "col1"
    assert column.definition.get_sql_definition() == expected_sql
    assert column.definition.nullable is False
    assert column.definition.default is None


def test_empty_name_rejected():
    with pytest.raises(InvalidColumnError):
        SnowflakeColumn("", Snowflake("VARCHAR"))


def test_definition_of_other_engine_rejected():
    with pytest.raises(InvalidColumnError):
        SnowflakeColumn("id", Redshift("INT"))


def test_column_equality():
    assert SnowflakeColumn("id", Snowflake("INTEGER")) == SnowflakeColumn("id", Snowflake("integer"))
    assert SnowflakeColumn("id", Snowflake("INTEGER")) != SnowflakeColumn("id", Snowflake("VARCHAR"))


def test_to_dict():
    assert RedshiftColumn("id", Redshift("INT", {"nullable": False})).to_dict() == {
        "name": "id", "type": "INT", "length": None, "nullable": False, "default": None, "compression": None,
    }


def test_snowflake_create_from_db():
    column = SnowflakeColumn.create_from_db(
        {"name": "id", "type": "NUMBER(38,0)", "kind": "COLUMN", "null?": "N", "default": None}
    )
    assert column.name == "id"
    assert column.definition.type == "NUMBER"
    assert column.definition.length == "38,0"
    assert column.definition.nullable is False

    column = SnowflakeColumn.create_from_db({"NAME": "name", "TYPE": "VARCHAR(16777216)", "NULL?": "Y"})
    assert column.definition.get_sql_definition() == "VARCHAR(16777216)"
    assert column.definition.nullable is True


def test_snowflake_create_from_db_without_length():
    column = SnowflakeColumn.create_from_db({"name": "flag", "type": "BOOLEAN", "null?": "Y", "default": "TRUE"})
    assert column.definition.length is None
    assert column.definition.default == "TRUE"


@pytest.mark.parametrize("described,error", [
    ("NUMBER(38,x)", InvalidLengthError),
    ("VARCHAR(", InvalidTypeError),
    ("UNKNOWN_TYPE", InvalidTypeError),
    (None, InvalidTypeError),
])
def test_snowflake_create_from_db_invalid(described, error):
    with pytest.raises(error):
        SnowflakeColumn.create_from_db({"name": "c", "type": described, "null?": "Y"})


def test_redshift_create_from_db():
    column = RedshiftColumn.create_from_db({
        "column_name": "amount",
        "data_type": "numeric",
        "numeric_precision": 18,
        "numeric_scale": 2,
        "character_maximum_length": None,
        "is_nullable": "NO",
        "column_default": None,
    })
    assert column.definition.get_sql_definition() == "NUMERIC(18,2)"
    assert column.definition.nullable is False

    column = RedshiftColumn.create_from_db({
        "column_name": "name",
        "data_type": "character varying",
        "character_maximum_length": 255,
        "numeric_precision": None,
        "is_nullable": "YES",
        "column_default": None,
    })
    assert column.definition.get_sql_definition() == "CHARACTER VARYING(255)"
    assert column.definition.nullable is True


def test_redshift_create_from_db_integer_ignores_precision():
    column = RedshiftColumn.create_from_db({
        "column_name": "id",
        "data_type": "integer",
        "numeric_precision": 32,
        "numeric_scale": 0,
        "character_maximum_length": None,
        "is_nullable": "NO",
    })
    assert column.definition.get_sql_definition() == "INTEGER"


def test_redshift_create_from_db_encoding():
    row = {"column_name": "id", "data_type": "bigint", "is_nullable": "NO", "encoding": "az64"}
    assert RedshiftColumn.create_from_db(row).definition.compression == "AZ64"
    row["encoding"] = "none"
    assert RedshiftColumn.create_from_db(row).definition.compression is None


def test_redshift_create_from_db_invalid_length():
    with pytest.raises(InvalidLengthError):
        RedshiftColumn.create_from_db({
            "column_name": "name",
            "data_type": "character varying",
            "character_maximum_length": 70000,
            "is_nullable": "YES",
        })


def test_teradata_create_from_db():
    column = TeradataColumn.create_from_db({
        "ColumnName": "name                ",
        "ColumnType": "CV",
        "ColumnLength": 200,
        "CharType": 2,
        "Nullable": "Y",
        "DefaultValue": None,
    })
    assert column.name == "name"
    assert column.definition.get_sql_definition() == "VARCHAR(100)"

    column = TeradataColumn.create_from_db({
        "ColumnName": "code", "ColumnType": "CF", "ColumnLength": 10, "CharType": 1, "Nullable": "N",
    })
    assert column.definition.get_sql_definition() == "CHAR(10)"
    assert column.definition.nullable is False


def test_teradata_create_from_db_numeric():
    column = TeradataColumn.create_from_db({
        "ColumnName": "price", "ColumnType": "D ", "DecimalTotalDigits": 18, "DecimalFractionalDigits": 2,
        "Nullable": "Y",
    })
    assert column.definition.get_sql_definition() == "DECIMAL(18,2)"

    column = TeradataColumn.create_from_db({
        "ColumnName": "n", "ColumnType": "N", "DecimalTotalDigits": -128, "DecimalFractionalDigits": -128,
        "Nullable": "Y",
    })
    assert column.definition.get_sql_definition() == "NUMBER"


def test_teradata_create_from_db_timestamp():
    row = {"ColumnName": "ts", "ColumnType": "TS", "DecimalFractionalDigits": 6, "Nullable": "Y"}
    assert TeradataColumn.create_from_db(row).definition.get_sql_definition() == "TIMESTAMP(6)"
    row["DecimalFractionalDigits"] = 7
    with pytest.raises(InvalidLengthError):
        TeradataColumn.create_from_db(row)


def test_teradata_create_from_db_unknown_code():
    with pytest.raises(InvalidTypeError):
        TeradataColumn.create_from_db({"ColumnName": "x", "ColumnType": "XX", "Nullable": "Y"})


@pytest.mark.parametrize("row", [
    {"ColumnName": "a", "ColumnType": "CV", "ColumnLength": "abc", "Nullable": "Y"},
    {"ColumnName": "a", "ColumnType": "CV", "Nullable": "Y"},
    {"ColumnName": "a", "ColumnType": "CV", "ColumnLength": 20, "CharType": "unicode", "Nullable": "Y"},
    {"ColumnName": "a", "ColumnType": "BV", "ColumnLength": [10], "Nullable": "Y"},
    {"ColumnName": "a", "ColumnType": "D", "DecimalTotalDigits": "x", "Nullable": "Y"},
    {"ColumnName": "a", "ColumnType": "D", "DecimalTotalDigits": 10, "DecimalFractionalDigits": "two", "Nullable": "Y"},
    {"ColumnName": "a", "ColumnType": "TS", "DecimalFractionalDigits": "six", "Nullable": "Y"},
])
def test_teradata_create_from_db_malformed_row(row):
    with pytest.raises(InvalidLengthError) as e:
        TeradataColumn.create_from_db(row)
    assert e.value.option == "length"


def test_teradata_create_from_db_string_digits():
    column = TeradataColumn.create_from_db({
        "ColumnName": "a", "ColumnType": "CV", "ColumnLength": " 40 ", "CharType": "2", "Nullable": "Y",
    })
    assert column.definition.get_sql_definition() == "VARCHAR(20)"


def test_collection_keeps_order():
    columns = ColumnCollection([
        SnowflakeColumn.create_generic_column("b"),
        SnowflakeColumn.create_generic_column("a"),
        SnowflakeColumn.create_generic_column("c"),
    ])
    assert columns.get_columns_names() == ["b", "a", "c"]
    assert len(columns) == 3
    assert "a" in columns
    assert "d" not in columns
    assert columns.get("c").name == "c"
    with pytest.raises(KeyError):
        columns.get("d")


def test_collection_rejects_duplicates():
    with pytest.raises(InvalidColumnError):
        ColumnCollection([SnowflakeColumn.create_generic_column("a"), SnowflakeColumn.create_generic_column("a")])


def test_collection_rejects_non_columns():
    with pytest.raises(InvalidColumnError):
        ColumnCollection(["a"])


def test_with_column_returns_new_collection():
    columns = ColumnCollection([SnowflakeColumn.create_generic_column("a")])
    extended = columns.with_column(SnowflakeColumn.create_generic_column("b"))
    assert extended.get_columns_names() == ["a", "b"]
    assert columns.get_columns_names() == ["a"]
    with pytest.raises(InvalidColumnError):
        extended.with_column(SnowflakeColumn.create_generic_column("a"))


def test_from_rows():
    columns = ColumnCollection.from_rows(SnowflakeColumn, [
        {"name": "id", "type": "NUMBER(38,0)", "null?": "N"},
        {"name": "name", "type": "VARCHAR(10)", "null?": "Y"},
    ])
    assert columns.get_columns_names() == ["id", "name"]
