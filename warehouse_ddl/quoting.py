"""Identifier and literal quoting shared by the DDL generators and reflection."""

from typing import Iterable

IDENTIFIER_QUOTE = '"'
LITERAL_QUOTE = "'"


def quote_identifier(name: str, quote_char: str = IDENTIFIER_QUOTE) -> str:
    """Quote a single identifier, doubling any embedded quote character."""
    return f"{quote_char}{name.replace(quote_char, quote_char * 2)}{quote_char}"


def quote_identifiers(names: Iterable[str], quote_char: str = IDENTIFIER_QUOTE) -> str:
    """Quote identifiers and join them with a bare comma."""
    return ",".join(quote_identifier(name, quote_char) for name in names)


def quote_qualified(schema_name: str, object_name: str, quote_char: str = IDENTIFIER_QUOTE) -> str:
    return f"{quote_identifier(schema_name, quote_char)}.{quote_identifier(object_name, quote_char)}"


def quote_literal(value: str) -> str:
    """Quote a string literal for use in catalog queries."""
    return f"{LITERAL_QUOTE}{value.replace(LITERAL_QUOTE, LITERAL_QUOTE * 2)}{LITERAL_QUOTE}"
