"""
Error taxonomy for datatype, column and table definitions.

Every validator raises one of these and never returns a partially valid
object. Only the schema existence probe in ``reflection`` swallows a
``QueryExecutionError``.
"""

from typing import Any, Optional


class DefinitionError(Exception):
    """Base exception for invalid definitions."""

    error_code = "INVALID_DEFINITION"

    def __init__(self, message: str, option: Optional[str] = None, value: Any = None):
        super().__init__(message)
        self.message = message
        self.option = option
        self.value = value


class InvalidTypeError(DefinitionError):
    """Type name is not supported by the engine."""

    error_code = "INVALID_TYPE"


class InvalidLengthError(DefinitionError):
    """Length, precision or scale does not fit the type's grammar."""

    error_code = "INVALID_LENGTH"


class InvalidCompressionError(DefinitionError):
    """Compression codec is unknown or incompatible with the type."""

    error_code = "INVALID_COMPRESSION"


class InvalidOptionError(DefinitionError):
    """Option key is not recognized by the engine."""

    error_code = "INVALID_OPTION"


class InvalidColumnError(DefinitionError):
    """Column name is empty, duplicated, or belongs to another engine."""

    error_code = "INVALID_COLUMN"


class InvalidPrimaryKeyError(DefinitionError):
    """Primary key references a column that is not defined."""

    error_code = "INVALID_PRIMARY_KEY"


class QueryExecutionError(Exception):
    """Raised when the backend fails to execute a statement."""

    def __init__(self, message: str, sql: Optional[str] = None, original: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.sql = sql
        self.original = original


class TableVerificationError(Exception):
    """Reflected table does not match the definition it was created from."""

    def __init__(self, message: str, expected: Any = None, actual: Any = None):
        super().__init__(message)
        self.message = message
        self.expected = expected
        self.actual = actual
