"""Error categorization for store operations."""

from enum import Enum

import duckdb


class ErrorCategory(Enum):
    """Categories for different types of store errors."""
    CONSTRAINT = "constraint"
    CATALOG = "catalog"
    CONVERSION = "conversion"
    CONNECTION = "connection"
    SYNTAX = "syntax"
    DATA = "data"
    UNKNOWN = "unknown"


class UnknownColumnError(ValueError):
    """Raised when a record names a column outside the allowed set."""

    def __init__(self, table_name: str, columns):
        self.table_name = table_name
        self.columns = list(columns)
        super().__init__(f"Unknown column(s) for {table_name}: {', '.join(self.columns)}")


def categorize_error(exception: Exception) -> ErrorCategory:
    """Categorize a store exception so callers can map it to a response."""
    if isinstance(exception, duckdb.ConstraintException):
        return ErrorCategory.CONSTRAINT
    elif isinstance(exception, (duckdb.CatalogException, duckdb.BinderException)):
        return ErrorCategory.CATALOG
    elif isinstance(exception, duckdb.ConversionException):
        return ErrorCategory.CONVERSION
    elif isinstance(exception, (duckdb.ConnectionException, duckdb.IOException)):
        return ErrorCategory.CONNECTION
    elif isinstance(exception, duckdb.ParserException):
        return ErrorCategory.SYNTAX
    elif isinstance(exception, (duckdb.DataError, duckdb.InvalidInputException, ValueError)):
        return ErrorCategory.DATA
    else:
        return ErrorCategory.UNKNOWN
