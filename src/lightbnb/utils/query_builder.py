"""
Positional query building utilities with parameter binding.

This module provides a builder for SQL statements that use numbered
placeholders (``$1, $2, ...``). Every value is pushed through
``add_parameter`` which returns the placeholder for the value it just stored,
so a fragment can never reference the wrong position.
"""

from typing import Any, List, Optional
from enum import Enum
import re


class FilterOperator(Enum):
    """Supported filter operators."""
    EQUALS = "="
    LIKE = "LIKE"
    GREATER_EQUAL = ">="
    LESS_EQUAL = "<="


class PositionalQueryBuilder:
    """Accumulates positional parameters together with the clauses using them."""

    def __init__(self):
        self.params: List[Any] = []

    def add_parameter(self, value: Any) -> str:
        """
        Push a parameter and return its placeholder.

        Args:
            value: The parameter value

        Returns:
            Placeholder string matching the value's position (e.g., "$3")
        """
        self.params.append(value)
        return f"${len(self.params)}"

    def build_filter_condition(
        self,
        column: str,
        operator: FilterOperator,
        value: Any = None
    ) -> str:
        """
        Build a filter condition with parameter binding.

        Args:
            column: Column name or aggregate expression
            operator: Filter operator
            value: Value bound to the placeholder

        Returns:
            SQL condition string with parameter placeholders
        """
        if value is None:
            raise ValueError(f"Value required for {operator.value} operator")

        placeholder = self.add_parameter(value)
        return f"{column} {operator.value} {placeholder}"

    def build_query(
        self,
        select_clause: str,
        from_clause: str,
        where_conditions: Optional[List[str]] = None,
        group_by: Optional[str] = None,
        having_conditions: Optional[List[str]] = None,
        order_by: Optional[str] = None,
        limit: Optional[int] = None
    ) -> str:
        """
        Assemble a complete SQL statement.

        Conditions must already have been built against this builder so their
        placeholders are numbered before the LIMIT parameter is pushed.

        Args:
            select_clause: SELECT clause
            from_clause: FROM clause with JOINs
            where_conditions: WHERE conditions, joined with AND
            group_by: GROUP BY clause
            having_conditions: HAVING conditions, joined with AND
            order_by: ORDER BY clause
            limit: LIMIT value, bound as the final parameter

        Returns:
            Complete SQL query string
        """
        query_parts = [
            f"SELECT {select_clause}",
            f"FROM {from_clause}"
        ]

        if where_conditions:
            query_parts.append(f"WHERE {' AND '.join(where_conditions)}")

        if group_by:
            query_parts.append(f"GROUP BY {group_by}")

        if having_conditions:
            query_parts.append(f"HAVING {' AND '.join(having_conditions)}")

        if order_by:
            query_parts.append(f"ORDER BY {order_by}")

        if limit is not None:
            query_parts.append(f"LIMIT {self.add_parameter(limit)}")

        return "\n".join(query_parts)

    def build_insert(self, table_name: str, record: dict) -> str:
        """
        Build an INSERT ... RETURNING * statement for a column/value mapping.

        Column order follows the mapping's iteration order.
        """
        safe_table_name = validate_column_name(table_name)
        columns = [validate_column_name(column) for column in record]
        placeholders = [self.add_parameter(value) for value in record.values()]

        return (
            f"INSERT INTO {safe_table_name} ({', '.join(columns)})\n"
            f"VALUES ({', '.join(placeholders)})\n"
            "RETURNING *"
        )

    def get_parameters(self) -> List[Any]:
        """Get all accumulated parameters in placeholder order."""
        return list(self.params)


def validate_column_name(column_name: str) -> str:
    """
    Validate a column or table name to prevent injection.

    Args:
        column_name: Column name to validate

    Returns:
        The unchanged column name

    Raises:
        ValueError: If column name contains invalid characters
    """
    # Allow alphanumeric, underscore and dot for table prefixes
    if not re.match(r'^[a-zA-Z_][a-zA-Z0-9_.]*$', column_name):
        raise ValueError(f"Invalid column name: {column_name}")

    return column_name
