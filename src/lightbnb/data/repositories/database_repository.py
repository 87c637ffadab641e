from __future__ import annotations

"""Database repository providing common database operations."""

from pathlib import Path
from typing import Any, Dict, List, Optional
import logging
import time

import pandas as pd

from lightbnb.backend.connection_manager import execute_query, get_db_connection
from lightbnb.config.database import DatabaseConfig
from lightbnb.config.settings import Settings


class DatabaseRepository:
    """Encapsulates DuckDB access patterns."""

    def __init__(self, db_path: Optional[Path] = None, logger_obj: Optional[logging.Logger] = None) -> None:
        self.db_path = db_path or Settings.get_db_path()
        self.logger = logger_obj or logging.getLogger(__name__)

    # ----------------------- Query Execution -----------------------
    def execute_query(self, query: str, params: Optional[List[Any]] = None) -> pd.DataFrame:
        """Execute a parameterized SQL statement with timing."""
        with get_db_connection(self.db_path, read_only=False, logger_obj=self.logger) as conn:
            start = time.perf_counter()
            result = execute_query(conn, query, self.logger, params)
            duration = time.perf_counter() - start
            self.logger.info("Query executed in %.3f sec (%d rows)", duration, len(result))
            return result

    def fetch_all(self, query: str, params: Optional[List[Any]] = None) -> List[Dict[str, Any]]:
        """Execute a statement and return every row as a dict."""
        return self.to_records(self.execute_query(query, params))

    def fetch_one(self, query: str, params: Optional[List[Any]] = None) -> Optional[Dict[str, Any]]:
        """Execute a statement and return the first row, or None when empty."""
        records = self.fetch_all(query, params)
        return records[0] if records else None

    @staticmethod
    def to_records(df: pd.DataFrame) -> List[Dict[str, Any]]:
        """Convert a result frame to plain dicts, mapping missing values to None."""
        if df.empty:
            return []
        return df.astype(object).where(pd.notna(df), None).to_dict(orient="records")

    # --------------------------- Schema ---------------------------
    def create_schema(self) -> None:
        """Create the LightBnB tables and id sequences if they don't exist."""
        with get_db_connection(self.db_path, read_only=False, logger_obj=self.logger) as conn:
            for statement in DatabaseConfig.SCHEMA_DDL:
                conn.execute(statement)
        self.logger.info("Ensured schema for tables: %s", ", ".join(DatabaseConfig.TABLES))

    def table_exists(self, table_name: str) -> bool:
        """Check if a table exists in the database."""
        sql = "SELECT COUNT(*) FROM duckdb_tables() WHERE table_name = $1"
        with get_db_connection(self.db_path, read_only=False, logger_obj=self.logger) as conn:
            val = conn.execute(sql, [table_name]).fetchone()[0]
            return val > 0

    def get_table_count(self, table_name: str) -> int:
        """Return the number of rows in a table."""
        if table_name not in DatabaseConfig.TABLES:
            raise ValueError(f"Invalid table name: {table_name}")
        result = self.execute_query(f'SELECT COUNT(*) AS row_count FROM "{table_name}"')
        if not result.empty:
            return int(result.iloc[0, 0])
        return 0
