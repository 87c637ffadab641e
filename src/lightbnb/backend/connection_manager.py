"""
Database connection management utility with proper resource cleanup and monitoring.
Provides context managers and a connection monitor to prevent connection leaks.
"""

from __future__ import annotations

import contextlib
import logging
import threading
import time
import weakref
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generator, List, Optional

import duckdb
import pandas as pd

from lightbnb.config.settings import Settings


@dataclass
class TrackedConnection:
    """Bookkeeping for one open store connection."""

    db_path: str
    opened_at: float
    thread_id: int
    ref: weakref.ref


class ConnectionMonitor:
    """Tracks open store connections so unclosed ones can be spotted."""

    def __init__(self):
        self._open: dict[int, TrackedConnection] = {}
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def register_connection(self, conn: duckdb.DuckDBPyConnection, db_path: str) -> None:
        with self._lock:
            self._open[id(conn)] = TrackedConnection(
                db_path=db_path,
                opened_at=time.time(),
                thread_id=threading.get_ident(),
                ref=weakref.ref(conn, self._on_collected),
            )
        self._logger.debug(f"Opened connection {id(conn)} to {db_path}")

    def unregister_connection(self, conn: duckdb.DuckDBPyConnection) -> None:
        with self._lock:
            tracked = self._open.pop(id(conn), None)
        if tracked:
            held_for = time.time() - tracked.opened_at
            self._logger.debug(f"Closed connection {id(conn)} to {tracked.db_path} after {held_for:.3f}s")

    def _on_collected(self, ref: weakref.ref) -> None:
        # A connection dropped without close() still gets removed
        with self._lock:
            for conn_id, tracked in list(self._open.items()):
                if tracked.ref is ref:
                    del self._open[conn_id]
                    self._logger.warning(
                        f"Connection {conn_id} to {tracked.db_path} was garbage collected without close()"
                    )
                    break

    def get_active_connections(self) -> dict[int, TrackedConnection]:
        with self._lock:
            return dict(self._open)


_connection_monitor = ConnectionMonitor()


@contextlib.contextmanager
def get_db_connection(
    db_path: Path, read_only: bool = False, logger_obj: logging.Logger | None = None
) -> Generator[duckdb.DuckDBPyConnection, None, None]:
    """
    Context manager for DuckDB connections with proper resource cleanup.

    DuckDB refuses to open the same file with different configurations inside
    one process, so callers sharing a database should agree on ``read_only``.

    Args:
        db_path: Path to the database file
        read_only: Whether to open in read-only mode
        logger_obj: Optional logger for debug messages

    Yields:
        DuckDB connection that will be automatically closed

    Raises:
        duckdb.Error: If the connection cannot be opened

    Example:
        with get_db_connection(db_path) as conn:
            rows = execute_query(conn, "SELECT * FROM users WHERE id = $1", params=[1])
    """
    if logger_obj is None:
        logger_obj = logging.getLogger(__name__)

    if not db_path.exists():
        if read_only:
            logger_obj.warning(f"Database {db_path} does not exist and cannot be opened read-only.")
        else:
            logger_obj.info(f"Database {db_path} does not exist. It will be created.")
            db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = None
    try:
        conn = duckdb.connect(database=db_path.as_posix(), read_only=read_only)
        _connection_monitor.register_connection(conn, str(db_path))
        logger_obj.debug(
            f"Successfully connected to DuckDB at {db_path} (read_only={read_only})"
        )
    except duckdb.Error as e:
        logger_obj.error(
            f"Error connecting to database at {db_path}: {e}", exc_info=True
        )
        raise

    try:
        yield conn
    finally:
        _connection_monitor.unregister_connection(conn)
        conn.close()
        logger_obj.debug(f"Connection to {db_path} closed successfully")


def execute_query(
    conn: duckdb.DuckDBPyConnection,
    query: str,
    logger_obj: logging.Logger | None = None,
    params: Optional[List[Any]] = None,
) -> pd.DataFrame:
    """
    Execute a query and return its result set as a DataFrame.

    Failures are logged together with the query and parameters and then
    re-raised unchanged; no retry and no empty-result fallback.

    Args:
        conn: DuckDB connection
        query: SQL query to execute, using $1, $2, ... placeholders
        logger_obj: Optional logger for debug messages
        params: Optional list of positional parameters for the query

    Returns:
        Query result dataframe
    """
    if logger_obj is None:
        logger_obj = logging.getLogger(__name__)

    preview = query[:Settings.QUERY_LOG_PREVIEW_CHARS]
    try:
        if params:
            logger_obj.debug(f"Executing query: {preview}... with params: {params}")
            return conn.execute(query, params).df()
        else:
            logger_obj.debug(f"Executing query: {preview}...")
            return conn.execute(query).df()
    except duckdb.Error as e:
        query_info = f"Query: {query}"
        if params:
            query_info += f"\nParams: {params}"
        logger_obj.error(f"Query execution error: {e}\n{query_info}", exc_info=True)
        raise


def get_connection_stats() -> dict[str, Any]:
    """Get current connection monitoring statistics."""
    active_conns = _connection_monitor.get_active_connections()
    return {"active_count": len(active_conns), "connections": active_conns}

