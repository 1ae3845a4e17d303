"""
DuckDB helpers: lock-retrying connections and catalog lookups.
"""
from __future__ import annotations

import os
import time

import duckdb

from covid_project.utils.config import DUCKDB_LOCK_RETRIES, DUCKDB_LOCK_WAIT_SECONDS


def connect(
    db_path: str | os.PathLike[str],
    *,
    read_only: bool = False,
    retries: int = DUCKDB_LOCK_RETRIES,
    wait_seconds: float = DUCKDB_LOCK_WAIT_SECONDS,
) -> duckdb.DuckDBPyConnection:
    """
    Connect to DuckDB and retry while another process holds the writer lock.

    Args:
        db_path: DuckDB file path (or ':memory:').
        read_only: Open in read-only mode.
        retries: Number of lock retries (writer lock).
        wait_seconds: Backoff between retries.

    Returns:
        An open DuckDB connection. Callers use fully qualified schema.table names.
    """
    last_exc = None
    for _ in range(max(1, retries)):
        try:
            return duckdb.connect(str(db_path), read_only=read_only)
        except duckdb.IOException as exc:
            last_exc = exc
            if "lock" in str(exc).lower():
                time.sleep(wait_seconds)
                continue
            raise
    raise RuntimeError(f"DuckDB locked: {last_exc}") from last_exc


def ensure_schema(con: duckdb.DuckDBPyConnection, schema: str) -> None:
    con.execute(f"CREATE SCHEMA IF NOT EXISTS {schema};")


def table_exists(con: duckdb.DuckDBPyConnection, schema: str, table: str) -> bool:
    """
    Check if schema.table exists (tables and views both count).

    Returns:
        True if the relation exists.
    """
    row = con.execute(
        """
        SELECT 1
        FROM information_schema.tables
        WHERE table_schema = ?
          AND table_name = ?
        """,
        [schema, table],
    ).fetchone()
    return bool(row)


def table_columns(con: duckdb.DuckDBPyConnection, schema: str, table: str) -> list[str]:
    """Return the column names of schema.table in ordinal order."""
    rows = con.execute(
        """
        SELECT column_name
        FROM information_schema.columns
        WHERE table_schema = ?
          AND table_name = ?
        ORDER BY ordinal_position
        """,
        [schema, table],
    ).fetchall()
    return [r[0] for r in rows]
