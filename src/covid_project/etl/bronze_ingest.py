"""
Bronze registration: materialize the raw deaths and vaccinations feeds.

The raw feeds are an external input. This module only copies already-loaded
pandas DataFrames into bronze tables; values are kept exactly as received.
"""
from __future__ import annotations

import logging
from typing import Dict, List

import duckdb
import pandas as pd

from covid_project.utils.config import (
    SCHEMA_BRONZE,
    RAW_DEATHS_TABLE,
    RAW_VACCINATIONS_TABLE,
)
from covid_project.utils.duck import ensure_schema

log = logging.getLogger(__name__)

# Columns each raw feed must carry (extra columns are kept untouched)
REQUIRED_COLUMNS: Dict[str, List[str]] = {
    RAW_DEATHS_TABLE: [
        "country",
        "date",
        "code",
        "continent",
        "population",
        "new_cases",
        "total_cases",
        "new_deaths",
        "total_deaths",
    ],
    RAW_VACCINATIONS_TABLE: [
        "country",
        "date",
        "new_vaccinations",
        "total_vaccinations",
    ],
}


class LoadError(RuntimeError):
    """Raised when a bronze or silver table cannot be (re)built."""


def _check_columns(table: str, frame: pd.DataFrame) -> None:
    missing = [c for c in REQUIRED_COLUMNS[table] if c not in frame.columns]
    if missing:
        raise LoadError(f"{SCHEMA_BRONZE}.{table} is missing columns: {', '.join(missing)}")


def register_bronze_frame(con: duckdb.DuckDBPyConnection, table: str, frame: pd.DataFrame) -> int:
    """
    Create/replace bronze.<table> from a pandas DataFrame.

    Args:
        con: Open DuckDB connection.
        table: Raw table name ('deaths' or 'vaccinations').
        frame: Raw rows as received from the source feed.

    Returns:
        Number of rows written.
    """
    if table not in REQUIRED_COLUMNS:
        raise KeyError(f"Unknown raw table: {table}")
    _check_columns(table, frame)

    ensure_schema(con, SCHEMA_BRONZE)
    alias = f"_bronze_{table}_df"
    con.register(alias, frame)
    try:
        con.execute(f"CREATE OR REPLACE TABLE {SCHEMA_BRONZE}.{table} AS SELECT * FROM {alias};")
    finally:
        con.unregister(alias)

    n = con.execute(f"SELECT COUNT(*) FROM {SCHEMA_BRONZE}.{table};").fetchone()[0]
    log.info("[bronze] created %s.%s rows=%d", SCHEMA_BRONZE, table, n)
    return n


def register_bronze_frames(
    con: duckdb.DuckDBPyConnection,
    deaths: pd.DataFrame,
    vaccinations: pd.DataFrame,
) -> Dict[str, int]:
    """Register both raw feeds; returns row counts keyed by table name."""
    return {
        RAW_DEATHS_TABLE: register_bronze_frame(con, RAW_DEATHS_TABLE, deaths),
        RAW_VACCINATIONS_TABLE: register_bronze_frame(con, RAW_VACCINATIONS_TABLE, vaccinations),
    }
