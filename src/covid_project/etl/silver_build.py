"""
Silver build: project bronze.deaths / bronze.vaccinations into keyed tables.

silver.base  <- bronze.deaths        (case/population facts)
silver.dths  <- bronze.deaths        (death counts)
silver.vacs  <- bronze.vaccinations  (vaccination counts)

Strict projection: columns are selected, renamed and cast to the declared
type; values are never otherwise transformed. Numeric columns are DOUBLE so
every downstream division is floating point.

`date` is stored as DATE (day granularity). Timestamps in the raw feed are
truncated to their day by the cast, so two readings for one country on the
same day collide on the (country, date) key and abort the load.
"""
from __future__ import annotations

import logging
from typing import Dict, List

import duckdb

from covid_project.etl.bronze_ingest import LoadError
from covid_project.schemas import (
    CONTINENT,
    COUNTRY,
    DATE,
    POPULATION,
    ColumnSpec,
    TableSpec,
    count,
)
from covid_project.utils.config import (
    DUCKDB_PATH,
    SCHEMA_BRONZE,
    SCHEMA_SILVER,
    RAW_DEATHS_TABLE,
    RAW_VACCINATIONS_TABLE,
    BASE_TABLE,
    DEATHS_TABLE,
    VACCINATIONS_TABLE,
)
from covid_project.utils.duck import connect, ensure_schema, table_columns, table_exists

log = logging.getLogger(__name__)

BASE = TableSpec(
    name=BASE_TABLE,
    source_table=RAW_DEATHS_TABLE,
    columns=[
        COUNTRY,
        DATE,
        ColumnSpec(name="code", sql_type="VARCHAR", semantic="text"),
        CONTINENT,
        POPULATION,
        count("new_cases"),
        count("total_cases"),
    ],
)

DTHS = TableSpec(
    name=DEATHS_TABLE,
    source_table=RAW_DEATHS_TABLE,
    columns=[
        COUNTRY,
        DATE,
        count("new_dths", source="new_deaths"),
        count("total_dths", source="total_deaths"),
    ],
)

VACS = TableSpec(
    name=VACCINATIONS_TABLE,
    source_table=RAW_VACCINATIONS_TABLE,
    columns=[
        COUNTRY,
        DATE,
        count("new_vacs", source="new_vaccinations"),
        count("total_vacs", source="total_vaccinations"),
    ],
)

# Rebuild order
SILVER_TABLES: List[TableSpec] = [BASE, DTHS, VACS]


def create_table_sql(spec: TableSpec, table_name: str) -> str:
    """Render CREATE TABLE DDL (with primary key) for a silver table."""
    cols = ",\n  ".join(f"{c.name} {c.sql_type}" for c in spec.columns)
    key = ", ".join(spec.primary_key)
    return f"CREATE TABLE {SCHEMA_SILVER}.{table_name} (\n  {cols},\n  PRIMARY KEY ({key})\n);"


def insert_sql(spec: TableSpec, table_name: str) -> str:
    """Render the INSERT ... SELECT projection from bronze."""
    select = ",\n  ".join(
        f"CAST({c.source_name} AS {c.sql_type}) AS {c.name}" for c in spec.columns
    )
    return (
        f"INSERT INTO {SCHEMA_SILVER}.{table_name}\n"
        f"SELECT\n  {select}\n"
        f"FROM {SCHEMA_BRONZE}.{spec.source_table};"
    )


def build_silver_table(con: duckdb.DuckDBPyConnection, spec: TableSpec) -> int:
    """
    Create/replace one silver table from its bronze source.

    The table is loaded into <name>_tmp first and swapped in only once the
    load succeeded, so a duplicate key leaves the previous table in place.

    Returns:
        Number of rows loaded.

    Raises:
        LoadError: If the bronze source or one of its columns is missing, or a
            (country, date) key is duplicated / null.
    """
    if not table_exists(con, SCHEMA_BRONZE, spec.source_table):
        raise LoadError(f"Missing source table {SCHEMA_BRONZE}.{spec.source_table}")
    available = set(table_columns(con, SCHEMA_BRONZE, spec.source_table))
    missing = [c for c in spec.source_columns if c not in available]
    if missing:
        raise LoadError(
            f"{SCHEMA_BRONZE}.{spec.source_table} is missing columns: {', '.join(missing)}"
        )

    ensure_schema(con, SCHEMA_SILVER)
    tmp = f"{spec.name}_tmp"
    con.execute(f"DROP TABLE IF EXISTS {SCHEMA_SILVER}.{tmp};")
    con.execute(create_table_sql(spec, tmp))
    try:
        con.execute(insert_sql(spec, tmp))
    except duckdb.ConstraintException as exc:
        con.execute(f"DROP TABLE IF EXISTS {SCHEMA_SILVER}.{tmp};")
        raise LoadError(
            f"Duplicate or null (country, date) key while loading {SCHEMA_SILVER}.{spec.name}: {exc}"
        ) from exc

    con.execute(f"DROP TABLE IF EXISTS {SCHEMA_SILVER}.{spec.name};")
    con.execute(f"ALTER TABLE {SCHEMA_SILVER}.{tmp} RENAME TO {spec.name};")
    n = con.execute(f"SELECT COUNT(*) FROM {SCHEMA_SILVER}.{spec.name};").fetchone()[0]
    log.info("[silver] created %s.%s rows=%d", SCHEMA_SILVER, spec.name, n)
    return n


def build_silver_tables(con: duckdb.DuckDBPyConnection) -> Dict[str, int]:
    """
    Rebuild silver.base, silver.dths and silver.vacs in that order.

    Not transactional across tables: if dths fails, base stays rebuilt.

    Returns:
        Row counts keyed by silver table name.
    """
    return {spec.name: build_silver_table(con, spec) for spec in SILVER_TABLES}


def build_silver(*, db_path=DUCKDB_PATH) -> Dict[str, int]:
    """Open the DuckDB file and rebuild every silver table."""
    with connect(db_path, read_only=False) as con:
        return build_silver_tables(con)
