"""
End-to-end pipeline: bronze frames -> silver tables -> gold views.

run_pipeline() is a pure function over its inputs: it works on a private
in-memory DuckDB and returns every gold view as a DataFrame. rebuild() runs
the silver + gold stages against the on-disk database, where bronze tables
are expected to exist already.
"""
from __future__ import annotations

import logging
import time
from typing import Dict, Optional

import duckdb
import pandas as pd

from covid_project.etl.bronze_ingest import register_bronze_frames
from covid_project.etl.silver_build import build_silver_tables
from covid_project.gold.registry import VIEWS, build_gold_views
from covid_project.gold.sql_client import fetch_view
from covid_project.utils.config import DUCKDB_PATH
from covid_project.utils.duck import connect

log = logging.getLogger(__name__)


def run_pipeline(
    deaths: pd.DataFrame,
    vaccinations: pd.DataFrame,
    *,
    views: Optional[list[str]] = None,
) -> Dict[str, pd.DataFrame]:
    """
    Compute the gold views from raw frames, without touching any file.

    Parameters
    ----------
    deaths : pd.DataFrame
        Raw deaths feed (country, date, code, continent, population, new_cases,
        total_cases, new_deaths, total_deaths).
    vaccinations : pd.DataFrame
        Raw vaccinations feed (country, date, new_vaccinations, total_vaccinations).
    views : Optional[list[str]]
        Subset of view names to return. Defaults to all registered views.

    Returns
    -------
    Dict[str, pd.DataFrame]
        View name -> rows in the view's default order.

    Raises
    ------
    LoadError
        If a raw feed lacks required columns or repeats a (country, date) key.
    """
    t0 = time.perf_counter()
    names = list(views) if views is not None else list(VIEWS)
    with duckdb.connect(":memory:") as con:
        register_bronze_frames(con, deaths, vaccinations)
        build_silver_tables(con)
        build_gold_views(con)
        out = {name: fetch_view(con, name) for name in names}
    log.info(
        "pipeline_ms=%d views=%d",
        int((time.perf_counter() - t0) * 1000),
        len(out),
    )
    return out


def rebuild(*, db_path=DUCKDB_PATH) -> Dict[str, int]:
    """
    Rebuild silver tables and gold views in the DuckDB file.

    Returns:
        Silver row counts keyed by table name.
    """
    with connect(db_path, read_only=False) as con:
        counts = build_silver_tables(con)
        build_gold_views(con)
    return counts
