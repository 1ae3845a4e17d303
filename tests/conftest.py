"""Shared fixtures: a tiny deaths/vaccinations feed and DuckDB connections."""
from __future__ import annotations

import duckdb
import pandas as pd
import pytest

NA = pd.NA

D1, D2, D3 = "2021-01-01", "2021-01-02", "2021-01-03"

DEATHS_COLUMNS = [
    "country", "date", "code", "continent", "population",
    "new_cases", "total_cases", "new_deaths", "total_deaths",
]
VACCINATIONS_COLUMNS = ["country", "date", "new_vaccinations", "total_vaccinations"]

# Alpha: no report on day 1. Beta: flat cases on days 2-3 and an over-reported
# new_cases on day 3. Gamma: zero cases. World / European Union: pseudo-rows.
DEATHS_ROWS = [
    ("Alpha", D1, "ALP", "Europe", 1000, NA, NA, NA, NA),
    ("Alpha", D2, "ALP", "Europe", 1000, 100, 100, 5, 5),
    ("Alpha", D3, "ALP", "Europe", 1000, 100, 200, 5, 10),
    ("Beta", D1, "BET", "Asia", 500, 50, 50, 1, 1),
    ("Beta", D2, "BET", "Asia", 500, 30, 80, 1, 2),
    ("Beta", D3, "BET", "Asia", 500, 5, 80, 6, 8),
    ("Gamma", D1, "GAM", "Europe", 2000, 0, 0, 0, 0),
    ("Gamma", D2, "GAM", "Europe", 2000, 0, 0, 0, 0),
    ("Gamma", D3, "GAM", "Europe", 2000, 0, 0, 0, 0),
    ("World", D1, "OWID_WRL", None, 3500, 50, 50, 1, 1),
    ("World", D2, "OWID_WRL", None, 3500, 130, 180, 6, 7),
    ("World", D3, "OWID_WRL", None, 3500, 105, 280, 11, 18),
    ("European Union", D3, "OWID_EUN", None, 3000, NA, NA, NA, NA),
]

VACCINATION_ROWS = [
    ("Alpha", D1, 100, 100),
    ("Alpha", D2, NA, NA),
    ("Alpha", D3, 50, 150),
    ("Alpha", "2021-01-04", 70, 220),  # no matching deaths row
    ("Beta", D1, 300, 300),
    ("Beta", D2, 300, 600),
    ("Beta", D3, NA, 600),
    ("Gamma", D1, NA, NA),
    ("World", D1, 400, 400),
]


def make_frame(rows, columns) -> pd.DataFrame:
    """Build a raw feed frame with nullable numeric columns."""
    df = pd.DataFrame(rows, columns=columns)
    numeric = [c for c in columns if c not in ("country", "date", "code", "continent")]
    return df.astype({c: "Float64" for c in numeric})


def make_deaths(rows=DEATHS_ROWS) -> pd.DataFrame:
    return make_frame(rows, DEATHS_COLUMNS)


def make_vaccinations(rows=VACCINATION_ROWS) -> pd.DataFrame:
    return make_frame(rows, VACCINATIONS_COLUMNS)


def iso_dates(series) -> list[str]:
    return pd.to_datetime(series).dt.strftime("%Y-%m-%d").tolist()


@pytest.fixture
def deaths() -> pd.DataFrame:
    return make_deaths()


@pytest.fixture
def vaccinations() -> pd.DataFrame:
    return make_vaccinations()


@pytest.fixture
def con():
    con = duckdb.connect(":memory:")
    yield con
    con.close()


@pytest.fixture
def loaded_con(con, deaths, vaccinations):
    """In-memory connection with bronze, silver and gold built."""
    from covid_project.etl.bronze_ingest import register_bronze_frames
    from covid_project.etl.silver_build import build_silver_tables
    from covid_project.gold.registry import build_gold_views

    register_bronze_frames(con, deaths, vaccinations)
    build_silver_tables(con)
    build_gold_views(con)
    return con
