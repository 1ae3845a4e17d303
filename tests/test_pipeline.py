"""End-to-end: pure in-memory pipeline and the on-disk rebuild + read client."""
from __future__ import annotations

import pytest

from covid_project.etl.bronze_ingest import LoadError, register_bronze_frames
from covid_project.gold.registry import VIEWS
from covid_project.gold.sql_client import SQLClient
from covid_project.pipeline import rebuild, run_pipeline
from covid_project.utils.duck import connect

from conftest import DEATHS_ROWS, make_deaths


def test_run_pipeline_returns_every_view(deaths, vaccinations):
    out = run_pipeline(deaths, vaccinations)
    assert list(out) == list(VIEWS)
    assert out["GlobalFinalCasesDeathsMortality"].iloc[0]["total_cases"] == 280


def test_run_pipeline_is_deterministic(deaths, vaccinations):
    first = run_pipeline(deaths, vaccinations)
    second = run_pipeline(deaths, vaccinations)
    for name in VIEWS:
        assert first[name].equals(second[name]), name


def test_run_pipeline_subset(deaths, vaccinations):
    out = run_pipeline(deaths, vaccinations, views=["InfectedRate"])
    assert list(out) == ["InfectedRate"]


def test_run_pipeline_rejects_duplicate_keys(vaccinations):
    with pytest.raises(LoadError):
        run_pipeline(make_deaths(DEATHS_ROWS + DEATHS_ROWS[:1]), vaccinations)


def test_rebuild_and_read_client(tmp_path, deaths, vaccinations):
    db_path = tmp_path / "covid.duckdb"
    with connect(db_path, read_only=False) as con:
        register_bronze_frames(con, deaths, vaccinations)

    counts = rebuild(db_path=db_path)
    assert counts == {"base": 13, "dths": 13, "vacs": 9}

    with SQLClient(db_path) as sql:
        df = sql.read_view("CountryFinalCasesDeathsMortality")
        assert df["country"].tolist() == ["Alpha", "Beta", "Gamma"]
        n = sql.df("SELECT COUNT(*) AS n FROM gold.CountryVacsRollingCount").iloc[0]["n"]
        assert n == 4


def test_read_client_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        SQLClient(tmp_path / "missing.duckdb")
