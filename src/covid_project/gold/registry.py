# src/covid_project/gold/registry.py
"""Canonical registry of gold views: definitions, output schemas, and builder."""

from __future__ import annotations

import logging
from typing import Dict, List

import duckdb

from covid_project.gold import aggregates as A
from covid_project.gold import rolling as R
from covid_project.schemas import (
    CONTINENT,
    COUNTRY,
    DATE,
    POPULATION,
    ViewSpec,
    count,
    pct,
)
from covid_project.utils.config import DUCKDB_PATH, SCHEMA_GOLD
from covid_project.utils.duck import connect, ensure_schema

log = logging.getLogger(__name__)

# Views referencing other views must come after them.
_VIEW_LIST: List[ViewSpec] = [
    ViewSpec(
        name="MaxMortalityRate",
        description="Mortality rate (% of cases) per country and date.",
        sql=A.SQL_MAX_MORTALITY_RATE,
        columns=[
            COUNTRY,
            DATE,
            POPULATION,
            count("total_cases"),
            count("total_dths"),
            pct("mortality_rate", nullable=False),
        ],
        order_by="country, date",
        notes="0 when total_cases is 0 or NULL.",
    ),
    ViewSpec(
        name="InfectedRate",
        description="Share of the population with a reported case, per country and date.",
        sql=A.SQL_INFECTED_RATE,
        columns=[COUNTRY, DATE, POPULATION, count("total_cases"), pct("infected_rate")],
        order_by="country, date",
        notes="Does not account for repeat infections.",
    ),
    ViewSpec(
        name="PeakInfectedRate",
        description="Infection rate at each country's maximum total_cases (earliest such date).",
        sql=A.SQL_PEAK_INFECTED_RATE,
        columns=[
            COUNTRY,
            POPULATION.model_copy(update={"nullable": False}),
            DATE,
            count("max_cases", nullable=False),
            pct("infected_rate"),
        ],
        order_by="country, population",
        notes="One row per (country, population); population is assumed constant per country.",
    ),
    ViewSpec(
        name="TotalDeathsOverTime",
        description="Highest total deaths reached per country.",
        sql=A.SQL_TOTAL_DEATHS_OVER_TIME,
        columns=[COUNTRY, count("total_dths")],
        order_by="total_dths, country",
    ),
    ViewSpec(
        name="RegionTotalDeathsOverTime",
        description="Highest total deaths per region/world pseudo-row.",
        sql=A.SQL_REGION_TOTAL_DEATHS_OVER_TIME,
        columns=[COUNTRY, count("total_deaths", nullable=False)],
        order_by="country, total_deaths",
    ),
    ViewSpec(
        name="ContinentTotalDeathsOverTime",
        description="Highest single-country total deaths per continent.",
        sql=A.SQL_CONTINENT_TOTAL_DEATHS_OVER_TIME,
        columns=[
            CONTINENT.model_copy(update={"nullable": False}),
            count("total_dths", nullable=False),
        ],
        order_by="total_dths, continent",
    ),
    ViewSpec(
        name="CountryFinalCasesDeathsMortality",
        description="Final total cases, deaths and mortality rate per country.",
        sql=A.SQL_COUNTRY_FINAL_CASES_DEATHS,
        columns=[
            COUNTRY,
            count("total_cases"),
            count("total_dths"),
            pct("mortality_rate", nullable=False),
        ],
        order_by="country",
        notes="Final totals are MAX values; skewed by irregular reporting.",
    ),
    ViewSpec(
        name="CountryLatestCasesDeathsMortality",
        description="Total cases, deaths and mortality rate at each country's last reported date.",
        sql=A.SQL_COUNTRY_LATEST_CASES_DEATHS,
        columns=[
            COUNTRY,
            DATE,
            count("total_cases"),
            count("total_dths"),
            pct("mortality_rate", nullable=False),
        ],
        order_by="country",
    ),
    ViewSpec(
        name="GlobalCasesDeathsMortality",
        description="Global daily new cases, new deaths and same-day mortality ratio.",
        sql=A.SQL_GLOBAL_CASES_DEATHS,
        columns=[
            DATE,
            count("daily_cases"),
            count("daily_dths"),
            pct("daily_mortality_rate", nullable=False),
        ],
        order_by="date",
        notes="Compares deaths to cases of the same day; not a cohort mortality rate.",
    ),
    ViewSpec(
        name="GlobalFinalCasesDeathsMortality",
        description="Global totals summed over per-country final totals, with mortality rate.",
        sql=A.SQL_GLOBAL_FINAL_CASES_DEATHS,
        columns=[count("total_cases"), count("total_dths"), pct("mortality_rate", nullable=False)],
    ),
    ViewSpec(
        name="CountryVacsRollingCount",
        description="Running total of new vaccinations per country over time.",
        sql=R.SQL_COUNTRY_VACS_ROLLING_COUNT,
        columns=[
            CONTINENT.model_copy(update={"nullable": False}),
            COUNTRY,
            DATE,
            POPULATION,
            count("new_vacs", nullable=False),
            count("vacs_count", nullable=False),
        ],
        order_by="continent, country, date",
    ),
    ViewSpec(
        name="DailyPercentageVaccinated",
        description="Rolling vaccination count as a percentage of population.",
        sql=R.SQL_DAILY_PERCENTAGE_VACCINATED,
        columns=[
            CONTINENT.model_copy(update={"nullable": False}),
            COUNTRY,
            DATE,
            POPULATION,
            count("new_vacs", nullable=False),
            count("vacs_count", nullable=False),
            pct("vacs_percentage"),
        ],
        order_by="country, date",
        notes="Boosters count as vaccinations, so the percentage can exceed 100.",
    ),
]

VIEWS: Dict[str, ViewSpec] = {v.name: v for v in _VIEW_LIST}


def get_view(name: str) -> ViewSpec:
    """Look up a view by name; raises KeyError for unknown names."""
    try:
        return VIEWS[name]
    except KeyError:
        raise KeyError(f"Unknown view: {name}. Known views: {', '.join(VIEWS)}") from None


def create_view_sql(view: ViewSpec) -> str:
    return f"CREATE OR REPLACE VIEW {SCHEMA_GOLD}.{view.name} AS\n{view.sql.strip()};"


def build_gold_views(con: duckdb.DuckDBPyConnection) -> List[str]:
    """
    Create/replace every gold view in dependency order.

    Returns:
        Names of the views created.
    """
    ensure_schema(con, SCHEMA_GOLD)
    for view in _VIEW_LIST:
        con.execute(create_view_sql(view))
    log.info("[gold] created %d views in schema %s", len(_VIEW_LIST), SCHEMA_GOLD)
    return [v.name for v in _VIEW_LIST]


def build_gold(*, db_path=DUCKDB_PATH) -> List[str]:
    """Open the DuckDB file and create/replace all gold views."""
    with connect(db_path, read_only=False) as con:
        return build_gold_views(con)
