"""
Rolling vaccination counts per country.

The rolling count is a running sum of new_vacs ordered by date within each
country, rebuilt independently of the feed's total_vacs (which some sources
report inconsistently). Rows with NULL new_vacs are dropped before summing,
so they neither increment the count nor appear in the output.
"""
from __future__ import annotations

import pandas as pd

from covid_project.gold.rates import vaccinated_percentage, vaccinated_percentage_sql
from covid_project.utils.config import (
    SCHEMA_SILVER,
    SCHEMA_GOLD,
    BASE_TABLE,
    VACCINATIONS_TABLE,
)

ROLLING_COLUMNS = ["continent", "country", "date", "population", "new_vacs", "vacs_count"]

# Same-date rows within a country are peers in the default RANGE frame and
# share a cumulative value; their relative order is undefined.
SQL_COUNTRY_VACS_ROLLING_COUNT = f"""
SELECT
  base.continent,
  base.country,
  base.date,
  base.population,
  vacs.new_vacs,
  SUM(vacs.new_vacs) OVER (PARTITION BY base.country ORDER BY base.date) AS vacs_count
FROM {SCHEMA_SILVER}.{BASE_TABLE} AS base
JOIN {SCHEMA_SILVER}.{VACCINATIONS_TABLE} AS vacs
  ON base.country = vacs.country AND base.date = vacs.date
WHERE base.continent IS NOT NULL AND vacs.new_vacs IS NOT NULL
"""

# Can exceed 100: boosters are counted as vaccinations.
SQL_DAILY_PERCENTAGE_VACCINATED = f"""
SELECT
  rc.*,
  {vaccinated_percentage_sql("rc.vacs_count", "rc.population")} AS vacs_percentage
FROM {SCHEMA_GOLD}.CountryVacsRollingCount AS rc
"""


def rolling_vaccinations(frame: pd.DataFrame) -> pd.DataFrame:
    """
    In-process equivalent of CountryVacsRollingCount.

    Args:
        frame: Joined base x vacs rows with at least continent, country, date,
            population and new_vacs.

    Returns:
        DataFrame with ROLLING_COLUMNS, sorted by country then date.
    """
    df = frame.loc[frame["continent"].notna() & frame["new_vacs"].notna()].copy()
    df = df.sort_values(["country", "date"], kind="mergesort")
    df["vacs_count"] = df.groupby("country", sort=False)["new_vacs"].cumsum()
    return df[ROLLING_COLUMNS].reset_index(drop=True)


def percentage_vaccinated(frame: pd.DataFrame) -> pd.DataFrame:
    """Add vacs_percentage to a rolling-count frame (see DailyPercentageVaccinated)."""
    out = frame.copy()
    out["vacs_percentage"] = [
        vaccinated_percentage(c, p) for c, p in zip(out["vacs_count"], out["population"])
    ]
    return out
