"""
Gold SQL for rate and aggregate views over the silver tables.

Conventions
-----------
- base and dths are always joined on the full (country, date) key with inner-join
  semantics: a key missing on either side drops the row.
- continent IS NULL marks region/"World" pseudo-rows. Per-country and
  per-continent aggregates exclude them; the region view selects only them.
- "Latest" totals are MAX(total_*), which assumes cumulative counts never
  decrease. SQL_COUNTRY_LATEST_CASES_DEATHS reads the value at the max date
  instead.
"""
from __future__ import annotations

from covid_project.gold.rates import infection_rate_sql, mortality_rate_sql
from covid_project.utils.config import (
    SCHEMA_SILVER,
    SCHEMA_GOLD,
    BASE_TABLE,
    DEATHS_TABLE,
)

BASE = f"{SCHEMA_SILVER}.{BASE_TABLE}"
DTHS = f"{SCHEMA_SILVER}.{DEATHS_TABLE}"

_BASE_JOIN_DTHS = f"""
FROM {BASE} AS base
JOIN {DTHS} AS dths
  ON base.country = dths.country AND base.date = dths.date
""".strip()


# -----------------------------
# Row-level rates
# -----------------------------

SQL_MAX_MORTALITY_RATE = f"""
SELECT
  base.country,
  base.date,
  base.population,
  base.total_cases,
  dths.total_dths,
  {mortality_rate_sql("dths.total_dths", "base.total_cases")} AS mortality_rate
{_BASE_JOIN_DTHS}
"""

# Rough share of the population known to have caught COVID; repeat infections
# are not accounted for.
SQL_INFECTED_RATE = f"""
SELECT
  base.country,
  base.date,
  base.population,
  base.total_cases,
  {infection_rate_sql("base.total_cases", "base.population")} AS infected_rate
{_BASE_JOIN_DTHS}
"""

# -----------------------------
# Peak infection per country
# -----------------------------

# Earliest date on which the country reached its max total_cases. Grouped by
# (country, population): a country whose population changes yields one row
# per population value.
SQL_PEAK_INFECTED_RATE = f"""
SELECT
  base_a.country,
  base_a.population,
  MIN(base_a.date) AS date,
  base_b.max_cases,
  {infection_rate_sql("base_b.max_cases", "base_a.population")} AS infected_rate
FROM {BASE} AS base_a
JOIN (
  SELECT country, population, MAX(total_cases) AS max_cases
  FROM {BASE}
  WHERE continent IS NOT NULL
  GROUP BY country, population
) AS base_b
  ON base_a.country = base_b.country
 AND base_a.population = base_b.population
 AND base_a.total_cases = base_b.max_cases
WHERE base_a.continent IS NOT NULL
GROUP BY base_a.country, base_a.population, base_b.max_cases
"""

# -----------------------------
# Death totals
# -----------------------------

SQL_TOTAL_DEATHS_OVER_TIME = f"""
SELECT base.country, MAX(dths.total_dths) AS total_dths
{_BASE_JOIN_DTHS}
WHERE base.continent IS NOT NULL
GROUP BY base.country
"""

# Pseudo-rows (continent IS NULL) are the feed's own region/world aggregates.
SQL_REGION_TOTAL_DEATHS_OVER_TIME = f"""
SELECT base.country, MAX(dths.total_dths) AS total_deaths
{_BASE_JOIN_DTHS}
WHERE base.continent IS NULL AND dths.total_dths IS NOT NULL
GROUP BY base.country
"""

# Max single-country total per continent (not a sum over its countries).
SQL_CONTINENT_TOTAL_DEATHS_OVER_TIME = f"""
SELECT base.continent, MAX(dths.total_dths) AS total_dths
{_BASE_JOIN_DTHS}
WHERE base.continent IS NOT NULL AND dths.total_dths IS NOT NULL
GROUP BY base.continent
"""

# -----------------------------
# Cases / deaths / mortality
# -----------------------------

SQL_COUNTRY_FINAL_CASES_DEATHS = f"""
SELECT
  base.country,
  MAX(base.total_cases) AS total_cases,
  MAX(dths.total_dths) AS total_dths,
  {mortality_rate_sql("MAX(dths.total_dths)", "MAX(base.total_cases)")} AS mortality_rate
{_BASE_JOIN_DTHS}
WHERE base.continent IS NOT NULL
GROUP BY base.country
"""

SQL_COUNTRY_LATEST_CASES_DEATHS = f"""
WITH joined AS (
  SELECT base.country, base.date, base.total_cases, dths.total_dths
  {_BASE_JOIN_DTHS}
  WHERE base.continent IS NOT NULL
),
last_day AS (
  SELECT country, MAX(date) AS date
  FROM joined
  GROUP BY country
)
SELECT
  joined.country,
  joined.date,
  joined.total_cases,
  joined.total_dths,
  {mortality_rate_sql("joined.total_dths", "joined.total_cases")} AS mortality_rate
FROM joined
JOIN last_day
  ON joined.country = last_day.country AND joined.date = last_day.date
"""

# Same-day new deaths over same-day new cases: a crude ratio, not a cohort CFR.
SQL_GLOBAL_CASES_DEATHS = f"""
SELECT
  base.date,
  SUM(base.new_cases) AS daily_cases,
  SUM(dths.new_dths) AS daily_dths,
  {mortality_rate_sql("SUM(dths.new_dths)", "SUM(base.new_cases)")} AS daily_mortality_rate
{_BASE_JOIN_DTHS}
WHERE base.continent IS NOT NULL
GROUP BY base.date
"""

# Grand totals are sums of each country's own final totals.
SQL_GLOBAL_FINAL_CASES_DEATHS = f"""
SELECT
  SUM(total_cases) AS total_cases,
  SUM(total_dths) AS total_dths,
  {mortality_rate_sql("SUM(total_dths)", "SUM(total_cases)")} AS mortality_rate
FROM {SCHEMA_GOLD}.CountryFinalCasesDeathsMortality
"""
