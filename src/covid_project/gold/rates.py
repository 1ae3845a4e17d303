"""
Rate derivations shared by the gold views and in-process callers.

Each metric exists twice: a pure Python function for row-level use and a SQL
expression builder that the view definitions interpolate. Both follow the same
rounding and null/zero policy:

- mortality_rate: guarded. A zero or NULL denominator (and a NULL numerator)
  yields 0, never NULL.
- infection_rate / vaccinated_percentage: unguarded denominator. A NULL
  numerator propagates; population 0 or NULL is not masked.

Precision differs per metric (2, 3 and 2 decimals).
"""
from __future__ import annotations

from typing import Any, Optional

import pandas as pd

MORTALITY_DECIMALS = 2
INFECTION_DECIMALS = 3
VACCINATED_DECIMALS = 2


def _is_null(value: Any) -> bool:
    return value is None or bool(pd.isna(value))


def mortality_rate(total_deaths: Optional[float], total_cases: Optional[float]) -> float:
    """
    Deaths as a percentage of cases.

    Args:
        total_deaths: Cumulative (or summed) deaths; a null counts as no rate.
        total_cases: Cumulative (or summed) cases.

    Returns:
        round(total_deaths / total_cases * 100, 2), or 0.0 when total_cases is
        0/null or total_deaths is null. Nulls are None, NaN or pd.NA.
    """
    if _is_null(total_cases) or total_cases == 0 or _is_null(total_deaths):
        return 0.0
    return round(total_deaths / total_cases * 100, MORTALITY_DECIMALS)


def infection_rate(total_cases: Optional[float], population: float) -> Optional[float]:
    """
    Cases as a percentage of population.

    Returns None when total_cases is null (None, NaN or pd.NA). population
    is not checked: 0 raises ZeroDivisionError and None raises TypeError.
    """
    if _is_null(total_cases):
        return None
    return round(total_cases / population * 100, INFECTION_DECIMALS)


def vaccinated_percentage(vacs_count: Optional[float], population: float) -> Optional[float]:
    """
    Rolling vaccination count as a percentage of population.

    Not capped at 100: boosters and multi-dose schedules push it above.
    Same unguarded denominator as infection_rate.
    """
    if _is_null(vacs_count):
        return None
    return round(vacs_count / population * 100, VACCINATED_DECIMALS)


# -----------------------------------------------------------------------------
# SQL expression builders (DuckDB)
# -----------------------------------------------------------------------------

def mortality_rate_sql(deaths_expr: str, cases_expr: str) -> str:
    """ROUND(COALESCE(deaths / NULLIF(cases, 0), 0) * 100, 2)"""
    return (
        f"ROUND(COALESCE({deaths_expr} / NULLIF({cases_expr}, 0), 0) * 100, "
        f"{MORTALITY_DECIMALS})"
    )


def infection_rate_sql(cases_expr: str, population_expr: str) -> str:
    return f"ROUND(({cases_expr} / {population_expr}) * 100, {INFECTION_DECIMALS})"


def vaccinated_percentage_sql(count_expr: str, population_expr: str) -> str:
    return f"ROUND(({count_expr} / {population_expr}) * 100, {VACCINATED_DECIMALS})"
