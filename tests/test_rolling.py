"""Rolling vaccination counts and percentage vaccinated."""
from __future__ import annotations

import pandas as pd
import pytest

from conftest import D1, D2, D3, iso_dates, make_deaths, make_vaccinations
from covid_project.gold.rolling import ROLLING_COLUMNS, percentage_vaccinated, rolling_vaccinations
from covid_project.gold.sql_client import fetch_view
from covid_project.pipeline import run_pipeline


def test_null_new_vacs_rows_are_absent_and_count_carries_over(loaded_con):
    df = fetch_view(loaded_con, "CountryVacsRollingCount")
    alpha = df[df["country"] == "Alpha"]
    assert iso_dates(alpha["date"]) == [D1, D3]
    assert alpha["vacs_count"].tolist() == [100, 150]


def test_unmatched_vaccination_dates_are_dropped(loaded_con):
    df = fetch_view(loaded_con, "CountryVacsRollingCount")
    assert "2021-01-04" not in iso_dates(df["date"])


def test_rolling_count_columns_and_order(loaded_con):
    df = fetch_view(loaded_con, "CountryVacsRollingCount")
    assert df.columns.tolist() == ROLLING_COLUMNS
    # ordered by continent, country, date; Gamma has no non-null rows
    assert df["country"].tolist() == ["Beta", "Beta", "Alpha", "Alpha"]


def test_rolling_count_is_prefix_sum(loaded_con):
    df = fetch_view(loaded_con, "CountryVacsRollingCount")
    for _, grp in df.groupby("country"):
        counts = grp["vacs_count"].tolist()
        assert counts == sorted(counts)
        assert counts == grp["new_vacs"].cumsum().tolist()


def test_percentage_can_exceed_100(loaded_con):
    df = fetch_view(loaded_con, "DailyPercentageVaccinated")
    beta = df[df["country"] == "Beta"]
    assert beta["vacs_percentage"].tolist() == pytest.approx([60.0, 120.0])
    alpha = df[df["country"] == "Alpha"]
    assert alpha["vacs_percentage"].tolist() == pytest.approx([10.0, 15.0])


def test_rolling_gap_example():
    deaths = make_deaths(
        [
            ("Ypsilon", d, "YPS", "Oceania", 1000, 0, 0, 0, 0)
            for d in (D1, D2, D3)
        ]
    )
    vacs = make_vaccinations(
        [("Ypsilon", D1, 100, 100), ("Ypsilon", D2, pd.NA, pd.NA), ("Ypsilon", D3, 50, 150)]
    )
    df = run_pipeline(deaths, vacs, views=["CountryVacsRollingCount"])["CountryVacsRollingCount"]
    assert iso_dates(df["date"]) == [D1, D3]
    assert df["vacs_count"].tolist() == [100, 150]


def test_pandas_reference_matches_view(loaded_con):
    joined = loaded_con.execute(
        """
        SELECT base.continent, base.country, base.date, base.population, vacs.new_vacs
        FROM silver.base AS base
        JOIN silver.vacs AS vacs
          ON base.country = vacs.country AND base.date = vacs.date
        """
    ).df()
    expected = rolling_vaccinations(joined)
    got = fetch_view(loaded_con, "CountryVacsRollingCount").sort_values(["country", "date"])

    assert expected["country"].tolist() == got["country"].tolist()
    assert expected["vacs_count"].tolist() == got["vacs_count"].tolist()


def test_percentage_vaccinated_reference():
    frame = pd.DataFrame(
        {
            "continent": ["Asia", "Asia"],
            "country": ["Beta", "Beta"],
            "date": pd.to_datetime([D1, D2]),
            "population": [500.0, 500.0],
            "new_vacs": [300.0, 300.0],
        }
    )
    out = percentage_vaccinated(rolling_vaccinations(frame))
    assert out["vacs_percentage"].tolist() == [60.0, 120.0]
