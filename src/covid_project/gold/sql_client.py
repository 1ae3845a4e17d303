from __future__ import annotations
import duckdb as ddb
import pandas as pd
from pathlib import Path
from typing import Optional

from covid_project.gold.registry import get_view
from covid_project.utils.config import DUCKDB_PATH, SCHEMA_GOLD


def fetch_view(con: ddb.DuckDBPyConnection, name: str, *, limit: Optional[int] = None) -> pd.DataFrame:
    """Read a gold view in its default order as a DataFrame."""
    view = get_view(name)
    sql = f"SELECT * FROM {SCHEMA_GOLD}.{view.name}"
    if view.order_by:
        sql += f" ORDER BY {view.order_by}"
    if limit is not None:
        sql += f" LIMIT {int(limit)}"
    return con.execute(sql).df()


class SQLClient:
    """Minimal DuckDB read-only client over the gold views."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = Path(db_path) if db_path else DUCKDB_PATH
        if not self.db_path.exists():
            raise FileNotFoundError(f"DuckDB not found at {self.db_path}")
        self.con = ddb.connect(str(self.db_path), read_only=True)

    def df(self, sql: str, params: list | dict | None = None) -> pd.DataFrame:
        return self.con.execute(sql, params or []).df()

    def read_view(self, name: str, *, limit: Optional[int] = None) -> pd.DataFrame:
        return fetch_view(self.con, name, limit=limit)

    def close(self):
        self.con.close()

    def __enter__(self) -> "SQLClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
