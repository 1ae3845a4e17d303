from __future__ import annotations

import logging
import sys
from pathlib import Path

# Ensure "src/" is on sys.path so absolute imports work even when running this file directly.
ROOT = Path(__file__).resolve().parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from covid_project.pipeline import rebuild
from covid_project.utils.config import DUCKDB_PATH, LOG_LEVEL


def main() -> None:
    """Rebuild the silver tables and gold views end-to-end.

    Steps:
        1) Project bronze.deaths / bronze.vaccinations into silver.base,
           silver.dths and silver.vacs (full rebuild, keyed by country+date).
        2) Create or replace every gold view over the silver tables.

    Environment variables:
        DUCKDB_PATH: Path to the DuckDB file (default: 'data/covid.duckdb').
        LOG_LEVEL: Logging level (default: 'INFO').

    Returns:
        None. Writes tables/views into DuckDB and prints progress to stdout.
    """
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")
    counts = rebuild(db_path=DUCKDB_PATH)
    summary = ", ".join(f"{k}={v}" for k, v in counts.items())
    print(f"[ETL] Silver + gold completed ({summary}). DuckDB at: {DUCKDB_PATH}")


if __name__ == "__main__":
    main()
