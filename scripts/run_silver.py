"""
Runner: builds silver.base / silver.dths / silver.vacs from bronze.
"""
from __future__ import annotations
from pathlib import Path
import logging
import sys

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from covid_project.etl.silver_build import build_silver
from covid_project.utils.config import DUCKDB_PATH, LOG_LEVEL

def main() -> None:
    logging.basicConfig(level=LOG_LEVEL)
    counts = build_silver(db_path=DUCKDB_PATH)
    print(f"[runner] silver done: {counts}")

if __name__ == "__main__":
    main()
