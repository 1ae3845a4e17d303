"""
Runner: creates/refreshes the gold reporting views.
"""
from __future__ import annotations

from pathlib import Path
import logging
import sys

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from covid_project.gold.registry import build_gold
from covid_project.utils.config import DUCKDB_PATH, LOG_LEVEL

def main() -> None:
    logging.basicConfig(level=LOG_LEVEL)
    names = build_gold(db_path=DUCKDB_PATH)
    print(f"[runner] gold views created: {', '.join(names)}")

if __name__ == "__main__":
    main()
