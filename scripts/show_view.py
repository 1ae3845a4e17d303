# scripts/show_view.py
from __future__ import annotations
import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from covid_project.gold.registry import VIEWS
from covid_project.gold.sql_client import SQLClient

def main():
    parser = argparse.ArgumentParser(description="Print a gold view in its default order.")
    parser.add_argument("view", choices=sorted(VIEWS), help="Gold view name.")
    parser.add_argument("--limit", type=int, default=20, help="Max rows to print.")
    parser.add_argument("--db", default=None, help="DuckDB file (defaults to DUCKDB_PATH).")
    args = parser.parse_args()

    spec = VIEWS[args.view]
    with SQLClient(Path(args.db) if args.db else None) as sql:
        df = sql.read_view(args.view, limit=args.limit)

    print(f"{spec.name}: {spec.description}")
    if spec.notes:
        print(f"note: {spec.notes}")
    print(df.to_string(index=False))

if __name__ == "__main__":
    main()
