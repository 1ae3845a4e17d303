"""
Global configuration for the COVID project.

Centralizes paths, schema/table names, and tunable parameters.
Values can be overridden via environment variables or a local .env file.
"""
from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Project root: .../covid-project
PROJECT_ROOT = Path(__file__).resolve().parents[3]

# Data
DATA_DIR = PROJECT_ROOT / "data"
DUCKDB_PATH = Path(os.getenv("DUCKDB_PATH", DATA_DIR / "covid.duckdb"))

# Schemas
SCHEMA_BRONZE = os.getenv("SCHEMA_BRONZE", "bronze")
SCHEMA_SILVER = os.getenv("SCHEMA_SILVER", "silver")
SCHEMA_GOLD = os.getenv("SCHEMA_GOLD", "gold")

# Raw tables (bronze, external input)
RAW_DEATHS_TABLE = "deaths"
RAW_VACCINATIONS_TABLE = "vaccinations"

# Normalized tables (silver)
BASE_TABLE = "base"
DEATHS_TABLE = "dths"
VACCINATIONS_TABLE = "vacs"

# Runtime
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
DUCKDB_LOCK_RETRIES = int(os.getenv("DUCKDB_LOCK_RETRIES", "6"))
DUCKDB_LOCK_WAIT_SECONDS = float(os.getenv("DUCKDB_LOCK_WAIT_SECONDS", "1.25"))
