# src/covid_project/schemas.py
from __future__ import annotations

"""
Typed table and view contracts for the COVID pipeline.

These Pydantic schemas describe:
- the normalized silver tables (columns, SQL types, primary key, and the bronze
  column each one is projected from),
- the gold views (output columns with semantic type and nullability, plus the
  defining SQL and default ordering).

The Normalizer renders its DDL from TableSpec and the view registry renders its
CREATE VIEW statements from ViewSpec, so the contracts below are the single
source of truth for both layers.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

SemanticType = Literal["text", "date", "count", "population", "pct"]


class ColumnSpec(BaseModel):
    """
    One column of a silver table or gold view.

    Attributes:
        name: Column name as exposed to readers.
        sql_type: DuckDB type used in DDL.
        semantic: What the value means (drives docs, not casting).
        nullable: Whether NULL is a legitimate value.
        source: Bronze column projected into this one (silver tables only).
    """

    name: str
    sql_type: str = Field("DOUBLE", description="DuckDB column type.")
    semantic: SemanticType = "count"
    nullable: bool = True
    source: Optional[str] = Field(
        None, description="Bronze column name when it differs from `name`."
    )

    @property
    def source_name(self) -> str:
        return self.source or self.name


class TableSpec(BaseModel):
    """
    A normalized (silver) table: a strict projection of one bronze table.

    Attributes:
        name: Table name inside the silver schema.
        source_table: Bronze table it is projected from.
        columns: Ordered output columns.
        primary_key: Key columns; duplicates abort the load.
    """

    name: str
    source_table: str
    columns: List[ColumnSpec]
    primary_key: List[str] = Field(default_factory=lambda: ["country", "date"])

    @property
    def column_names(self) -> List[str]:
        return [c.name for c in self.columns]

    @property
    def source_columns(self) -> List[str]:
        return [c.source_name for c in self.columns]


class ViewSpec(BaseModel):
    """
    A named, reproducible gold view.

    Attributes:
        name: View name inside the gold schema.
        description: One-line summary of what the view reports.
        sql: SELECT statement defining the view.
        columns: Output schema (name, semantic type, nullability).
        order_by: Default ORDER BY used when reading the view.
        notes: Caveats worth surfacing to readers.
    """

    name: str
    description: str
    sql: str
    columns: List[ColumnSpec]
    order_by: Optional[str] = None
    notes: Optional[str] = None

    @property
    def column_names(self) -> List[str]:
        return [c.name for c in self.columns]


# -----------------------------------------------------------------------------
# Shared column definitions
# -----------------------------------------------------------------------------

COUNTRY = ColumnSpec(name="country", sql_type="VARCHAR", semantic="text", nullable=False)
DATE = ColumnSpec(name="date", sql_type="DATE", semantic="date", nullable=False)
CONTINENT = ColumnSpec(name="continent", sql_type="VARCHAR", semantic="text")
POPULATION = ColumnSpec(name="population", semantic="population")


def count(name: str, *, nullable: bool = True, source: Optional[str] = None) -> ColumnSpec:
    return ColumnSpec(name=name, semantic="count", nullable=nullable, source=source)


def pct(name: str, *, nullable: bool = True) -> ColumnSpec:
    return ColumnSpec(name=name, semantic="pct", nullable=nullable)
