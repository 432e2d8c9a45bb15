"""Schema-on-read for scope files.

Scope files come in two shapes, told apart by their filename stem:

- "YYYYMM@HOST"              monthly scope, one table per metric
- "YYYY-MM@HOST@METRIC"      per-metric scope, a single table (usually "stats")

Column names also vary between generations (Timestamp/Value, ts/value),
so the time and value columns are looked up per table.
"""

import sqlite3
from dataclasses import dataclass
from typing import Optional, Union

from .db import TIME_COLUMN, VALUE_COLUMN, quote_ident

TIME_COLUMN_NAMES = ("timestamp", "ts", "time")
VALUE_COLUMN_NAMES = ("value", "val")

PER_METRIC_TABLE = "stats"


@dataclass(frozen=True)
class MonthlyScope:
    period: str
    host: str

    @property
    def metric(self) -> Optional[str]:
        return None


@dataclass(frozen=True)
class PerMetricScope:
    period: str
    host: str
    metric: str


@dataclass(frozen=True)
class UnrecognizedScope:
    """Stem that fits neither naming scheme; handled like a monthly scope."""

    raw: str

    @property
    def period(self) -> str:
        return self.raw

    @property
    def host(self) -> str:
        return ""

    @property
    def metric(self) -> Optional[str]:
        return None


ScopeName = Union[MonthlyScope, PerMetricScope, UnrecognizedScope]


def parse_scope_stem(stem: str) -> ScopeName:
    """Classify a scope filename stem (the name without ".sqlite")."""
    parts = stem.split("@")
    if len(parts) == 2:
        return MonthlyScope(period=parts[0], host=parts[1])
    if len(parts) == 3:
        return PerMetricScope(period=parts[0], host=parts[1], metric=parts[2])
    return UnrecognizedScope(raw=stem)


def list_tables(conn: sqlite3.Connection) -> list[str]:
    """User tables in the scope, ordered by name."""
    cursor = conn.execute(
        "SELECT name FROM sqlite_master "
        "WHERE type = 'table' AND name NOT LIKE 'sqlite_%' "
        "ORDER BY name"
    )
    return [row[0] for row in cursor.fetchall()]


def resolve_columns(conn: sqlite3.Connection, table: str) -> tuple[str, str]:
    """Find the time and value columns of a table.

    Matching is case-insensitive and the first match wins. When a column
    cannot be found the default name ("Timestamp" or "Value") is returned
    and the subsequent query is left to fail.

    Returns:
        (time_column, value_column) in their stored spelling
    """
    time_col: Optional[str] = None
    value_col: Optional[str] = None

    cursor = conn.execute(f"PRAGMA table_info({quote_ident(table)})")
    for row in cursor.fetchall():
        name = row[1]
        lname = name.lower()
        if time_col is None and lname in TIME_COLUMN_NAMES:
            time_col = name
        if value_col is None and lname in VALUE_COLUMN_NAMES:
            value_col = name

    return time_col or TIME_COLUMN, value_col or VALUE_COLUMN


def find_stats_table(tables: list[str]) -> Optional[str]:
    """The table named "stats" in any case, in its stored spelling."""
    for table in tables:
        if table.lower() == PER_METRIC_TABLE:
            return table
    return None


def pick_metric_table(tables: list[str]) -> Optional[str]:
    """Choose the table to chart in a per-metric scope.

    A table named "stats" (any case) wins. Otherwise the
    lexicographically smallest name is used so the choice does not
    depend on how the database happens to list its tables.
    """
    if not tables:
        return None
    return find_stats_table(tables) or min(tables)
