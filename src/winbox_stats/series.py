"""Read metric tables back as ordered (epoch, value) point sequences."""

import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from .db import quote_ident
from .schema import resolve_columns

# Tried in order; the first format that parses wins
TIMESTAMP_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%S.%f",
)


@dataclass(frozen=True)
class DataPoint:
    """A single data point with epoch timestamp and value."""
    ts: int
    value: float


def parse_timestamp(text: Any) -> Optional[datetime]:
    """Parse a stored timestamp, returning None if no format matches."""
    if not isinstance(text, str):
        return None
    for fmt in TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def to_epoch(dt: datetime) -> int:
    """Epoch seconds for a stored civil time.

    The wall-clock value is read as UTC so the result does not depend on
    the time zone of the machine doing the reading.
    """
    return int(dt.replace(tzinfo=timezone.utc).timestamp())


def from_epoch(ts: int) -> datetime:
    """Inverse of to_epoch, as a naive datetime."""
    return datetime.fromtimestamp(ts, tz=timezone.utc).replace(tzinfo=None)


def read_points(conn: sqlite3.Connection, table: str) -> list[DataPoint]:
    """Load every parseable row of a metric table, oldest first.

    Points are ordered by time. Rows whose timestamp matches none of
    TIMESTAMP_FORMATS, or whose value is not numeric, are dropped.

    Raises:
        sqlite3.Error: If the table or its resolved columns cannot be queried
    """
    time_col, value_col = resolve_columns(conn, table)
    cursor = conn.execute(
        f"SELECT {quote_ident(time_col)}, {quote_ident(value_col)} "
        f"FROM {quote_ident(table)} "
        f"ORDER BY {quote_ident(time_col)} ASC"
    )

    points: list[DataPoint] = []
    for raw_ts, raw_value in cursor:
        dt = parse_timestamp(raw_ts)
        if dt is None:
            continue
        try:
            value = float(raw_value)
        except (ValueError, TypeError):
            continue
        points.append(DataPoint(ts=to_epoch(dt), value=value))

    # Text order differs from time order when formats are mixed
    points.sort(key=lambda p: p.ts)
    return points
