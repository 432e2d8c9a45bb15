"""JSON export of per-metric scope files.

Per-metric scopes keep their samples in a single "stats" table (any
case) with (ts, value) columns. Each one is written to a sibling .json
file as an array of {"Timestamp": ..., "Value": ...} objects, oldest
first.
"""

import json
import sqlite3
from pathlib import Path
from typing import Any

from .db import get_connection, quote_ident
from .naming import SCOPE_SUFFIX
from .schema import PER_METRIC_TABLE, find_stats_table, list_tables
from . import log


def _read_rows(conn: sqlite3.Connection) -> list[dict[str, Any]]:
    table = find_stats_table(list_tables(conn)) or PER_METRIC_TABLE
    cursor = conn.execute(
        f"SELECT ts, value FROM {quote_ident(table)} ORDER BY ts ASC"
    )
    return [{"Timestamp": ts, "Value": value} for ts, value in cursor]


def export_file(db_path: Path) -> Path:
    """Write the JSON export for one scope file.

    Returns:
        Path to written file

    Raises:
        RuntimeError: If the scope cannot be read or the JSON cannot be written
    """
    json_path = db_path.with_suffix(".json")
    try:
        with get_connection(db_path, readonly=True) as conn:
            rows = _read_rows(conn)
    except sqlite3.Error as e:
        raise RuntimeError(f"Failed to read {db_path}: {e}") from e

    try:
        json_path.write_text(json.dumps(rows, indent=2))
    except OSError as e:
        raise RuntimeError(f"Failed to write {json_path}: {e}") from e

    log.debug(f"Exported {len(rows)} rows to {json_path}")
    return json_path


def _has_stats_table(db_path: Path) -> bool:
    try:
        with get_connection(db_path, readonly=True) as conn:
            return find_stats_table(list_tables(conn)) is not None
    except sqlite3.Error:
        return False


def export_all(start_dir: Path) -> list[Path]:
    """Export every per-metric scope below a directory.

    Files without a "stats" table (monthly scopes, foreign databases)
    are skipped.

    Args:
        start_dir: Directory to walk recursively

    Returns:
        Paths of the JSON files written
    """
    written: list[Path] = []
    candidates = sorted(
        p for p in Path(start_dir).rglob("*")
        if p.is_file() and p.suffix.lower() == SCOPE_SUFFIX
    )

    for db_path in candidates:
        if not _has_stats_table(db_path):
            log.debug(f"Skipping {db_path}: no {PER_METRIC_TABLE} table")
            continue
        written.append(export_file(db_path))

    return written
