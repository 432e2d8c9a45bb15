"""SQLite storage for metric scopes.

Schema design:
- One database file per host and month (a "scope")
- One table per metric label: CPU, RAM, <MOUNT>_Drive
- Columns: "Timestamp" TEXT, "Value" REAL
- Index on "Timestamp" for ordered reads
- Append-only, duplicate timestamps are kept

Older scopes may use other column spellings (ts/value); readers resolve
columns through winbox_stats.schema rather than assuming this layout.
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from . import log

TIME_COLUMN = "Timestamp"
VALUE_COLUMN = "Value"


def quote_ident(name: str) -> str:
    """Quote an SQL identifier (table, column or index name)."""
    return '"' + name.replace('"', '""') + '"'


@contextmanager
def get_connection(
    db_path: Path,
    readonly: bool = False
) -> Iterator[sqlite3.Connection]:
    """Context manager for database connections.

    Args:
        db_path: Scope file path
        readonly: If True, open in read-only mode (file must exist)

    Yields:
        sqlite3.Connection
    """
    db_path = Path(db_path)
    if readonly:
        uri = f"{db_path.resolve().as_uri()}?mode=ro"
        conn = sqlite3.connect(uri, uri=True)
    else:
        conn = sqlite3.connect(db_path)

    try:
        yield conn
        if not readonly:
            conn.commit()
    except Exception:
        if not readonly:
            conn.rollback()
        raise
    finally:
        conn.close()


def ensure_table(conn: sqlite3.Connection, table: str) -> None:
    """Create a metric table and its timestamp index if missing.

    Safe to call before every insert.
    """
    t = quote_ident(table)
    ix = quote_ident(f"ix_{table}_{TIME_COLUMN}")
    conn.execute(
        f"""
        CREATE TABLE IF NOT EXISTS {t} (
            "{TIME_COLUMN}" TEXT NOT NULL,
            "{VALUE_COLUMN}" REAL NOT NULL
        )
        """
    )
    conn.execute(f'CREATE INDEX IF NOT EXISTS {ix} ON {t}("{TIME_COLUMN}")')


def append_sample(
    conn: sqlite3.Connection,
    table: str,
    timestamp: str,
    value: float,
) -> None:
    """Insert one sample row.

    Args:
        conn: Open scope connection
        table: Metric label
        timestamp: "YYYY-MM-DD HH:MM:SS"
        value: Percentage
    """
    conn.execute(
        f'INSERT INTO {quote_ident(table)} ("{TIME_COLUMN}", "{VALUE_COLUMN}") '
        "VALUES (?, ?)",
        (timestamp, value)
    )
    log.debug(f"Inserted {table}={value:.2f} at {timestamp}")
