"""Root fixtures for all tests."""

import os
import sqlite3
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Clear WINBOX_* env vars and reset config singleton before each test."""
    for key in list(os.environ.keys()):
        if key.startswith("WINBOX_"):
            monkeypatch.delenv(key, raising=False)

    # Reset config singleton
    import winbox_stats.env

    winbox_stats.env._config = None

    yield

    # Reset again after test
    winbox_stats.env._config = None


@pytest.fixture
def tmp_data_dir(tmp_path):
    """Create temp directory for scope files and rendered charts."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    return data_dir


@pytest.fixture
def configured_env(tmp_data_dir, monkeypatch):
    """Point the data directory at a temp dir and pin the host name."""
    monkeypatch.setenv("WINBOX_DATA_DIR", str(tmp_data_dir))
    monkeypatch.setenv("WINBOX_HOSTNAME", "testhost")
    # Reset config to pick up new values
    import winbox_stats.env

    winbox_stats.env._config = None
    return {"data_dir": tmp_data_dir}


@pytest.fixture
def sample_readings():
    """One tick's worth of readings keyed by metric label."""
    return {
        "CPU": 12.5,
        "RAM": 48.25,
        "C_Drive": 71.0,
        "BACKUP_Drive": 33.3,
    }


@pytest.fixture
def make_table():
    """Factory creating a table with arbitrary columns and rows in a scope file."""

    def _make(db_path: Path, table: str, columns: tuple[str, ...], rows: list[tuple]):
        conn = sqlite3.connect(db_path)
        try:
            cols = ", ".join(f'"{c}"' for c in columns)
            conn.execute(f'CREATE TABLE IF NOT EXISTS "{table}" ({cols})')
            placeholders = ", ".join("?" for _ in columns)
            conn.executemany(
                f'INSERT INTO "{table}" ({cols}) VALUES ({placeholders})', rows
            )
            conn.commit()
        finally:
            conn.close()
        return db_path

    return _make


@pytest.fixture
def project_root():
    """Path to the project root directory."""
    return Path(__file__).parent.parent
