"""Fixtures for database tests."""

import pytest


@pytest.fixture
def db_path(tmp_data_dir):
    """Scope file path in temp data directory."""
    return tmp_data_dir / "202511@TESTHOST.sqlite"
