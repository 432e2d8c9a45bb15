"""Integration test fixtures."""

from datetime import datetime, timedelta

import pytest

from winbox_stats.collect import run_collect


@pytest.fixture
def month_of_ticks(configured_env, sample_readings):
    """Collect every six hours through November 2025 into the data dir."""
    start = datetime(2025, 11, 1, 0, 0, 0)
    results = []
    for i in range(30 * 4):
        now = start + timedelta(hours=6 * i)
        readings = {label: (value + i) % 100 for label, value in sample_readings.items()}
        results.append(run_collect(now=now, samples=readings))
    return results
