"""Fixtures for chart tests."""

import calendar
import struct
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from winbox_stats.series import DataPoint


def epoch(*args) -> int:
    """Epoch seconds for a civil time read as UTC."""
    return calendar.timegm(datetime(*args).timetuple())


def png_size(path: Path) -> tuple[int, int]:
    """Width and height from a PNG's IHDR chunk."""
    header = Path(path).read_bytes()[:24]
    assert header[:8] == b"\x89PNG\r\n\x1a\n"
    return struct.unpack(">II", header[16:24])


def hourly_points(start: datetime, hours: int, value=lambda i: float(i % 100)) -> list[DataPoint]:
    return [
        DataPoint(
            ts=calendar.timegm((start + timedelta(hours=i)).timetuple()),
            value=value(i),
        )
        for i in range(hours)
    ]


@pytest.fixture
def november_points():
    """Hourly points covering all of November 2025."""
    return hourly_points(datetime(2025, 11, 1, 0, 0, 0), 30 * 24)


@pytest.fixture
def short_points():
    """Six hourly points on 3 November 2025."""
    return hourly_points(datetime(2025, 11, 3, 8, 0, 0), 6, value=lambda i: 10.0 * i)
