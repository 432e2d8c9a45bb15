"""Matplotlib-based PNG chart generation from scope files.

Each metric table becomes one 1600x900 chart. The Y axis is fixed to
0-100 since every metric is a percentage. The X axis covers the span of
the data, with a vertical gridline at midnight of each calendar day of
the month the data starts in.
"""

import calendar
import sqlite3
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend for file rendering
import matplotlib.pyplot as plt
import matplotlib.dates as mdates

from .db import get_connection
from .env import get_config
from .naming import DRIVE_SUFFIX, SCOPE_SUFFIX
from .sampler import CPU_LABEL, RAM_LABEL
from .schema import PerMetricScope, list_tables, parse_scope_stem, pick_metric_table
from .series import DataPoint, from_epoch, read_points, to_epoch
from . import log

CHART_WIDTH = 1600
CHART_HEIGHT = 900
CHART_DPI = 100

Y_MIN = 0.0
Y_MAX = 100.0

# Padding applied when all points share one instant
SINGLE_INSTANT_PAD_S = 1800


@dataclass(frozen=True)
class ChartStyle:
    """Colors and font sizes for chart rendering."""

    background: str = "ffffff"
    text: str = "000000"
    grid: str = "dcdcdc"  # RGB(220, 220, 220)
    line: str = "0000ff"
    title_size: int = 28
    axis_desc_size: int = 22
    label_size: int = 16


DEFAULT_STYLE = ChartStyle()


@dataclass
class MonthGrid:
    """Calendar geometry for the month containing the first data point.

    Attributes:
        year: Calendar year of the first point
        month: Calendar month of the first point (1-12)
        days_in_month: Number of days in that month
        gridlines: Epoch seconds of midnight on days 2..days_in_month,
            limited to the data's time span
    """
    year: int
    month: int
    days_in_month: int
    gridlines: list[int] = field(default_factory=list)


def days_in_month(year: int, month: int) -> int:
    """Number of days in a month (leap years included)."""
    return calendar.monthrange(year, month)[1]


def month_grid(first_ts: int, last_ts: int) -> MonthGrid:
    """Compute day gridlines for a data span.

    Args:
        first_ts: Epoch seconds of the first point
        last_ts: Epoch seconds of the last point

    Returns:
        MonthGrid for the month of first_ts
    """
    first = from_epoch(first_ts)
    last_day = days_in_month(first.year, first.month)

    gridlines = []
    for day in range(2, last_day + 1):
        x = to_epoch(datetime(first.year, first.month, day))
        if first_ts <= x <= last_ts:
            gridlines.append(x)

    return MonthGrid(
        year=first.year,
        month=first.month,
        days_in_month=last_day,
        gridlines=gridlines,
    )


def y_label(metric: str) -> str:
    """Axis description for a metric label."""
    if metric.upper() == RAM_LABEL:
        return "RAM % Usage"
    if metric.upper() == CPU_LABEL:
        return "CPU % Usage"
    if metric.upper().endswith(DRIVE_SUFFIX.upper()):
        return "HDD % Usage"
    return "Value"


def render_series(
    out_path: Path,
    period: str,
    host: str,
    metric: str,
    points: list[DataPoint],
    style: ChartStyle = DEFAULT_STYLE,
) -> bool:
    """Render one metric as a PNG line chart.

    Args:
        out_path: Where to write the PNG
        period: Scope period, used in the title
        host: Scope host, used in the title
        metric: Metric label, used in the title and Y axis description
        points: Points ordered by time
        style: Colors and font sizes

    Returns:
        True if an image was written, False if there were no points

    Raises:
        OSError: If the image cannot be written
    """
    if not points:
        return False

    min_x = points[0].ts
    max_x = points[-1].ts
    grid = month_grid(min_x, max_x)

    x_start, x_end = from_epoch(min_x), from_epoch(max_x)
    if min_x == max_x:
        pad = timedelta(seconds=SINGLE_INSTANT_PAD_S)
        x_start, x_end = x_start - pad, x_end + pad

    fig = plt.figure(
        figsize=(CHART_WIDTH / CHART_DPI, CHART_HEIGHT / CHART_DPI),
        dpi=CHART_DPI,
    )

    try:
        fig.patch.set_facecolor(f"#{style.background}")
        # Reserved margins for tick labels and axis descriptions
        fig.subplots_adjust(left=0.07, right=0.98, bottom=0.1, top=0.92)
        ax = fig.add_subplot(1, 1, 1)
        ax.set_facecolor(f"#{style.background}")

        ax.set_xlim(x_start, x_end)
        ax.set_ylim(Y_MIN, Y_MAX)
        ax.set_yticks([Y_MIN + i * (Y_MAX - Y_MIN) / 10 for i in range(11)])

        # One vertical line per day, no text inside the plot area
        day_lines = [from_epoch(x) for x in grid.gridlines]
        for x in day_lines:
            ax.axvline(x, color=f"#{style.grid}", linewidth=1, zorder=0)

        ax.set_xticks(day_lines if day_lines else [x_start, x_end])
        ax.xaxis.set_major_formatter(mdates.DateFormatter('%d'))

        ax.plot(
            [from_epoch(p.ts) for p in points],
            [p.value for p in points],
            color=f"#{style.line}",
            linewidth=1.5,
        )

        ax.set_title(f"{period} {host} {metric}", fontsize=style.title_size, color=f"#{style.text}")
        ax.set_xlabel("Date", fontsize=style.axis_desc_size, color=f"#{style.text}")
        ax.set_ylabel(y_label(metric), fontsize=style.axis_desc_size, color=f"#{style.text}")
        ax.tick_params(labelsize=style.label_size, colors=f"#{style.text}")

        fig.savefig(out_path, format="png", dpi=CHART_DPI, facecolor=fig.get_facecolor())

    finally:
        # Ensure figure is closed to prevent memory leaks
        plt.close(fig)

    log.debug(f"Generated chart: {out_path}")
    return True


def render_scope_file(db_path: Path) -> list[Path]:
    """Render every chart for one scope file.

    Per-metric scopes yield one PNG next to the database with the same
    stem. Monthly (and unrecognized) scopes yield one PNG per table with
    data, named "<stem>@<table>.png".

    Returns:
        Paths of the images written

    Raises:
        sqlite3.Error: If the scope cannot be read
        OSError: If an image cannot be written
    """
    db_path = Path(db_path)
    scope = parse_scope_stem(db_path.stem)
    generated: list[Path] = []

    with get_connection(db_path, readonly=True) as conn:
        tables = list_tables(conn)
        if not tables:
            log.debug(f"No tables in {db_path.name}")
            return generated

        if isinstance(scope, PerMetricScope):
            table = pick_metric_table(tables)
            points = read_points(conn, table)
            out_path = db_path.with_suffix(".png")
            if render_series(out_path, scope.period, scope.host, scope.metric, points):
                generated.append(out_path)
            return generated

        for table in tables:
            points = read_points(conn, table)
            if not points:
                continue
            out_path = db_path.with_name(f"{db_path.stem}@{table}.png")
            render_series(out_path, scope.period, scope.host, table, points)
            generated.append(out_path)

    return generated


def find_scope_files(directory: Path) -> list[Path]:
    """Scope files directly inside a directory, sorted by name."""
    return sorted(
        p for p in Path(directory).iterdir()
        if p.is_file() and p.suffix.lower() == SCOPE_SUFFIX
    )


def render_all(directory: Optional[Path] = None) -> list[Path]:
    """Render charts for every scope file in a directory (non-recursive).

    A scope that cannot be read, or whose timestamps fall outside the
    representable date range, is logged and skipped; the rest are still
    rendered. Image write errors propagate.

    Args:
        directory: Directory to scan (defaults to the configured data dir)

    Returns:
        Paths of all images written
    """
    if directory is None:
        directory = get_config().data_dir

    generated: list[Path] = []
    for db_path in find_scope_files(directory):
        try:
            generated.extend(render_scope_file(db_path))
        except (sqlite3.Error, ValueError, OverflowError) as e:
            log.warn(f"Skipping {db_path.name}: {e}")
            continue

    log.debug(f"Rendered {len(generated)} charts from {directory}")
    return generated
