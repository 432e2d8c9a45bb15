"""Command-line entry point.

    winbox-stats            take one sample of CPU, RAM and disks
    winbox-stats graph      render PNG charts for every scope file
    winbox-stats export     write JSON next to every per-metric scope
"""

import argparse
import sqlite3
from pathlib import Path
from typing import Optional, Sequence

from . import __version__
from .charts import render_all
from .collect import run_collect
from .env import get_config
from .export import export_all
from . import log


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="winbox-stats",
        description="Sample host CPU/RAM/disk usage into monthly SQLite files and graph them",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = p.add_subparsers(dest="command")
    sub.add_parser(
        "graph",
        help="Render PNG graphs from all *.sqlite files in the data directory",
    )
    export = sub.add_parser("export", help="Export per-metric *.sqlite files to JSON")
    export.add_argument(
        "directory", nargs="?", type=Path, default=None,
        help="Directory to walk (default: the data directory)",
    )
    return p.parse_args(argv)


def cmd_collect() -> int:
    try:
        result = run_collect()
    except (sqlite3.Error, OSError) as e:
        log.error(f"Failed to write sample into {get_config().data_dir}: {e}")
        return 1

    print(f"Wrote record into {result.scope_filename} at {result.timestamp}")
    return 0


def cmd_graph() -> int:
    try:
        render_all()
    except OSError as e:
        log.error(f"Failed to write chart: {e}")
        return 1
    return 0


def cmd_export(directory: Optional[Path]) -> int:
    if directory is None:
        directory = get_config().data_dir
    try:
        written = export_all(directory)
    except RuntimeError as e:
        log.error(str(e))
        return 1

    log.info(f"Exported {len(written)} files from {directory}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    if args.command == "graph":
        return cmd_graph()
    if args.command == "export":
        return cmd_export(args.directory)
    return cmd_collect()
