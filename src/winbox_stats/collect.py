"""One collection tick: sample every metric and append it to the scope."""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

from .db import append_sample, ensure_table, get_connection
from .env import get_config
from .naming import host_label, period_prefix, scope_filename, timestamp_text
from .sampler import collect_samples
from . import log


@dataclass
class CollectResult:
    """Outcome of a collection tick."""

    scope_filename: str
    path: Path
    timestamp: str
    samples: dict[str, float] = field(default_factory=dict)


def run_collect(
    data_dir: Optional[Path] = None,
    now: Optional[datetime] = None,
    host: Optional[str] = None,
    samples: Optional[dict[str, float]] = None,
) -> CollectResult:
    """Write one row per metric into the current month's scope.

    Args:
        data_dir: Directory holding scope files (defaults to config)
        now: Local wall-clock time of the tick (defaults to now)
        host: Host name (defaults to config override, then the OS)
        samples: Pre-taken readings keyed by metric label (defaults to
            a fresh reading of CPU, RAM and all disks)

    Returns:
        CollectResult describing what was written

    Raises:
        sqlite3.Error, OSError: If the scope cannot be opened or written
    """
    cfg = get_config()
    if data_dir is None:
        data_dir = cfg.data_dir
    if now is None:
        now = datetime.now()
    host = host_label(host if host is not None else cfg.hostname)

    ts = timestamp_text(now)
    filename = scope_filename(period_prefix(now), host)
    path = Path(data_dir) / filename

    if samples is None:
        samples = collect_samples(cfg.cpu_sample_s)

    with get_connection(path) as conn:
        for label, value in samples.items():
            ensure_table(conn, label)
            append_sample(conn, label, ts, value)

    log.debug(f"Wrote {len(samples)} samples to {path}")
    return CollectResult(scope_filename=filename, path=path, timestamp=ts, samples=dict(samples))
