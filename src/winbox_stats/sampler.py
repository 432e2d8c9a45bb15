"""Instantaneous CPU, RAM and disk utilization readings via psutil.

Every reading is a percentage in [0, 100]. Disk readings are taken per
mounted partition; a partition that cannot be queried or reports no
capacity is skipped without affecting the others.
"""

import time
from typing import Any, Optional

import psutil

from .naming import mount_label
from . import log

CPU_LABEL = "CPU"
RAM_LABEL = "RAM"

DEFAULT_CPU_SAMPLE_S = 0.75


def _clamp_percent(value: float) -> float:
    return min(max(float(value), 0.0), 100.0)


def _used_percent(total: float, available: float) -> float:
    return _clamp_percent((1.0 - (available / total)) * 100.0)


def sample_cpu_percent(delay_s: float = DEFAULT_CPU_SAMPLE_S) -> float:
    """Measure system-wide CPU usage over a short settling window.

    The first call only sets psutil's baseline counters; the second call
    returns the usage accumulated during the sleep in between.

    Args:
        delay_s: Seconds to wait between the two counter snapshots

    Returns:
        CPU usage percentage
    """
    psutil.cpu_percent(interval=None)
    time.sleep(delay_s)
    return _clamp_percent(psutil.cpu_percent(interval=None))


def sample_ram_percent(memory: Optional[Any] = None) -> float:
    """Used memory percentage, computed from total and available memory.

    Args:
        memory: Object with ``total`` and ``available`` attributes
            (defaults to psutil.virtual_memory())

    Returns:
        Used RAM percentage, or 0.0 when total memory is not positive
    """
    if memory is None:
        memory = psutil.virtual_memory()
    total = float(memory.total)
    if total <= 0:
        return 0.0
    return _used_percent(total, float(memory.available))


def sample_disk_percent(usage: Any) -> Optional[float]:
    """Used space percentage from a psutil disk usage snapshot.

    Returns None when the mount reports no capacity.
    """
    total = float(usage.total)
    if total <= 0:
        return None
    return _used_percent(total, float(usage.free))


def sample_disks() -> dict[str, float]:
    """Sample every mounted partition.

    Returns:
        Dict mapping mount label to used percentage, in partition order
    """
    results: dict[str, float] = {}

    for partition in psutil.disk_partitions():
        mount_point = partition.mountpoint
        try:
            usage = psutil.disk_usage(mount_point)
        except OSError as e:
            log.debug(f"Skipping mount {mount_point}: {e}")
            continue

        percent = sample_disk_percent(usage)
        if percent is None:
            log.debug(f"Skipping mount {mount_point}: no capacity reported")
            continue

        label = mount_label(mount_point)
        if label in results:
            log.debug(f"Skipping mount {mount_point}: label {label} already sampled")
            continue

        results[label] = percent

    return results


def collect_samples(cpu_delay_s: float = DEFAULT_CPU_SAMPLE_S) -> dict[str, float]:
    """Take one reading of every metric.

    Returns:
        Dict of metric label to percentage: CPU, RAM, then one entry per disk
    """
    samples = {
        CPU_LABEL: sample_cpu_percent(cpu_delay_s),
        RAM_LABEL: sample_ram_percent(),
    }
    samples.update(sample_disks())
    return samples
