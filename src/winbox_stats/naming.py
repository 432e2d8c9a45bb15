"""Canonical names for hosts, months, scope files and mount points.

Everything the collector writes is keyed by names derived here:

- Scope files: "{YYYYMM}@{HOST}.sqlite"
- Metric tables: "CPU", "RAM" and "<MOUNT>_Drive"
- Row timestamps: "YYYY-MM-DD HH:MM:SS" in local wall-clock time
"""

import re
import socket
from datetime import datetime
from typing import Optional

UNKNOWN_HOST = "UNKNOWN"
SCOPE_SUFFIX = ".sqlite"
DRIVE_SUFFIX = "_Drive"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# "C:", "c:\\Users", "D:/data"
_DRIVE_LETTER_RE = re.compile(r"^[A-Za-z]:")
_PATH_SEP_RE = re.compile(r"[/\\]")


def host_label(hostname: Optional[str] = None) -> str:
    """Get the uppercased host name used in scope filenames.

    Args:
        hostname: Explicit host name; the OS is asked when None

    Returns:
        Uppercased host name, or "UNKNOWN" if it cannot be determined
    """
    if hostname is None:
        try:
            hostname = socket.gethostname()
        except OSError:
            hostname = ""
    hostname = hostname.strip()
    return hostname.upper() if hostname else UNKNOWN_HOST


def period_prefix(now: datetime) -> str:
    """Year and zero-padded month, e.g. "202511"."""
    return f"{now.year:04d}{now.month:02d}"


def timestamp_text(now: datetime) -> str:
    return now.strftime(TIMESTAMP_FORMAT)


def scope_filename(period: str, host: str) -> str:
    """Filename of the monthly scope for a host."""
    return f"{period}@{host}{SCOPE_SUFFIX}"


def mount_label(mount_point: str) -> str:
    """Derive the metric table name for a mount point.

    Drive-letter mounts collapse to the letter ("c:\\" -> "C_Drive").
    Anything else uses its last path segment ("/mnt/backup" ->
    "BACKUP_Drive"). Mounts with no usable segment, such as "/" or "",
    become "Disk_Drive".
    """
    if _DRIVE_LETTER_RE.match(mount_point):
        return f"{mount_point[0].upper()}{DRIVE_SUFFIX}"

    segments = [s for s in _PATH_SEP_RE.split(mount_point) if s]
    name = segments[-1].replace(":", "").upper() if segments else ""
    return f"{name or 'Disk'}{DRIVE_SUFFIX}"
