"""Environment variable parsing and configuration."""

import os
from pathlib import Path
from typing import Optional

# Acceptable CPU settling window in milliseconds
CPU_SAMPLE_MIN_MS = 700
CPU_SAMPLE_MAX_MS = 800


def get_str(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get string env var."""
    return os.environ.get(key, default)


def get_int(key: str, default: int) -> int:
    """Get integer env var."""
    val = os.environ.get(key)
    if val is None:
        return default
    try:
        return int(val)
    except ValueError:
        return default


def get_bool(key: str, default: bool = False) -> bool:
    """Get boolean env var (0/1, true/false, yes/no)."""
    val = os.environ.get(key, "").lower()
    if not val:
        return default
    return val in ("1", "true", "yes", "on")


def get_path(key: str, default: str) -> Path:
    """Get path env var, expanding user and making absolute."""
    val = os.environ.get(key, default)
    return Path(val).expanduser().resolve()


class Config:
    """Configuration loaded from environment variables."""

    def __init__(self):
        self.debug = get_bool("WINBOX_DEBUG", False)

        # Directory holding the scope files (collect, graph and export)
        self.data_dir = get_path("WINBOX_DATA_DIR", ".")

        # None = ask the OS
        self.hostname = get_str("WINBOX_HOSTNAME") or None

        cpu_ms = get_int("WINBOX_CPU_SAMPLE_MS", 750)
        self.cpu_sample_ms = min(max(cpu_ms, CPU_SAMPLE_MIN_MS), CPU_SAMPLE_MAX_MS)

    @property
    def cpu_sample_s(self) -> float:
        return self.cpu_sample_ms / 1000


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config
