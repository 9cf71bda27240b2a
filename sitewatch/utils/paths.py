"""Log path utility functions."""
import os
from datetime import datetime, timezone
from pathlib import Path


def to_utc(timestamp: datetime) -> datetime:
    """Normalize a timestamp to UTC. Naive values are taken to be UTC already."""
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)


def monitor_log_dir(log_root: Path, monitor_name: str) -> Path:
    """Root of one monitor's dated log tree."""
    return Path(log_root) / monitor_name


def log_dir_path(log_root: Path, monitor_name: str, timestamp: datetime) -> Path:
    """Directory holding the log files of the timestamp's month.
    
    Returns <log_root>/<monitor_name>/<YYYY>/<MM>, using the UTC date.
    """
    ts = to_utc(timestamp)
    return monitor_log_dir(log_root, monitor_name) / f"{ts:%Y}" / f"{ts:%m}"


def log_file_path(log_root: Path, monitor_name: str, timestamp: datetime) -> Path:
    """Per-day log file: <log_root>/<monitor_name>/<YYYY>/<MM>/<YYYY-MM-DD>.log."""
    ts = to_utc(timestamp)
    return log_dir_path(log_root, monitor_name, ts) / f"{ts:%Y-%m-%d}.log"


def ensure_directory(path: Path) -> Path:
    """Create a directory and its parents. An existing directory is not an error."""
    os.makedirs(path, exist_ok=True)
    return Path(path)
