"""Uptime service - aggregates OK/FAIL counts from a monitor's log files."""
import logging
from pathlib import Path
from typing import Iterator, List

from ..exceptions import InvalidMonitorNameError, MonitorNotFoundError
from ..models import LogStatus
from ..schemas import UptimeStats, is_valid_monitor_name
from ..utils.paths import monitor_log_dir
from .log_store import parse_log_line

logger = logging.getLogger(__name__)


class UptimeReporter:
    """Read-only reporter over the log root written by LogStore.

    Files are opened for reading only and never locked, so reports can run
    while a monitor is still writing.
    """

    def __init__(self, log_root: Path):
        self.log_root = Path(log_root)

    def list_monitors(self) -> List[str]:
        """Names of monitors with a log directory, sorted."""
        if not self.log_root.is_dir():
            return []
        return sorted(p.name for p in self.log_root.iterdir() if p.is_dir())

    def report(self, monitor_name: str) -> UptimeStats:
        """Count OK and FAIL entries across every log file of a monitor.

        Raises InvalidMonitorNameError for unsafe names and
        MonitorNotFoundError when the monitor has no log directory.
        INFO entries and malformed lines are not counted.
        """
        if not is_valid_monitor_name(monitor_name):
            raise InvalidMonitorNameError(monitor_name)

        log_dir = monitor_log_dir(self.log_root, monitor_name)
        if not log_dir.is_dir():
            raise MonitorNotFoundError(monitor_name, log_dir)

        success = 0
        fail = 0
        for line in self._iter_lines(log_dir):
            entry = parse_log_line(line)
            if entry is None:
                continue
            if entry.status == LogStatus.OK:
                success += 1
            elif entry.status == LogStatus.FAIL:
                fail += 1

        total = success + fail
        uptime_percent = round(100 * success / total, 4) if total else None

        return UptimeStats(
            monitor_name=monitor_name,
            total=total,
            success=success,
            fail=fail,
            uptime_percent=uptime_percent,
        )

    def _iter_lines(self, log_dir: Path) -> Iterator[str]:
        for path in sorted(log_dir.rglob("*.log")):
            if not path.is_file():
                continue
            try:
                # Undecodable bytes become replacement chars and fail to parse
                with open(path, "r", encoding="utf-8", errors="replace") as f:
                    for line in f:
                        yield line
            except OSError as e:
                logger.warning(f"Skipping unreadable log file {path}: {e}")
