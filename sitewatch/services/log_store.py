"""Log store service - append-only dated log files per monitor.

Layout: <log_root>/<monitor_name>/<YYYY>/<MM>/<YYYY-MM-DD>.log
Line format: [STATUS] YYYY-MM-DD HH:MM:SS - message

The file path is re-derived from the UTC date on every write and each entry
opens, appends and closes the file, so day rollover and external log rotation
need no special handling.
"""
import logging
import os
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from ..exceptions import LogWriteError
from ..models import LogEntry, LogStatus
from ..utils.paths import ensure_directory, log_dir_path, log_file_path, to_utc

logger = logging.getLogger(__name__)

LINE_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

LINE_PATTERN = re.compile(
    r"^\[(?P<status>OK|FAIL|INFO)\] "
    r"(?P<timestamp>\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}) - "
    r"(?P<message>.*)$"
)


def format_log_line(entry: LogEntry) -> str:
    """Render a log entry as one newline-terminated line."""
    timestamp = to_utc(entry.timestamp).strftime(LINE_TIMESTAMP_FORMAT)
    # One entry per line
    message = entry.message.replace("\r", " ").replace("\n", " ")
    return f"[{entry.status.value}] {timestamp} - {message}\n"


def parse_log_line(line: str) -> Optional[LogEntry]:
    """Parse one log line. Returns None for anything that is not a valid entry."""
    match = LINE_PATTERN.match(line.rstrip("\r\n"))
    if not match:
        return None
    try:
        timestamp = datetime.strptime(match.group("timestamp"), LINE_TIMESTAMP_FORMAT)
    except ValueError:
        return None
    return LogEntry(
        status=LogStatus(match.group("status")),
        timestamp=timestamp.replace(tzinfo=timezone.utc),
        message=match.group("message"),
    )


class LogStore:
    """Writes status-tagged entries to a monitor's dated log tree."""

    def __init__(self, log_root: Path):
        self.log_root = Path(log_root)

    def path_for(self, monitor_name: str, timestamp: datetime) -> Path:
        return log_file_path(self.log_root, monitor_name, timestamp)

    def ensure_log_dir(self, monitor_name: str, timestamp: datetime) -> Path:
        """Create the month directory for the timestamp if it is missing."""
        directory = log_dir_path(self.log_root, monitor_name, timestamp)
        try:
            return ensure_directory(directory)
        except OSError as e:
            raise LogWriteError(directory, str(e)) from e

    def append(
        self,
        monitor_name: str,
        status: LogStatus,
        message: str,
        timestamp: Optional[datetime] = None,
    ) -> LogEntry:
        """Append one entry and flush it to disk before returning.

        Raises LogWriteError when the directory cannot be created or the
        file cannot be written.
        """
        if timestamp is None:
            timestamp = datetime.now(timezone.utc)
        entry = LogEntry(status=LogStatus(status), timestamp=to_utc(timestamp), message=message)

        self.ensure_log_dir(monitor_name, entry.timestamp)
        path = self.path_for(monitor_name, entry.timestamp)
        line = format_log_line(entry)

        try:
            with open(path, "a", encoding="utf-8") as f:
                f.write(line)
                f.flush()
                try:
                    os.fsync(f.fileno())
                except OSError as e:
                    # Some filesystems do not support fsync; the flush already happened
                    logger.debug(f"fsync not supported for {path}: {e}")
        except OSError as e:
            raise LogWriteError(path, str(e)) from e

        return entry
