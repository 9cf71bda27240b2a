"""Log entry model - one line of the dated log trail."""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class LogStatus(str, Enum):
    """Status tag written at the start of every log line."""
    OK = "OK"
    FAIL = "FAIL"
    INFO = "INFO"


@dataclass(frozen=True)
class LogEntry:
    """A status-tagged, timestamped log message."""
    status: LogStatus
    timestamp: datetime
    message: str
