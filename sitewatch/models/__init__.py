"""Domain models shared by the monitor services."""
from .log_entry import LogEntry, LogStatus
from .monitor_state import AlertPhase, MonitorState
from .notification import Notification, NotificationKind

__all__ = [
    "LogEntry",
    "LogStatus",
    "AlertPhase",
    "MonitorState",
    "Notification",
    "NotificationKind",
]
