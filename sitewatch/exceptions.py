"""Exception types raised by the monitor and the uptime reporter."""
from pathlib import Path


class SitewatchError(Exception):
    """Base class for sitewatch errors."""


class LogWriteError(SitewatchError):
    """A log entry could not be written. Fatal for the monitor loop."""
    
    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot write log file {path}: {reason}")


class MonitorNotFoundError(SitewatchError):
    """No log directory exists for the requested monitor."""
    
    def __init__(self, monitor_name: str, path: Path):
        self.monitor_name = monitor_name
        self.path = path
        super().__init__(f"No logs found for monitor '{monitor_name}'. Directory not found: {path}")


class InvalidMonitorNameError(SitewatchError):
    """Monitor name is empty or contains characters unsafe for a path."""
    
    def __init__(self, monitor_name: str):
        self.monitor_name = monitor_name
        if not monitor_name:
            message = "Monitor name cannot be empty"
        else:
            message = "Invalid monitor name. Use only letters, numbers, underscores, and hyphens"
        super().__init__(message)
