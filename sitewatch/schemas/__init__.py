"""Pydantic schemas for configuration and reports."""
from .monitor import MonitorConfig, MONITOR_NAME_PATTERN, is_valid_monitor_name
from .status import UptimeStats, rate_uptime

__all__ = [
    "MonitorConfig",
    "MONITOR_NAME_PATTERN",
    "is_valid_monitor_name",
    "UptimeStats",
    "rate_uptime",
]
