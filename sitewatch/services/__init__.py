"""Services for probing, alerting, logging and reporting."""
from .checker import CheckerService, CheckOutcome
from .alerter import AlertPolicy
from .log_store import LogStore
from .notifier import NotifierService, EmailNotifier, WebhookNotifier
from .scheduler import MonitorLoop
from .uptime import UptimeReporter

__all__ = [
    "CheckerService",
    "CheckOutcome",
    "AlertPolicy",
    "LogStore",
    "NotifierService",
    "EmailNotifier",
    "WebhookNotifier",
    "MonitorLoop",
    "UptimeReporter",
]
