"""Application configuration from environment variables."""
import os
from pathlib import Path
from typing import Any, Optional

from pydantic_settings import BaseSettings

from .schemas import MonitorConfig
from .services.email_sender import EmailConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Monitor identity: name is the log namespace, url the probed address
    monitor_name: str = ""
    monitor_url: str = ""

    # Comma-separated alert recipients
    alert_email: str = ""

    # Seconds between checks
    check_interval: float = 3

    # Consecutive failures before a DOWN alert
    failure_threshold: int = 4

    # Seconds before a probe is abandoned
    request_timeout: float = 10

    # Base directory of the dated log trees
    log_root: str = "~/logs"

    log_level: str = "INFO"

    # Optional JSON webhook for alerts
    webhook_url: Optional[str] = None

    # SMTP transport for email alerts
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_username: str = ""
    smtp_password: str = ""
    smtp_use_tls: bool = True
    alert_email_from: str = ""

    class Config:
        env_prefix = ""
        case_sensitive = False
        env_file = ".env"
        extra = "ignore"


def get_log_root(settings: Settings, override: Optional[str] = None) -> Path:
    """Resolve the log root, expanding ~ and environment variables."""
    raw = override or settings.log_root
    return Path(os.path.expandvars(os.path.expanduser(raw)))


def build_monitor_config(settings: Settings, **overrides: Any) -> MonitorConfig:
    """Validate settings (plus non-None overrides) into a MonitorConfig.

    Raises pydantic.ValidationError on a bad URL, unsafe name, or
    non-positive interval, timeout or threshold.
    """
    values = {
        "name": settings.monitor_name,
        "url": settings.monitor_url,
        "recipients": settings.alert_email,
        "check_interval": settings.check_interval,
        "failure_threshold": settings.failure_threshold,
        "request_timeout": settings.request_timeout,
    }
    values.update({key: value for key, value in overrides.items() if value is not None})
    return MonitorConfig(**values)


def build_email_config(settings: Settings, recipients: str) -> EmailConfig:
    """SMTP settings for the email notifier."""
    return EmailConfig(
        host=settings.smtp_host,
        port=settings.smtp_port,
        username=settings.smtp_username,
        password=settings.smtp_password,
        use_tls=settings.smtp_use_tls,
        from_address=settings.alert_email_from,
        to_address=recipients,
    )
