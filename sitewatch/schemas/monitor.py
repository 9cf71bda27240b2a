"""Monitor configuration schema."""
import re
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator

# Monitor names become directory names under the log root
MONITOR_NAME_PATTERN = r"^[A-Za-z0-9_-]+$"

_NAME_RE = re.compile(MONITOR_NAME_PATTERN)


def is_valid_monitor_name(name: str) -> bool:
    """Check that a monitor name is non-empty and safe to use as a path segment."""
    return bool(name) and len(name) <= 255 and _NAME_RE.match(name) is not None


class MonitorConfig(BaseModel):
    """Validated, immutable configuration for one monitored URL."""
    name: str = Field(..., min_length=1, max_length=255, pattern=MONITOR_NAME_PATTERN)
    url: str = Field(..., min_length=1)
    recipients: str = ""  # Comma-separated list, passed through to the notifier
    check_interval: float = Field(default=3, gt=0)  # seconds
    failure_threshold: int = Field(default=4, ge=1)
    request_timeout: float = Field(default=10, gt=0)  # seconds
    
    class Config:
        frozen = True
    
    @field_validator("url")
    @classmethod
    def _validate_url(cls, value: str) -> str:
        value = value.strip()
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https"):
            raise ValueError("URL must use the http or https scheme")
        if not parsed.netloc or not parsed.hostname:
            raise ValueError("URL must be absolute and include a host")
        return value
