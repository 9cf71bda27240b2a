"""Uptime report schema."""
from typing import Optional

from pydantic import BaseModel, computed_field

# (minimum uptime percent, label, description), checked in order
UPTIME_RATINGS = [
    (99.99, "EXCELLENT", "Four nines availability (99.99%+)"),
    (99.9, "GREAT", "Three nines availability (99.9%+)"),
    (99.0, "GOOD", "Two nines availability (99%+)"),
    (95.0, "FAIR", "Below industry standard (95%+)"),
]


class UptimeStats(BaseModel):
    """Aggregated check counts for one monitor."""
    monitor_name: str
    total: int = 0
    success: int = 0
    fail: int = 0
    uptime_percent: Optional[float] = None  # None when there is no check data

    @computed_field
    @property
    def has_data(self) -> bool:
        return self.total > 0

    @computed_field
    @property
    def rating(self) -> Optional[str]:
        """Availability label such as GREAT or POOR, None without data."""
        return rate_uptime(self.uptime_percent)[0] if self.has_data else None

    @computed_field
    @property
    def rating_description(self) -> Optional[str]:
        return rate_uptime(self.uptime_percent)[1] if self.has_data else None


def rate_uptime(uptime_percent: Optional[float]) -> tuple[str, str]:
    """Map an uptime percentage to a (label, description) pair."""
    if uptime_percent is None:
        return ("UNKNOWN", "No check data")
    for minimum, label, description in UPTIME_RATINGS:
        if uptime_percent >= minimum:
            return (label, description)
    return ("POOR", "Significant downtime detected")
