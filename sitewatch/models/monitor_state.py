"""Monitor state - consecutive failure tracking for one monitored URL."""
from dataclasses import dataclass
from enum import Enum


class AlertPhase(str, Enum):
    """Alert lifecycle phase derived from the monitor state."""
    HEALTHY = "healthy"
    DEGRADING = "degrading"
    DOWN_NOTIFIED = "down_notified"


@dataclass
class MonitorState:
    """Mutable state owned by a single monitor loop."""
    consecutive_failures: int = 0
    alert_sent: bool = False  # True only while down and notified
    
    @property
    def phase(self) -> AlertPhase:
        if self.alert_sent:
            return AlertPhase.DOWN_NOTIFIED
        if self.consecutive_failures > 0:
            return AlertPhase.DEGRADING
        return AlertPhase.HEALTHY
