"""Notification model - structured DOWN/RECOVERED alert payload."""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S UTC"


class NotificationKind(str, Enum):
    DOWN = "down"
    RECOVERED = "recovered"


@dataclass(frozen=True)
class Notification:
    """Alert produced by the alert policy.
    
    For DOWN, count is the number of consecutive failures at the threshold
    crossing. For RECOVERED, count is the total failed checks of the episode.
    """
    kind: NotificationKind
    url: str
    timestamp: datetime
    count: int
    
    @property
    def subject(self) -> str:
        if self.kind == NotificationKind.DOWN:
            return f"[DOWN] {self.url} IS DOWN!"
        return f"[RECOVERED] {self.url} is back online"
    
    @property
    def body(self) -> str:
        time_str = self.timestamp.strftime(TIMESTAMP_FORMAT)
        if self.kind == NotificationKind.DOWN:
            lines = [
                f"Alert! {self.url} is not responding.",
                "",
                f"Detected at: {time_str}",
                f"Consecutive failures: {self.count}",
            ]
        else:
            lines = [
                f"Good news! {self.url} is back up and running.",
                "",
                f"Recovered at: {time_str}",
                f"Total failed checks: {self.count}",
            ]
        lines.append("")
        lines.append("--")
        lines.append("sitewatch monitoring")
        return "\n".join(lines)
    
    def to_payload(self) -> dict:
        """Structured form used by the webhook channel."""
        return {
            "event": self.kind.value,
            "url": self.url,
            "timestamp": self.timestamp.isoformat(),
            "count": self.count,
            "subject": self.subject,
        }
