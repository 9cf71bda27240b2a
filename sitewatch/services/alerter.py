"""Alerter service - decides when DOWN and RECOVERED notifications are due."""
import logging
from typing import Optional

from ..models import MonitorState, Notification, NotificationKind
from .checker import CheckOutcome

logger = logging.getLogger(__name__)


class AlertPolicy:
    """Failure/recovery state machine for one monitored URL.

    Phases (see MonitorState.phase):
    - healthy: no failures since the last success
    - degrading: failures below the threshold, no alert sent
    - down_notified: threshold reached and DOWN alert sent

    A DOWN notification fires exactly when the consecutive failure count
    reaches the threshold, once per down episode. A RECOVERED notification
    fires on the first success after a DOWN notification.
    """

    def __init__(self, url: str, failure_threshold: int):
        if failure_threshold < 1:
            raise ValueError("failure_threshold must be at least 1")
        self.url = url
        self.failure_threshold = failure_threshold

    def evaluate(self, state: MonitorState, outcome: CheckOutcome) -> Optional[Notification]:
        """Apply one probe outcome to state. Returns the notification to send, if any."""
        if outcome.success:
            return self._on_success(state, outcome)
        return self._on_failure(state, outcome)

    def _on_success(self, state: MonitorState, outcome: CheckOutcome) -> Optional[Notification]:
        failed_checks = state.consecutive_failures
        state.consecutive_failures = 0

        if not state.alert_sent:
            if failed_checks:
                logger.debug(f"{self.url} recovered after {failed_checks} failure(s) below threshold")
            return None

        state.alert_sent = False
        return Notification(
            kind=NotificationKind.RECOVERED,
            url=self.url,
            timestamp=outcome.checked_at,
            count=failed_checks,
        )

    def _on_failure(self, state: MonitorState, outcome: CheckOutcome) -> Optional[Notification]:
        state.consecutive_failures += 1

        if state.consecutive_failures == self.failure_threshold and not state.alert_sent:
            state.alert_sent = True
            return Notification(
                kind=NotificationKind.DOWN,
                url=self.url,
                timestamp=outcome.checked_at,
                count=state.consecutive_failures,
            )

        if state.consecutive_failures < self.failure_threshold:
            logger.debug(
                f"Alert suppressed for {self.url}: "
                f"{state.consecutive_failures}/{self.failure_threshold} failures"
            )
        # Past the threshold the DOWN alert has already gone out
        return None
