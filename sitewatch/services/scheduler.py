"""Scheduler service - runs the periodic check cycle for one monitor.

Each cycle is strictly sequential: probe, alert policy, notify, log, sleep.
A slow probe delays the next cycle; checks never overlap. The stop event is
watched during the probe and the sleep so shutdown does not wait out a full
request timeout or check interval.
"""
import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional

from ..models import LogStatus, MonitorState, Notification, NotificationKind
from ..schemas import MonitorConfig
from .alerter import AlertPolicy
from .checker import CheckerService, CheckOutcome, checker_service
from .log_store import LogStore
from .notifier import Notifier

logger = logging.getLogger(__name__)


class MonitorLoop:
    """Drives the check cycle for a single monitored URL."""

    def __init__(
        self,
        config: MonitorConfig,
        log_store: LogStore,
        notifier: Notifier,
        checker: Optional[CheckerService] = None,
    ):
        self.config = config
        self.log_store = log_store
        self.notifier = notifier
        self.checker = checker or checker_service
        self.policy = AlertPolicy(config.url, config.failure_threshold)
        self.state = MonitorState()
        self._stop_event = asyncio.Event()

    @property
    def stopping(self) -> bool:
        return self._stop_event.is_set()

    def stop(self):
        """Request shutdown. Safe to call from a signal handler."""
        if not self._stop_event.is_set():
            logger.debug(f"Stop requested for {self.config.name}")
        self._stop_event.set()

    async def run(self):
        """Run until stop() is called.

        Writes the startup and shutdown INFO entries. LogWriteError is not
        handled here: without durable logs the monitor must not keep running.
        """
        self._log(LogStatus.INFO, f"Monitoring started for {self.config.url}")
        logger.info(f"[STARTUP] Monitoring {self.config.url}")

        while not self.stopping:
            await self.run_once()
            await self._sleep(self.config.check_interval)

        self._log(LogStatus.INFO, "Monitoring stopped")
        logger.info(f"[SHUTDOWN] Monitoring stopped for {self.config.url}")

    async def run_once(self) -> Optional[CheckOutcome]:
        """Run one check cycle. Returns None if a stop interrupted the probe."""
        outcome = await self._probe()
        if outcome is None:
            return None

        notification = self.policy.evaluate(self.state, outcome)
        if notification is not None:
            await self._notify(notification)

        self._record(outcome)
        return outcome

    async def _probe(self) -> Optional[CheckOutcome]:
        """Probe the URL, abandoning the request if a stop arrives first."""
        probe = asyncio.ensure_future(self.checker.check(self.config.url, self.config.request_timeout))
        stop_wait = asyncio.ensure_future(self._stop_event.wait())
        try:
            await asyncio.wait({probe, stop_wait}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            stop_wait.cancel()

        if probe.done():
            return probe.result()

        probe.cancel()
        try:
            await probe
        except asyncio.CancelledError:
            pass
        return None

    async def _notify(self, notification: Notification):
        if notification.kind == NotificationKind.DOWN:
            logger.warning(
                f"[ALERT] Sending down notification after {notification.count} consecutive failures"
            )
        else:
            logger.info(
                f"[RECOVERY] Sending recovery notification (was down for {notification.count} checks)"
            )

        try:
            delivered = await self.notifier.notify(notification)
        except Exception as e:
            logger.error(f"Notifier raised {type(e).__name__}: {e}")
            delivered = False

        if not delivered:
            logger.warning(f"Notification delivery failed: {notification.subject}")
            # Stamped with the check time, like the cycle's OK/FAIL line
            self._log(
                LogStatus.INFO,
                f"Notification delivery failed: {notification.subject}",
                notification.timestamp,
            )

    def _record(self, outcome: CheckOutcome):
        url = self.config.url
        if outcome.success:
            message = f"{url} is up and running"
            logger.info(f"[OK] {message}")
            self._log(LogStatus.OK, message, outcome.checked_at)
            return

        message = f"{url} IS DOWN! (Failure #{self.state.consecutive_failures})"
        if outcome.details:
            message = f"{message} - {outcome.details}"
        logger.warning(f"[FAIL] {message}")
        self._log(LogStatus.FAIL, message, outcome.checked_at)

    def _log(self, status: LogStatus, message: str, timestamp: Optional[datetime] = None):
        self.log_store.append(
            self.config.name,
            status,
            message,
            timestamp or datetime.now(timezone.utc),
        )

    async def _sleep(self, seconds: float):
        """Sleep between cycles, returning early when stop() is called."""
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            pass
