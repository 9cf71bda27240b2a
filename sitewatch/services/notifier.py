"""Notifier service - delivers DOWN/RECOVERED notifications over email and webhook."""
import logging
from typing import List, Optional, Protocol

import httpx

from ..models import Notification
from .email_sender import EmailConfig, EmailSenderService, email_sender_service

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Delivery boundary called by the monitor loop. Returns True when delivered."""

    async def notify(self, notification: Notification) -> bool:
        ...


class EmailNotifier:
    """Sends the notification subject and body as a plain-text email."""

    def __init__(self, config: EmailConfig, sender: Optional[EmailSenderService] = None):
        self.config = config
        self.sender = sender or email_sender_service

    async def notify(self, notification: Notification) -> bool:
        return await self.sender.send_email(self.config, notification.subject, notification.body)


class WebhookNotifier:
    """POSTs the structured notification payload as JSON."""

    def __init__(
        self,
        url: str,
        timeout: float = 10,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.transport = transport

    async def notify(self, notification: Notification) -> bool:
        payload = notification.to_payload()
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.url, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Failed to send webhook: {type(e).__name__}: {e}")
            return False

        if response.status_code < 400:
            logger.info(f"Webhook sent: {payload['event']} for {payload['url']}")
            return True
        logger.warning(f"Webhook returned {response.status_code}")
        return False


class NotifierService:
    """Fans a notification out to every configured channel.

    Delivery counts as successful when at least one channel accepted it.
    """

    def __init__(self, channels: Optional[List[Notifier]] = None):
        self.channels: List[Notifier] = list(channels or [])

    async def notify(self, notification: Notification) -> bool:
        if not self.channels:
            logger.warning(f"No notification channel configured, dropping: {notification.subject}")
            return False

        delivered = False
        for channel in self.channels:
            try:
                if await channel.notify(notification):
                    delivered = True
            except Exception as e:
                logger.error(f"{type(channel).__name__} failed: {type(e).__name__}: {e}")
        return delivered


def build_notifier(email_config: Optional[EmailConfig], webhook_url: Optional[str]) -> NotifierService:
    """Build a NotifierService from the configured email and webhook settings."""
    channels: List[Notifier] = []
    if email_config and email_sender_service.is_configured(email_config):
        channels.append(EmailNotifier(email_config))
    if webhook_url:
        channels.append(WebhookNotifier(webhook_url))
    return NotifierService(channels)
