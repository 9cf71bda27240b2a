from __future__ import annotations

import json
from datetime import datetime, timezone

import httpx
import pytest

from sitewatch.models import Notification, NotificationKind
from sitewatch.services.email_sender import EmailConfig, EmailSenderService, parse_recipients
from sitewatch.services.notifier import EmailNotifier, NotifierService, WebhookNotifier, build_notifier

URL = "https://example.com/"
WHEN = datetime(2024, 5, 1, 12, 30, 0, tzinfo=timezone.utc)


def _down(count: int = 4) -> Notification:
    return Notification(kind=NotificationKind.DOWN, url=URL, timestamp=WHEN, count=count)


def _recovered(count: int = 6) -> Notification:
    return Notification(kind=NotificationKind.RECOVERED, url=URL, timestamp=WHEN, count=count)


class _FixedChannel:
    def __init__(self, result: bool = True, error: Exception | None = None):
        self.result = result
        self.error = error
        self.calls = 0

    async def notify(self, notification: Notification) -> bool:
        self.calls += 1
        if self.error:
            raise self.error
        return self.result


def test_down_subject_and_body() -> None:
    n = _down()
    assert n.subject == f"[DOWN] {URL} IS DOWN!"
    assert "Detected at: 2024-05-01 12:30:00 UTC" in n.body
    assert "Consecutive failures: 4" in n.body


def test_recovered_subject_and_body() -> None:
    n = _recovered()
    assert n.subject == f"[RECOVERED] {URL} is back online"
    assert "Recovered at: 2024-05-01 12:30:00 UTC" in n.body
    assert "Total failed checks: 6" in n.body


def test_payload_shape() -> None:
    assert _down().to_payload() == {
        "event": "down",
        "url": URL,
        "timestamp": "2024-05-01T12:30:00+00:00",
        "count": 4,
        "subject": f"[DOWN] {URL} IS DOWN!",
    }


def test_parse_recipients() -> None:
    assert parse_recipients(" a@x.com, ,b@y.org ") == ["a@x.com", "b@y.org"]
    assert parse_recipients("") == []


@pytest.mark.asyncio
async def test_webhook_posts_json_payload() -> None:
    seen: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(204)

    notifier = WebhookNotifier("https://hooks.example.com/alert", transport=httpx.MockTransport(handler))

    assert await notifier.notify(_recovered()) is True
    assert seen == [_recovered().to_payload()]


@pytest.mark.asyncio
async def test_webhook_error_status_is_not_delivered() -> None:
    notifier = WebhookNotifier(
        "https://hooks.example.com/alert",
        transport=httpx.MockTransport(lambda request: httpx.Response(500)),
    )
    assert await notifier.notify(_down()) is False


@pytest.mark.asyncio
async def test_webhook_connection_error_is_not_delivered(closed_port: int) -> None:
    notifier = WebhookNotifier(f"http://127.0.0.1:{closed_port}/hook", timeout=2)
    assert await notifier.notify(_down()) is False


@pytest.mark.asyncio
async def test_email_unconfigured_returns_false() -> None:
    sender = EmailSenderService()
    assert await sender.send_email(EmailConfig(host=""), "subject", "body") is False
    assert await sender.send_email(EmailConfig(host="smtp.example.com", to_address=" , "), "s", "b") is False


@pytest.mark.asyncio
async def test_email_unreachable_server_returns_false(closed_port: int) -> None:
    config = EmailConfig(host="127.0.0.1", port=closed_port, use_tls=False,
                         to_address="ops@example.com", timeout=2)
    assert await EmailSenderService().send_email(config, "subject", "body") is False


@pytest.mark.asyncio
async def test_email_notifier_sends_subject_and_body() -> None:
    calls = []

    class _Sender(EmailSenderService):
        async def send_email(self, config, subject, body):
            calls.append((config.to_address, subject, body))
            return True

    config = EmailConfig(host="smtp.example.com", to_address="ops@example.com")
    notifier = EmailNotifier(config, sender=_Sender())

    assert await notifier.notify(_down()) is True
    assert calls == [("ops@example.com", _down().subject, _down().body)]


def test_email_message_headers() -> None:
    config = EmailConfig(host="smtp.example.com", username="bot@example.com",
                         to_address="a@example.com, b@example.com")
    msg = EmailSenderService()._build_message(config, "[DOWN] x", "body")
    assert msg["Subject"] == "[DOWN] x"
    assert msg["From"] == "bot@example.com"
    assert msg["To"] == "a@example.com, b@example.com"


@pytest.mark.asyncio
async def test_service_succeeds_if_any_channel_delivers() -> None:
    failing = _FixedChannel(error=RuntimeError("down"))
    working = _FixedChannel(result=True)

    assert await NotifierService([failing, working]).notify(_down()) is True
    assert failing.calls == working.calls == 1


@pytest.mark.asyncio
async def test_service_without_channels_is_not_delivered() -> None:
    assert await NotifierService().notify(_down()) is False


@pytest.mark.asyncio
async def test_service_all_channels_failing() -> None:
    assert await NotifierService([_FixedChannel(result=False)]).notify(_down()) is False


def test_build_notifier_selects_configured_channels() -> None:
    email = EmailConfig(host="smtp.example.com", to_address="ops@example.com")

    both = build_notifier(email, "https://hooks.example.com/alert")
    assert [type(c) for c in both.channels] == [EmailNotifier, WebhookNotifier]

    assert build_notifier(EmailConfig(host=""), None).channels == []
