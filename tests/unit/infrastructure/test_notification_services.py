"""Tests for notification adapters."""

import pytest

from core.infrastructure.adapters.notifications.channel_router import ChannelRouterNotificationService
from core.infrastructure.adapters.notifications.mock_notification_service import MockNotificationService
from core.infrastructure.adapters.notifications.slack_notification_service import SlackNotificationService
from core.infrastructure.adapters.notifications.telegram_notification_service import TelegramNotificationService
from core.settings.modules.integrations_settings import SlackSettings, TelegramSettings


@pytest.mark.asyncio
async def test_mock_records_messages():
    service = MockNotificationService()

    assert await service.send("a@x.com", "hello", "email") is True
    await service.notify("sweep finished", severity=20)

    assert service.notifications_sent[0] == {
        "type": "message", "recipient": "a@x.com", "channel": "email", "message": "hello",
    }
    assert service.notifications_sent[1]["severity"] == 20


@pytest.mark.asyncio
async def test_router_dispatches_by_channel():
    email = MockNotificationService()
    slack = MockNotificationService()
    router = ChannelRouterNotificationService({"email": email})
    router.register("slack", slack)

    assert await router.send("a@x.com", "hi", "email") is True
    assert await router.send("#support", "hi", "slack") is True
    assert await router.send("+100", "hi", "sms") is False

    assert len(email.notifications_sent) == 1
    assert slack.notifications_sent[0]["recipient"] == "#support"


@pytest.mark.asyncio
async def test_router_notify_fans_out():
    first, second = MockNotificationService(), MockNotificationService()
    router = ChannelRouterNotificationService({"email": first, "slack": second})

    await router.notify("heads up")

    assert len(first.notifications_sent) == 1
    assert len(second.notifications_sent) == 1


@pytest.mark.asyncio
async def test_unconfigured_slack_reports_failure():
    service = SlackNotificationService(SlackSettings(SLACK_WEBHOOK_URL=""))
    assert await service.send("#support", "hi", "slack") is False


@pytest.mark.asyncio
async def test_unconfigured_telegram_reports_failure():
    service = TelegramNotificationService(TelegramSettings(TELEGRAM_BOT_TOKEN="", TELEGRAM_CHAT_ID=""))
    assert await service.send("ops", "hi", "telegram") is False


@pytest.mark.asyncio
async def test_router_notify_alerts_shared_service_once():
    shared = MockNotificationService()
    router = ChannelRouterNotificationService({"email": shared, "sms": shared, "in_app": shared})

    await router.notify("sweep failed", severity=60)

    assert shared.notifications_sent == [{"type": "notify", "message": "sweep failed", "severity": 60}]


@pytest.mark.asyncio
async def test_telegram_notify_skips_low_severity(monkeypatch):
    service = TelegramNotificationService(
        TelegramSettings(TELEGRAM_BOT_TOKEN="t", TELEGRAM_CHAT_ID="c", CASEDESK_TELEGRAM_MIN_SEVERITY=70)
    )
    sent = []

    async def fake_send(text):
        sent.append(text)
        return True

    monkeypatch.setattr(service, "_send_message", fake_send)

    await service.notify("minor", severity=60)
    await service.notify("sweep aborted", severity=80)

    assert len(sent) == 1
    assert "sweep aborted" in sent[0]
