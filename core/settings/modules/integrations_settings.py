from __future__ import annotations

from pydantic import Field

from core.settings.base_settings import CaseDeskBaseSettings


class TelegramSettings(CaseDeskBaseSettings):
    """
    Telegram integration settings.
    Loaded from .env file with exact variable name matching.
    """

    enabled: bool = Field(default=False, alias="CASEDESK_TELEGRAM_ENABLED")
    token: str = Field(default="", alias="TELEGRAM_BOT_TOKEN")
    chat_id: str = Field(default="", alias="TELEGRAM_CHAT_ID")
    prefix: str = Field(default="[CASEDESK]", alias="CASEDESK_TELEGRAM_PREFIX")
    min_severity: int = Field(default=50, alias="CASEDESK_TELEGRAM_MIN_SEVERITY")


class SlackSettings(CaseDeskBaseSettings):
    """
    Slack integration settings.
    Loaded from .env file with exact variable name matching.
    """

    enabled: bool = Field(default=False, alias="CASEDESK_SLACK_ENABLED")
    webhook_url: str = Field(default="", alias="SLACK_WEBHOOK_URL")
    prefix: str = Field(default="[CASEDESK]", alias="CASEDESK_SLACK_PREFIX")
