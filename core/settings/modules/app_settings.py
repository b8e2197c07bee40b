from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict

from core.settings.modules.integrations_settings import SlackSettings, TelegramSettings
from core.settings.modules.workflow_settings import WorkflowSettings


class IntegrationsSettings(BaseModel):
    """Aggregates integrations settings as nested objects."""

    model_config = ConfigDict(extra="ignore")

    telegram: TelegramSettings
    slack: SlackSettings


class AppSettings(BaseModel):
    """Application settings aggregator."""

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="ignore")

    workflow: WorkflowSettings
    integrations: IntegrationsSettings

    @property
    def telegram(self) -> TelegramSettings:
        return self.integrations.telegram

    @property
    def slack(self) -> SlackSettings:
        return self.integrations.slack


@lru_cache()
def get_app_settings() -> AppSettings:
    return AppSettings(
        workflow=WorkflowSettings(),
        integrations=IntegrationsSettings(
            telegram=TelegramSettings(),
            slack=SlackSettings(),
        ),
    )
