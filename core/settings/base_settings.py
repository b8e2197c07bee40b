# core/settings/base_settings.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class CaseDeskBaseSettings(BaseSettings):
    """Common settings behaviour: read `.env`, ignore unrelated keys."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )
