from __future__ import annotations

from typing import Optional

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from core.settings.base_settings import CaseDeskBaseSettings


class WorkflowSettings(CaseDeskBaseSettings):
    """
    Workflow engine settings.

    Every field maps to an environment variable with the ``WORKFLOW_`` prefix:
        rules_cache_ttl_seconds -> WORKFLOW_RULES_CACHE_TTL_SECONDS
    """

    model_config = SettingsConfigDict(
        env_prefix="WORKFLOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Rule cache ===
    rules_cache_ttl_seconds: float = Field(default=600.0, ge=0)

    # === Execution ===
    action_timeout_seconds: float = Field(default=30.0, gt=0)

    # === Escalation thresholds (hours) ===
    response_time_threshold_hours: float = 24.0
    priority_high_threshold_hours: float = 8.0
    priority_critical_threshold_hours: float = 4.0

    # === Schedules ===
    periodic_interval_minutes: int = 15
    daily_check_hour: int = Field(default=9, ge=0, le=23)
    periodic_priority_checks: bool = True
    sweep_budget_seconds: Optional[float] = None

    # === Actions ===
    default_assignee: str = "unassigned"
    escalation_channel: str = "email"

    # === Notification retry ===
    notification_max_attempts: int = Field(default=3, ge=1)
    notification_base_delay_seconds: float = Field(default=1.0, ge=0)
    notification_max_delay_seconds: float = Field(default=10.0, ge=0)
