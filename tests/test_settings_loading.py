"""
Test settings loading.

Every key documented in .env.example must map onto a settings field, and
the defaults must match the documented values.
"""
from __future__ import annotations

from pathlib import Path
import re

import pytest

# Import api.dependencies so dotenv loads exactly once (canonical location).
import api.dependencies  # noqa: F401

from core.infrastructure.database.config import DatabaseSettings
from core.settings import get_app_settings
from core.settings.modules.workflow_settings import WorkflowSettings


def _parse_env_keys(env_path: Path) -> list[str]:
    text = env_path.read_text(encoding="utf-8", errors="replace")
    keys: list[str] = []
    for line in text.splitlines():
        s = line.strip()
        if not s or s.startswith("#"):
            continue
        if s.startswith("export "):
            s = s[len("export ") :].strip()
        if "=" not in s:
            continue
        k, _ = s.split("=", 1)
        k = k.strip()
        if not re.fullmatch(r"[A-Za-z_][A-Za-z0-9_]*", k):
            continue
        if k not in keys:
            keys.append(k)
    return keys


def _collect_alias_map(model) -> dict[str, str]:
    """
    Return map: ENV_ALIAS -> field_name for a Pydantic model.
    """
    alias_map: dict[str, str] = {}
    for field_name, field in type(model).model_fields.items():
        if field.alias:
            alias_map[field.alias] = field_name
    return alias_map


def _collect_prefixed_map(model_cls, prefix: str) -> dict[str, str]:
    return {f"{prefix}{name.upper()}": name for name in model_cls.model_fields}


def test_every_env_key_is_mapped():
    repo_root = Path(__file__).resolve().parents[1]
    keys = _parse_env_keys(repo_root / ".env.example")

    settings = get_app_settings()
    modules = {
        "telegram": _collect_alias_map(settings.integrations.telegram),
        "slack": _collect_alias_map(settings.integrations.slack),
        "workflow": _collect_prefixed_map(WorkflowSettings, "WORKFLOW_"),
        "database": _collect_prefixed_map(DatabaseSettings, "DB_"),
    }

    env_to_module: dict[str, str] = {}
    for module_name, mapping in modules.items():
        for env_key in mapping:
            if env_key in env_to_module:
                pytest.fail(f"Duplicate env key mapped twice: {env_key}")
            env_to_module[env_key] = module_name

    missing = [k for k in keys if k not in env_to_module]
    assert not missing, f"Unmapped env keys: {missing}"


def test_workflow_defaults():
    settings = WorkflowSettings()
    assert settings.rules_cache_ttl_seconds == 600
    assert settings.action_timeout_seconds == 30
    assert settings.response_time_threshold_hours == 24
    assert settings.priority_high_threshold_hours == 8
    assert settings.priority_critical_threshold_hours == 4
    assert settings.periodic_interval_minutes == 15
    assert settings.daily_check_hour == 9
    assert settings.sweep_budget_seconds is None


def test_workflow_settings_read_environment(monkeypatch):
    monkeypatch.setenv("WORKFLOW_ACTION_TIMEOUT_SECONDS", "5")
    monkeypatch.setenv("WORKFLOW_DEFAULT_ASSIGNEE", "triage@x.com")

    settings = WorkflowSettings()

    assert settings.action_timeout_seconds == 5
    assert settings.default_assignee == "triage@x.com"


def test_database_defaults_to_sqlite():
    assert DatabaseSettings().is_sqlite
