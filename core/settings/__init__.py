# Settings package
from core.settings.modules import (
    AppSettings,
    IntegrationsSettings,
    WorkflowSettings,
    get_app_settings,
)

__all__ = ["get_app_settings", "AppSettings", "IntegrationsSettings", "WorkflowSettings"]
