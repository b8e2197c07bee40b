"""
FastAPI Dependencies.

Builds the workflow engine and its collaborators from settings and hands
them to the routes.
"""
from __future__ import annotations

import logging
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables ONCE before any settings objects are created
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(dotenv_path=_PROJECT_ROOT / ".env")

from core.settings import get_app_settings
from core.application.interfaces import INotificationService
from core.application.services import RuleAdminService
from core.infrastructure.adapters.notifications.channel_router import ChannelRouterNotificationService
from core.infrastructure.adapters.notifications.mock_notification_service import MockNotificationService
from core.infrastructure.adapters.persistence.in_memory_case_store import InMemoryCaseStore
from core.infrastructure.adapters.persistence.in_memory_followup_scheduler import InMemoryFollowupScheduler
from core.infrastructure.database.config import get_session_factory
from core.infrastructure.database.repositories import SQLAlchemyExecutionHistory, SQLAlchemyRuleSource
from workflow import (
    ActionExecutor,
    EscalationScheduler,
    EscalationThresholds,
    InMemoryEventBus,
    RetryPolicy,
    RetryRunner,
    RuleRepository,
    WorkflowEngine,
    exponential_backoff,
)

logger = logging.getLogger(__name__)


# =============================================================================
# SINGLETON INSTANCES
# =============================================================================

_case_store = None
_rule_source = None
_execution_history = None
_followup_scheduler = None
_notification_service = None
_event_bus = None
_rule_repository = None
_workflow_engine = None
_escalation_scheduler = None
_rule_admin_service = None


# =============================================================================
# STORAGE
# =============================================================================

def get_case_store() -> InMemoryCaseStore:
    global _case_store
    if _case_store is None:
        _case_store = InMemoryCaseStore()
        logger.info("Created InMemoryCaseStore instance")
    return _case_store


def get_rule_source():
    global _rule_source
    if _rule_source is None:
        _rule_source = SQLAlchemyRuleSource(get_session_factory())
        logger.info("Created SQLAlchemyRuleSource instance")
    return _rule_source


def get_execution_history():
    global _execution_history
    if _execution_history is None:
        _execution_history = SQLAlchemyExecutionHistory(get_session_factory())
        logger.info("Created SQLAlchemyExecutionHistory instance")
    return _execution_history


def get_followup_scheduler():
    global _followup_scheduler
    if _followup_scheduler is None:
        _followup_scheduler = InMemoryFollowupScheduler()
    return _followup_scheduler


# =============================================================================
# NOTIFICATIONS
# =============================================================================

def get_notification_service() -> INotificationService:
    """
    Route each channel to its transport.
    
    Telegram and Slack are registered when enabled; ``email`` and any
    channel without a real transport fall back to the console mock.
    """
    global _notification_service

    if _notification_service is None:
        settings = get_app_settings()
        mock = MockNotificationService()
        services = {"email": mock, "sms": mock, "in_app": mock}

        if settings.telegram.enabled:
            from core.infrastructure.adapters.notifications.telegram_notification_service import TelegramNotificationService
            services["telegram"] = TelegramNotificationService(settings.telegram)
            logger.info("Registered TelegramNotificationService")

        if settings.slack.enabled:
            from core.infrastructure.adapters.notifications.slack_notification_service import SlackNotificationService
            services["slack"] = SlackNotificationService(settings.slack)
            logger.info("Registered SlackNotificationService")

        _notification_service = ChannelRouterNotificationService(services)
        logger.info(f"Notification channels: {sorted(services)}")

    return _notification_service


def get_event_bus() -> InMemoryEventBus:
    global _event_bus
    if _event_bus is None:
        _event_bus = InMemoryEventBus()
    return _event_bus


# =============================================================================
# WORKFLOW
# =============================================================================

def get_rule_repository() -> RuleRepository:
    global _rule_repository
    if _rule_repository is None:
        settings = get_app_settings().workflow
        _rule_repository = RuleRepository(
            get_rule_source(),
            ttl_seconds=settings.rules_cache_ttl_seconds,
        )
    return _rule_repository


def get_workflow_engine() -> WorkflowEngine:
    global _workflow_engine

    if _workflow_engine is None:
        settings = get_app_settings().workflow
        retry = RetryRunner(
            RetryPolicy(
                max_attempts=settings.notification_max_attempts,
                backoff=exponential_backoff(
                    settings.notification_base_delay_seconds,
                    settings.notification_max_delay_seconds,
                ),
            )
        )
        executor = ActionExecutor.with_default_handlers(
            case_store=get_case_store(),
            notification_service=get_notification_service(),
            followup_scheduler=get_followup_scheduler(),
            retry=retry,
            timeout_seconds=settings.action_timeout_seconds,
            fallback_assignee=settings.default_assignee,
            escalation_channel=settings.escalation_channel,
        )
        _workflow_engine = WorkflowEngine(
            repository=get_rule_repository(),
            executor=executor,
            history=get_execution_history(),
            event_bus=get_event_bus(),
        )
        logger.info("Created WorkflowEngine instance")

    return _workflow_engine


def get_escalation_scheduler() -> EscalationScheduler:
    global _escalation_scheduler

    if _escalation_scheduler is None:
        settings = get_app_settings().workflow
        _escalation_scheduler = EscalationScheduler(
            engine=get_workflow_engine(),
            case_store=get_case_store(),
            thresholds=EscalationThresholds.from_settings(settings),
            periodic_priority_checks=settings.periodic_priority_checks,
            budget_seconds=settings.sweep_budget_seconds,
            alerts=get_notification_service(),
        )
        logger.info("Created EscalationScheduler instance")

    return _escalation_scheduler


def get_rule_admin_service() -> RuleAdminService:
    global _rule_admin_service

    if _rule_admin_service is None:
        _rule_admin_service = RuleAdminService(
            source=get_rule_source(),
            repository=get_rule_repository(),
            history=get_execution_history(),
        )
    return _rule_admin_service


# =============================================================================
# RESET (for testing)
# =============================================================================

def reset_dependencies():
    global _case_store, _rule_source, _execution_history, _followup_scheduler
    global _notification_service, _event_bus, _rule_repository
    global _workflow_engine, _escalation_scheduler, _rule_admin_service

    _case_store = None
    _rule_source = None
    _execution_history = None
    _followup_scheduler = None
    _notification_service = None
    _event_bus = None
    _rule_repository = None
    _workflow_engine = None
    _escalation_scheduler = None
    _rule_admin_service = None

    logger.info("Dependencies reset")
