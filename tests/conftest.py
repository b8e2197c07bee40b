"""Shared fixtures for the workflow test suites."""

import itertools
import json
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import pytest

from core.domain.entities import CaseSnapshot
from core.domain.repositories import RuleRow
from core.infrastructure.adapters.notifications.mock_notification_service import MockNotificationService
from core.infrastructure.adapters.persistence.in_memory_case_store import InMemoryCaseStore
from core.infrastructure.adapters.persistence.in_memory_execution_history import InMemoryExecutionHistory
from core.infrastructure.adapters.persistence.in_memory_followup_scheduler import InMemoryFollowupScheduler
from core.infrastructure.adapters.persistence.in_memory_rule_source import InMemoryRuleSource
from workflow import (
    ActionExecutor,
    EscalationScheduler,
    InMemoryEventBus,
    RuleRepository,
    WorkflowEngine,
)


FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

DEFAULT_ACTIONS = [{"type": "add_comment", "parameters": {"comment": "Rule fired for {caseId}"}}]


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def make_case():
    """Factory for case snapshots created ``age_hours`` before FIXED_NOW."""

    def _make(
        case_id: str = "CASE-1",
        status: str = "New",
        priority: str | None = "Medium",
        assignee: str | None = None,
        age_hours: float = 1.0,
        **fields,
    ) -> CaseSnapshot:
        created = FIXED_NOW - timedelta(hours=age_hours)
        return CaseSnapshot(
            id=case_id,
            status=status,
            priority=priority,
            assignee=assignee,
            created_at=created,
            last_modified=created,
            fields=dict(fields),
        )

    return _make


@pytest.fixture
def make_rule_row():
    """Factory for stored rule rows with JSON-encoded payloads."""
    counter = itertools.count(1)

    def _make(
        trigger_type: str = "case_created",
        conditions: dict | None = None,
        actions: list | None = None,
        priority: int = 0,
        enabled: bool = True,
        rule_id: str | None = None,
        name: str | None = None,
    ) -> RuleRow:
        n = next(counter)
        return RuleRow(
            id=rule_id or f"rule-{n}",
            name=name or f"Rule {n}",
            trigger_type=trigger_type,
            conditions=json.dumps(conditions or {}),
            actions=json.dumps(DEFAULT_ACTIONS if actions is None else actions),
            priority=priority,
            enabled=enabled,
            created_at=FIXED_NOW,
            last_modified=FIXED_NOW,
            created_by="tests",
        )

    return _make


@dataclass
class WorkflowHarness:
    """Engine wired to in-memory collaborators."""

    case_store: InMemoryCaseStore
    rule_source: InMemoryRuleSource
    history: InMemoryExecutionHistory
    followups: InMemoryFollowupScheduler
    notifications: MockNotificationService
    event_bus: InMemoryEventBus
    repository: RuleRepository
    executor: ActionExecutor
    engine: WorkflowEngine

    async def add_rules(self, *rows) -> None:
        for row in rows:
            await self.rule_source.add_row(row)
        self.repository.invalidate()

    def add_case(self, case: CaseSnapshot) -> CaseSnapshot:
        self.case_store.add_case(case)
        return self.case_store.get(case.id)

    def scheduler(self, **kwargs) -> EscalationScheduler:
        kwargs.setdefault("clock", lambda: FIXED_NOW)
        return EscalationScheduler(self.engine, self.case_store, **kwargs)


@pytest.fixture
def harness() -> WorkflowHarness:
    case_store = InMemoryCaseStore()
    rule_source = InMemoryRuleSource()
    history = InMemoryExecutionHistory()
    followups = InMemoryFollowupScheduler()
    notifications = MockNotificationService()
    event_bus = InMemoryEventBus()
    repository = RuleRepository(rule_source, ttl_seconds=600)
    executor = ActionExecutor.with_default_handlers(
        case_store=case_store,
        notification_service=notifications,
        followup_scheduler=followups,
        timeout_seconds=1.0,
        clock=lambda: FIXED_NOW,
    )
    engine = WorkflowEngine(
        repository=repository,
        executor=executor,
        history=history,
        event_bus=event_bus,
        clock=lambda: FIXED_NOW,
    )
    return WorkflowHarness(
        case_store=case_store,
        rule_source=rule_source,
        history=history,
        followups=followups,
        notifications=notifications,
        event_bus=event_bus,
        repository=repository,
        executor=executor,
        engine=engine,
    )
