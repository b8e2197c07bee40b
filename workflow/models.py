"""Workflow models - ExecutionContext, ActionResult, RuleResult, ProcessResult, SweepResult."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from core.domain.entities import SYSTEM_ACTOR
from core.domain.value_objects import ExecutionID


@dataclass
class ExecutionContext:
    """Context object for one engine invocation."""

    execution_id: ExecutionID
    trigger_type: str
    started_at: datetime
    data: dict[str, Any] = field(default_factory=dict)
    executed_by: str = SYSTEM_ACTOR
    rule_id: str | None = None
    rule_name: str | None = None

    def template_values(self) -> dict[str, Any]:
        """Context keys available to ``{placeholder}`` substitution."""
        values = dict(self.data)
        values.setdefault("triggerType", self.trigger_type)
        if self.rule_name:
            values.setdefault("ruleName", self.rule_name)
        return values


@dataclass
class ActionResult:
    """Result of executing a single action."""

    action: str
    success: bool
    old_value: Any = None
    new_value: Any = None
    error: str | None = None
    details: dict[str, Any] = field(default_factory=dict)
    notifications: list[dict[str, Any]] = field(default_factory=list)
    duration_ms: int = 0

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "action": self.action,
            "success": self.success,
            "old_value": self.old_value,
            "new_value": self.new_value,
        }
        if self.error:
            data["error"] = self.error
        if self.details:
            data["details"] = self.details
        if self.notifications:
            data["notifications"] = self.notifications
        return data


@dataclass
class RuleResult:
    """Result of executing every action of one rule."""

    rule_id: str
    rule_name: str
    success: bool
    actions: list[ActionResult] = field(default_factory=list)
    error: str | None = None

    @property
    def failed_actions(self) -> list[ActionResult]:
        return [a for a in self.actions if not a.success]


@dataclass
class ProcessResult:
    """Aggregate result of ``WorkflowEngine.process``.

    Partial failure is explicit: an empty ``rule_results`` means nothing ran,
    while failed entries mean rules ran with failures.
    """

    execution_id: ExecutionID
    case_id: str
    trigger_type: str
    started_at: datetime
    finished_at: datetime
    rule_results: list[RuleResult] = field(default_factory=list)
    error: str | None = None

    @property
    def processed_rule_count(self) -> int:
        return len(self.rule_results)

    @property
    def failed_rule_count(self) -> int:
        return sum(1 for r in self.rule_results if not r.success)

    @property
    def has_failures(self) -> bool:
        return self.error is not None or self.failed_rule_count > 0


@dataclass
class SweepResult:
    """Outcome of one scheduler sweep."""

    kind: str
    started_at: datetime
    finished_at: datetime | None = None
    cases_examined: int = 0
    triggers_raised: int = 0
    failures: list[dict[str, str]] = field(default_factory=list)
    results: list[ProcessResult] = field(default_factory=list)
    cancelled: bool = False
    skipped: bool = False
    error: str | None = None
