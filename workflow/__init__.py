"""Workflow automation engine."""

from .actions import ActionExecutor, ActionHandler
from .bus import EventBusProtocol, InMemoryEventBus
from .conditions import ConditionEvaluator
from .engine import WorkflowEngine
from .events import Event, EventMetadata
from .models import ActionResult, ExecutionContext, ProcessResult, RuleResult, SweepResult
from .repository import RuleRepository
from .retry import RetryPolicy, RetryRunner, exponential_backoff
from .scheduler import EscalationScheduler, EscalationThresholds
from .selector import RuleSelector
from .transitions import StatusTransitionValidator

__all__ = [
    "ActionExecutor",
    "ActionHandler",
    "ActionResult",
    "ConditionEvaluator",
    "EscalationScheduler",
    "EscalationThresholds",
    "Event",
    "EventBusProtocol",
    "EventMetadata",
    "ExecutionContext",
    "InMemoryEventBus",
    "ProcessResult",
    "RetryPolicy",
    "RetryRunner",
    "RuleRepository",
    "RuleResult",
    "RuleSelector",
    "StatusTransitionValidator",
    "SweepResult",
    "WorkflowEngine",
    "exponential_backoff",
]
