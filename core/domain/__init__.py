"""Domain layer - pure domain models and interfaces."""

from .entities import Action, CaseSnapshot, ExecutionRecord, Followup, WorkflowRule
from .repositories import ExecutionHistory, RuleRow, RuleSource
from .value_objects import ExecutionID, RuleID

__all__ = [
    "Action",
    "CaseSnapshot",
    "ExecutionHistory",
    "ExecutionID",
    "ExecutionRecord",
    "Followup",
    "RuleID",
    "RuleRow",
    "RuleSource",
    "WorkflowRule",
]
