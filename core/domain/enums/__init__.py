"""Domain enums."""

from .action_type import ActionType
from .condition_operator import ConditionOperator
from .case_priority import CasePriority
from .case_status import CLOSED_STATUSES, INACTIVE_STATUSES, CaseStatus
from .execution_status import ExecutionStatus
from .trigger_type import TriggerType

__all__ = [
    "ActionType",
    "ConditionOperator",
    "CasePriority",
    "CaseStatus",
    "CLOSED_STATUSES",
    "INACTIVE_STATUSES",
    "ExecutionStatus",
    "TriggerType",
]
