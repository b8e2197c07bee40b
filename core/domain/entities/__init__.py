"""Domain entities."""

from .case import CaseComment, CaseSnapshot, CaseUpdateResult
from .execution_record import SYSTEM_ACTOR, ExecutionRecord
from .followup import Followup
from .workflow_rule import Action, WorkflowRule

__all__ = [
    "Action",
    "CaseComment",
    "CaseSnapshot",
    "CaseUpdateResult",
    "ExecutionRecord",
    "Followup",
    "SYSTEM_ACTOR",
    "WorkflowRule",
]
