"""
Execution record.

Immutable audit entry for one action's outcome. Created once per action
execution and never mutated.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional
import uuid

from ..enums.execution_status import ExecutionStatus


SYSTEM_ACTOR = "System"


@dataclass(frozen=True)
class ExecutionRecord:
    """One row of the append-only workflow history."""
    case_id: str
    rule_id: str
    action_type: str
    result: ExecutionStatus
    executed_at: datetime
    old_value: Any = None
    new_value: Any = None
    executed_by: str = SYSTEM_ACTOR
    notes: Optional[str] = None
    execution_id: Optional[str] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def succeeded(self) -> bool:
        return self.result == ExecutionStatus.SUCCESS

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "case_id": self.case_id,
            "rule_id": self.rule_id,
            "action_type": self.action_type,
            "old_value": self.old_value,
            "new_value": self.new_value,
            "executed_at": self.executed_at.isoformat(),
            "executed_by": self.executed_by,
            "result": self.result.value,
            "notes": self.notes,
            "execution_id": self.execution_id,
        }
