"""Follow-up hand-off record for the external scheduling collaborator."""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Followup:
    """A follow-up to be picked up by the scheduling system."""
    case_id: str
    followup_date: datetime
    followup_type: Optional[str] = None
    assignee: Optional[str] = None
    created_at: Optional[datetime] = None
    status: str = "scheduled"

    @property
    def key(self) -> tuple:
        """Identity used to make repeated scheduling idempotent."""
        return (self.case_id, self.followup_date, self.followup_type)
