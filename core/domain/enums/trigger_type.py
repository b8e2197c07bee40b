"""
Trigger Type Enum.

Event categories a workflow rule can listen to.
"""
from enum import Enum


class TriggerType(str, Enum):
    """Trigger type values."""

    CASE_CREATED = "case_created"
    CASE_UPDATED = "case_updated"
    STATUS_CHANGE = "status_change"
    ASSIGNMENT = "assignment"
    RESPONSE_TIME_EXCEEDED = "response_time_exceeded"
    PRIORITY_ESCALATION = "priority_escalation"
    CRITICAL_ESCALATION = "critical_escalation"

    @classmethod
    def values(cls) -> set[str]:
        return {member.value for member in cls}
