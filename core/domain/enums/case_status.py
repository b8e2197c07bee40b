"""
Case Status Enum.

The closed set of statuses a support case can be in.
"""
from enum import Enum


class CaseStatus(str, Enum):
    """Case status values."""

    NEW = "New"
    ASSIGNED = "Assigned"
    IN_PROGRESS = "In Progress"
    PENDING_REVIEW = "Pending Review"
    ON_HOLD = "On Hold"
    ESCALATED = "Escalated"
    RESOLVED = "Resolved"
    REJECTED = "Rejected"
    REOPENED = "Reopened"
    CLOSED = "Closed"

    @classmethod
    def values(cls) -> set[str]:
        return {member.value for member in cls}


# Statuses that no longer take part in sweeps
INACTIVE_STATUSES = frozenset({CaseStatus.RESOLVED.value, CaseStatus.CLOSED.value})
CLOSED_STATUSES = frozenset(
    {CaseStatus.RESOLVED.value, CaseStatus.CLOSED.value, CaseStatus.REJECTED.value}
)
