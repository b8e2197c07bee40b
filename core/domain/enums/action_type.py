"""
Action Type Enum.

Kinds of automated effect a workflow rule can perform.
"""
from enum import Enum


class ActionType(str, Enum):
    """Action type values."""

    CHANGE_STATUS = "change_status"
    ASSIGN_CASE = "assign_case"
    SEND_NOTIFICATION = "send_notification"
    ESCALATE_CASE = "escalate_case"
    ADD_COMMENT = "add_comment"
    UPDATE_FIELD = "update_field"
    SCHEDULE_FOLLOWUP = "schedule_followup"

    @classmethod
    def values(cls) -> set[str]:
        return {member.value for member in cls}
