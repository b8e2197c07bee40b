"""Action handlers and the executor that dispatches to them."""

from .assignment import (
    AssignCaseHandler,
    AssignmentStrategy,
    DefaultAssignment,
    RoundRobinAssignment,
    WorkloadAssignment,
)
from .base import ActionHandler, CaseWritingHandler
from .comment import AddCommentHandler
from .escalation import EscalateCaseHandler
from .executor import ActionExecutor
from .fields import UpdateFieldHandler, apply_field_operator
from .followup import ScheduleFollowupHandler
from .notification import NotificationDispatcher, SendNotificationHandler
from .status import ChangeStatusHandler

__all__ = [
    "ActionExecutor",
    "ActionHandler",
    "AddCommentHandler",
    "AssignCaseHandler",
    "AssignmentStrategy",
    "CaseWritingHandler",
    "ChangeStatusHandler",
    "DefaultAssignment",
    "EscalateCaseHandler",
    "NotificationDispatcher",
    "RoundRobinAssignment",
    "ScheduleFollowupHandler",
    "SendNotificationHandler",
    "UpdateFieldHandler",
    "WorkloadAssignment",
    "apply_field_operator",
]
