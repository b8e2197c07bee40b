"""
Workflow error taxonomy.

Handlers raise these; the engine converts them into failed results so that
callers of ``WorkflowEngine.process`` never see an exception.
"""
from typing import Optional


class WorkflowError(Exception):
    """Base class for workflow engine errors."""


class RuleDefinitionError(WorkflowError):
    """Malformed conditions/actions payload, unknown operator or empty actions."""

    def __init__(self, message: str, rule_id: Optional[str] = None):
        self.rule_id = rule_id
        prefix = f"Rule {rule_id}: " if rule_id else ""
        super().__init__(f"{prefix}{message}")


class RuleNotFoundError(WorkflowError):
    """Raised by rule administration when a rule id does not exist."""

    def __init__(self, rule_id: str):
        self.rule_id = rule_id
        super().__init__(f"Workflow rule not found: {rule_id}")


class InvalidTransitionError(WorkflowError):
    """Status change not permitted by the transition graph."""

    def __init__(self, from_status: Optional[str], to_status: Optional[str]):
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Invalid status transition from {from_status} to {to_status}"
        )


class ActionExecutionError(WorkflowError):
    """An action handler could not complete its side effect."""

    def __init__(self, message: str, action_type: Optional[str] = None):
        self.action_type = action_type
        super().__init__(message)


class DispatchTimeoutError(ActionExecutionError):
    """An external collaborator did not answer within the action budget."""

    def __init__(self, action_type: Optional[str] = None, timeout: Optional[float] = None):
        self.timeout = timeout
        super().__init__("timeout", action_type=action_type)


class StaleWriteError(ActionExecutionError):
    """The case was modified by someone else since it was read."""

    def __init__(self, case_id: str):
        self.case_id = case_id
        super().__init__(f"Stale write rejected for case {case_id}")


class SweepIterationError(WorkflowError):
    """Processing one case during a sweep failed unexpectedly."""

    def __init__(self, case_id: str, cause: BaseException):
        self.case_id = case_id
        self.cause = cause
        super().__init__(f"Sweep failed for case {case_id}: {cause}")


__all__ = [
    "WorkflowError",
    "RuleDefinitionError",
    "RuleNotFoundError",
    "InvalidTransitionError",
    "ActionExecutionError",
    "DispatchTimeoutError",
    "StaleWriteError",
    "SweepIterationError",
]
