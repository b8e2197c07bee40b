"""Domain value objects."""

from .value_objects import ExecutionID, RuleID

__all__ = [
    "ExecutionID",
    "RuleID",
]
