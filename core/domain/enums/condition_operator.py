"""
Condition Operator Enum.

Operators usable in ``{"operator": ..., "value": ...}`` rule conditions.
"""
from enum import Enum


class ConditionOperator(str, Enum):
    """Condition operator values."""

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    IN = "in"
    NOT_IN = "not_in"

    @classmethod
    def values(cls) -> set[str]:
        return {member.value for member in cls}
