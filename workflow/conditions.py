"""Condition evaluation for workflow rules.

A condition is either a literal (strict equality) or an operator expression
``{"operator": ..., "value": ...}``. Unknown operators fail closed.
"""

from collections.abc import Mapping
from typing import Any

from casedesk_sdk.logging import get_logger
from core.domain.entities import CaseSnapshot
from core.domain.enums import ConditionOperator

_MISSING = object()


def _to_number(value: Any) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _strict_equals(left: Any, right: Any) -> bool:
    # bool is an int subclass; True must not equal 1 here
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    return left == right


class ConditionEvaluator:
    """Pure (field value, condition) -> bool evaluation."""

    def __init__(self) -> None:
        self._logger = get_logger("workflow.conditions")

    def evaluate(self, field_value: Any, condition: Any) -> bool:
        """Evaluate one condition against a field value.

        Args:
            field_value: Current value of the case field
            condition: Literal or operator expression

        Returns:
            True if the condition holds
        """
        if not isinstance(condition, Mapping):
            return _strict_equals(field_value, condition)

        operator = condition.get("operator")
        expected = condition.get("value")

        if operator == ConditionOperator.EQUALS:
            return _strict_equals(field_value, expected)
        if operator == ConditionOperator.NOT_EQUALS:
            return not _strict_equals(field_value, expected)
        if operator == ConditionOperator.CONTAINS:
            haystack = "" if field_value is None else str(field_value)
            needle = "" if expected is None else str(expected)
            return needle.lower() in haystack.lower()
        if operator in (ConditionOperator.GREATER_THAN, ConditionOperator.LESS_THAN):
            left, right = _to_number(field_value), _to_number(expected)
            if left is None or right is None:
                return False
            if operator == ConditionOperator.GREATER_THAN:
                return left > right
            return left < right
        if operator in (ConditionOperator.IN, ConditionOperator.NOT_IN):
            if not isinstance(expected, (list, tuple, set, frozenset)):
                return False
            member = any(_strict_equals(field_value, item) for item in expected)
            return member if operator == ConditionOperator.IN else not member

        self._logger.warning(f"Unknown condition operator {operator!r}; condition evaluates to false")
        return False

    def evaluate_all(self, conditions: Mapping[str, Any] | None, case: CaseSnapshot | Mapping[str, Any]) -> bool:
        """Conjunction over all condition entries; empty conditions always hold."""
        if not conditions:
            return True
        data = case.as_dict() if isinstance(case, CaseSnapshot) else case
        for field_name, condition in conditions.items():
            value = data.get(field_name, _MISSING)
            if value is _MISSING:
                value = None
            if not self.evaluate(value, condition):
                return False
        return True

    @staticmethod
    def unknown_operators(conditions: Mapping[str, Any] | None) -> list[str]:
        """List field names whose condition uses an operator we do not support."""
        problems: list[str] = []
        for field_name, condition in (conditions or {}).items():
            if isinstance(condition, Mapping) and condition.get("operator") not in ConditionOperator.values():
                problems.append(field_name)
        return problems
