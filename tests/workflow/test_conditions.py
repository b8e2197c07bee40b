"""Tests for ConditionEvaluator."""

import pytest

from workflow.conditions import ConditionEvaluator


@pytest.fixture
def evaluator() -> ConditionEvaluator:
    return ConditionEvaluator()


def test_literal_condition_uses_strict_equality(evaluator):
    assert evaluator.evaluate("New", "New") is True
    assert evaluator.evaluate("New", "new") is False
    assert evaluator.evaluate(1, True) is False
    assert evaluator.evaluate(True, True) is True


@pytest.mark.parametrize(
    "value,condition,expected",
    [
        ("High", {"operator": "equals", "value": "High"}, True),
        ("High", {"operator": "not_equals", "value": "Low"}, True),
        ("Refund request", {"operator": "contains", "value": "REFUND"}, True),
        (None, {"operator": "contains", "value": "x"}, False),
        (None, {"operator": "contains", "value": ""}, True),
        ("12", {"operator": "greater_than", "value": 10}, True),
        (5, {"operator": "less_than", "value": "7.5"}, True),
        ("abc", {"operator": "greater_than", "value": 1}, False),
        ("billing", {"operator": "in", "value": ["billing", "sales"]}, True),
        ("support", {"operator": "not_in", "value": ["billing", "sales"]}, True),
    ],
)
def test_operators(evaluator, value, condition, expected):
    assert evaluator.evaluate(value, condition) is expected


def test_membership_requires_a_collection(evaluator):
    assert evaluator.evaluate("billing", {"operator": "in", "value": "billing"}) is False
    assert evaluator.evaluate("billing", {"operator": "not_in", "value": "billing"}) is False


def test_unknown_operator_fails_closed(evaluator):
    assert evaluator.evaluate("x", {"operator": "regex", "value": ".*"}) is False


def test_evaluate_all_is_a_conjunction(evaluator, make_case):
    case = make_case(priority="High", category="billing")
    assert evaluator.evaluate_all({}, case) is True
    assert evaluator.evaluate_all({"priority": "High", "category": "billing"}, case) is True
    assert evaluator.evaluate_all({"priority": "High", "category": "sales"}, case) is False


def test_missing_field_is_treated_as_none(evaluator, make_case):
    case = make_case()
    assert evaluator.evaluate_all({"category": None}, case) is True
    assert evaluator.evaluate_all({"category": {"operator": "equals", "value": "x"}}, case) is False


def test_unknown_operators_lists_offending_fields():
    conditions = {
        "status": "New",
        "priority": {"operator": "equals", "value": "High"},
        "subject": {"operator": "matches", "value": "x"},
    }
    assert ConditionEvaluator.unknown_operators(conditions) == ["subject"]
