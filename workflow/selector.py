"""Rule selection for a trigger event."""

from core.domain.entities import CaseSnapshot, WorkflowRule

from .conditions import ConditionEvaluator
from .repository import RuleRepository


class RuleSelector:
    """Returns the applicable rules for a trigger, highest priority first."""

    def __init__(self, repository: RuleRepository, evaluator: ConditionEvaluator | None = None) -> None:
        self._repository = repository
        self._evaluator = evaluator or ConditionEvaluator()

    async def select(self, trigger_type: str, case: CaseSnapshot) -> list[WorkflowRule]:
        rules = await self._repository.load()
        matching = [
            rule
            for rule in rules
            if rule.trigger_type == trigger_type and self._evaluator.evaluate_all(rule.conditions, case)
        ]
        # sorted() is stable: equal priorities keep source order
        return sorted(matching, key=lambda rule: rule.priority, reverse=True)
