"""assign_case handler and pluggable assignment strategies."""

from collections import Counter
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from casedesk_sdk.logging import get_logger
from casedesk_sdk.utils.datetime import utc_now
from core.application.interfaces import ICaseStore
from core.domain.entities import CaseSnapshot
from core.domain.enums import ActionType
from core.domain.exceptions import ActionExecutionError

from ..models import ActionResult, ExecutionContext
from .base import CaseWritingHandler, Clock

AssignmentStrategy = Callable[[CaseSnapshot, Mapping[str, Any]], Awaitable[str | None]]


def _pool(rule: Mapping[str, Any]) -> list[str]:
    pool = rule.get("pool") or []
    if isinstance(pool, str):
        pool = [pool]
    return [str(member) for member in pool if member]


class DefaultAssignment:
    """Returns the rule's ``defaultAssignee`` or the configured fallback."""

    def __init__(self, fallback: str = "unassigned") -> None:
        self._fallback = fallback

    async def __call__(self, case: CaseSnapshot, rule: Mapping[str, Any]) -> str | None:
        return rule.get("defaultAssignee") or self._fallback


class RoundRobinAssignment:
    """Cycles through ``pool``; position is kept per pool for this instance."""

    def __init__(self, fallback: DefaultAssignment) -> None:
        self._fallback = fallback
        self._positions: dict[tuple[str, ...], int] = {}

    async def __call__(self, case: CaseSnapshot, rule: Mapping[str, Any]) -> str | None:
        pool = _pool(rule)
        if not pool:
            return await self._fallback(case, rule)
        key = tuple(pool)
        position = self._positions.get(key, 0)
        self._positions[key] = (position + 1) % len(pool)
        return pool[position]


class WorkloadAssignment:
    """Picks the pool member with the fewest active cases; ties go to pool order."""

    def __init__(self, case_store: ICaseStore, fallback: DefaultAssignment) -> None:
        self._case_store = case_store
        self._fallback = fallback

    async def __call__(self, case: CaseSnapshot, rule: Mapping[str, Any]) -> str | None:
        pool = _pool(rule)
        if not pool:
            return await self._fallback(case, rule)
        active = await self._case_store.list_active_cases()
        load = Counter(c.assignee for c in active if c.assignee and c.id != case.id)
        return min(pool, key=lambda member: load.get(member, 0))


class AssignCaseHandler(CaseWritingHandler):
    action_type = ActionType.ASSIGN_CASE

    def __init__(
        self,
        case_store: ICaseStore,
        strategies: Mapping[str, AssignmentStrategy] | None = None,
        fallback_assignee: str = "unassigned",
        clock: Clock = utc_now,
    ) -> None:
        super().__init__(case_store, clock)
        default = DefaultAssignment(fallback_assignee)
        self._strategies: dict[str, AssignmentStrategy] = {
            "default": default,
            "round_robin": RoundRobinAssignment(default),
            "workload": WorkloadAssignment(case_store, default),
        }
        if strategies:
            self._strategies.update(strategies)
        self._logger = get_logger("workflow.actions.assignment")

    def register_strategy(self, name: str, strategy: AssignmentStrategy) -> None:
        self._strategies[name] = strategy

    async def _resolve(self, case: CaseSnapshot, assignment_rule: Any) -> str | None:
        rule = {"strategy": assignment_rule} if isinstance(assignment_rule, str) else dict(assignment_rule)
        name = rule.get("strategy") or "default"
        strategy = self._strategies.get(name)
        if strategy is None:
            raise ActionExecutionError(
                f"Unknown assignment strategy: {name}", action_type=self.action_type.value
            )
        return await strategy(case, rule)

    async def execute(
        self, params: Mapping[str, Any], case: CaseSnapshot, ctx: ExecutionContext
    ) -> ActionResult:
        assignment_rule = params.get("assignmentRule")
        target = params.get("assignee")
        if assignment_rule:
            target = await self._resolve(case, assignment_rule)
        if not target:
            raise ActionExecutionError(
                "No assignee could be determined", action_type=self.action_type.value
            )

        old_assignee = case.assignee
        details = {"assignmentRule": assignment_rule}
        if old_assignee == target:
            details["noop"] = True
        else:
            now = self._clock()
            await self._persist(case, {"assignee": target, "assigned_at": now, "last_modified": now})
            self._logger.info(f"Case {case.id} assigned to {target} (was {old_assignee})")

        return ActionResult(
            action=self.action_type.value,
            success=True,
            old_value=old_assignee,
            new_value=target,
            details=details,
        )
