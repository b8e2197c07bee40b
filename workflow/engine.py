"""Workflow engine - selects rules for a trigger, runs their actions and records outcomes."""

import json
from collections.abc import Callable, Mapping
from dataclasses import replace
from datetime import datetime
from typing import Any

from casedesk_sdk.logging import get_logger
from casedesk_sdk.utils.datetime import utc_now
from core.domain.entities import CaseSnapshot, ExecutionRecord, WorkflowRule
from core.domain.enums import ExecutionStatus
from core.domain.repositories import ExecutionHistory
from core.domain.value_objects import ExecutionID

from .actions import ActionExecutor
from .bus import EventBusProtocol
from .conditions import ConditionEvaluator
from .events import CASE_PROCESSED, RULE_EXECUTED, Event, EventMetadata
from .models import ActionResult, ExecutionContext, ProcessResult, RuleResult
from .repository import RuleRepository
from .selector import RuleSelector

UNKNOWN_ACTION = "unknown"


def _trigger_name(trigger_type: Any) -> str:
    return str(getattr(trigger_type, "value", trigger_type))


def _notes(result: ActionResult) -> str:
    if result.error:
        return result.error
    return json.dumps(result.to_dict(), default=str, ensure_ascii=False)


class WorkflowEngine:
    """Runs workflow rules against a case for one trigger event.

    Per invocation: select rules, then for each rule execute its actions in
    declared order and append one history record per action. Rules run
    strictly in selection order and nothing runs concurrently.
    ``process`` never raises.
    """

    def __init__(
        self,
        repository: RuleRepository,
        executor: ActionExecutor,
        history: ExecutionHistory,
        selector: RuleSelector | None = None,
        evaluator: ConditionEvaluator | None = None,
        event_bus: EventBusProtocol | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._repository = repository
        self._executor = executor
        self._history = history
        self._selector = selector or RuleSelector(repository, evaluator)
        self._event_bus = event_bus
        self._clock = clock
        self._logger = get_logger("workflow.engine")

    @property
    def repository(self) -> RuleRepository:
        return self._repository

    def invalidate_rules(self) -> None:
        self._repository.invalidate()

    async def process(
        self,
        case: CaseSnapshot,
        trigger_type: Any,
        context: Mapping[str, Any] | None = None,
    ) -> ProcessResult:
        """Process a case for a trigger.

        Args:
            case: Case snapshot; updated in place as actions persist changes
            trigger_type: Trigger type name (or TriggerType)
            context: Extra values for message templates

        Returns:
            ProcessResult with one RuleResult per applicable rule
        """
        trigger = _trigger_name(trigger_type)
        started_at = self._clock()
        ctx = ExecutionContext(
            execution_id=ExecutionID.generate(),
            trigger_type=trigger,
            started_at=started_at,
            data=dict(context or {}),
        )

        try:
            rules = await self._selector.select(trigger, case)
        except Exception as exc:
            self._logger.error(
                f"Rule selection failed for case {case.id} ({trigger}): {exc}", exc_info=True
            )
            return ProcessResult(
                execution_id=ctx.execution_id,
                case_id=case.id,
                trigger_type=trigger,
                started_at=started_at,
                finished_at=self._clock(),
                error=f"Rule selection failed: {exc}",
            )

        self._logger.info(
            f"[{ctx.execution_id}] case {case.id}: {len(rules)} rule(s) apply to {trigger}"
        )

        rule_results: list[RuleResult] = []
        for rule in rules:
            rule_ctx = replace(ctx, rule_id=rule.id, rule_name=rule.name)
            try:
                rule_result = await self._execute_rule(rule, case, rule_ctx)
            except Exception as exc:
                self._logger.error(f"Rule {rule.id} failed for case {case.id}: {exc}", exc_info=True)
                rule_result = RuleResult(
                    rule_id=rule.id, rule_name=rule.name, success=False, error=str(exc)
                )
            rule_results.append(rule_result)

            await self._record(case, rule_result, rule_ctx)
            await self._publish_event(
                RULE_EXECUTED,
                ctx,
                case.id,
                {"rule_id": rule.id, "success": rule_result.success, "action_count": len(rule_result.actions)},
            )

        result = ProcessResult(
            execution_id=ctx.execution_id,
            case_id=case.id,
            trigger_type=trigger,
            started_at=started_at,
            finished_at=self._clock(),
            rule_results=rule_results,
        )

        if result.failed_rule_count:
            self._logger.warning(
                f"[{ctx.execution_id}] case {case.id}: {result.failed_rule_count} of "
                f"{result.processed_rule_count} rule(s) had failures"
            )

        await self._publish_event(
            CASE_PROCESSED,
            ctx,
            case.id,
            {"processed_rules": result.processed_rule_count, "failed_rules": result.failed_rule_count},
        )
        return result

    async def _execute_rule(self, rule: WorkflowRule, case: CaseSnapshot, ctx: ExecutionContext) -> RuleResult:
        """Run every action in order; a failed action does not stop the next one."""
        results: list[ActionResult] = []
        for action in rule.actions:
            results.append(await self._executor.execute(action, case, ctx))

        return RuleResult(
            rule_id=rule.id,
            rule_name=rule.name,
            success=all(r.success for r in results),
            actions=results,
        )

    async def _record(self, case: CaseSnapshot, rule_result: RuleResult, ctx: ExecutionContext) -> None:
        records: list[ExecutionRecord] = []
        executed_at = self._clock()
        for action_result in rule_result.actions:
            records.append(
                ExecutionRecord(
                    case_id=case.id,
                    rule_id=rule_result.rule_id,
                    action_type=action_result.action,
                    result=ExecutionStatus.from_bool(action_result.success),
                    executed_at=executed_at,
                    old_value=action_result.old_value,
                    new_value=action_result.new_value,
                    executed_by=ctx.executed_by,
                    notes=_notes(action_result),
                    execution_id=str(ctx.execution_id),
                )
            )
        if rule_result.error is not None and not rule_result.actions:
            records.append(
                ExecutionRecord(
                    case_id=case.id,
                    rule_id=rule_result.rule_id,
                    action_type=UNKNOWN_ACTION,
                    result=ExecutionStatus.FAILED,
                    executed_at=executed_at,
                    executed_by=ctx.executed_by,
                    notes=rule_result.error,
                    execution_id=str(ctx.execution_id),
                )
            )

        for record in records:
            try:
                await self._history.append(record)
            except Exception as exc:
                self._logger.error(
                    f"Failed to record workflow execution for case {case.id}, rule {record.rule_id}: {exc}",
                    exc_info=True,
                )

    async def _publish_event(
        self, name: str, ctx: ExecutionContext, case_id: str, payload: dict[str, object]
    ) -> None:
        if self._event_bus is None:
            return
        metadata = EventMetadata(
            execution_id=str(ctx.execution_id),
            case_id=case_id,
            trigger_type=ctx.trigger_type,
            timestamp=self._clock(),
        )
        try:
            await self._event_bus.publish(Event(name=name, payload=payload, metadata=metadata))
        except Exception as exc:
            self._logger.error(f"Publishing {name} failed: {exc}", exc_info=True)
