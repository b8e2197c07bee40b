"""Application service for workflow rule administration."""

import json
from typing import Any, Callable, Dict, List, Mapping, Optional, Union
import logging
from datetime import datetime

from pydantic import ValidationError

from casedesk_sdk.utils.datetime import utc_now
from core.application.dtos.rule_dto import (
    ExecutionRecordDTO,
    RuleCreateDTO,
    RuleDTO,
    RuleUpdateDTO,
)
from core.domain.entities import SYSTEM_ACTOR, WorkflowRule
from core.domain.exceptions import RuleDefinitionError, RuleNotFoundError
from core.domain.repositories import ExecutionHistory, RuleRow, RuleSource
from core.domain.value_objects import RuleID
from workflow.repository import RuleRepository, parse_rule


logger = logging.getLogger(__name__)


def _validation_message(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts)


class RuleAdminService:
    """
    Application service for managing workflow rules.

    Responsibilities:
    - Validate rule payloads before they reach the rule store
    - Encode conditions/actions as JSON text columns
    - Invalidate the engine's rule cache after every mutation
    - Expose the execution history newest first
    """

    def __init__(
        self,
        source: RuleSource,
        repository: RuleRepository,
        history: ExecutionHistory,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize rule admin service.

        Args:
            source: Backing rule store
            repository: Cached rule repository used by the engine
            history: Execution history sink
            clock: Time source for created/modified timestamps
        """
        self._source = source
        self._repository = repository
        self._history = history
        self._clock = clock

    async def create_rule(
        self,
        payload: Union[RuleCreateDTO, Mapping[str, Any]],
        created_by: str = SYSTEM_ACTOR,
    ) -> RuleDTO:
        """Validate and store a new rule.

        Args:
            payload: RuleCreateDTO or raw mapping
            created_by: Author recorded on the rule

        Returns:
            RuleDTO of the stored rule

        Raises:
            RuleDefinitionError: If the payload is invalid
        """
        request = self._validate(RuleCreateDTO, payload)
        now = self._clock()
        row = RuleRow(
            id=str(RuleID.generate()),
            name=request.name,
            trigger_type=request.trigger_type,
            conditions=json.dumps(request.conditions),
            actions=json.dumps([action.model_dump() for action in request.actions]),
            priority=request.priority,
            enabled=request.enabled,
            created_at=now,
            last_modified=now,
            created_by=created_by,
        )
        await self._source.add_row(row)
        self._repository.invalidate()
        logger.info(f"Workflow rule created: {row.id} ({row.name})")
        return self._to_dto(parse_rule(row))

    async def update_rule(
        self,
        rule_id: str,
        payload: Union[RuleUpdateDTO, Mapping[str, Any]],
    ) -> RuleDTO:
        """Apply a partial update to a rule.

        Raises:
            RuleDefinitionError: If the payload is invalid
            RuleNotFoundError: If the rule does not exist
        """
        request = self._validate(RuleUpdateDTO, payload)
        changes: Dict[str, Any] = {}
        for name, value in request.model_dump(exclude_unset=True).items():
            if value is None:
                continue
            if name in ("conditions", "actions"):
                value = json.dumps(value)
            changes[name] = value
        changes["last_modified"] = self._clock()

        if not await self._source.update_row(rule_id, changes):
            raise RuleNotFoundError(rule_id)
        self._repository.invalidate()
        logger.info(f"Workflow rule updated: {rule_id} ({sorted(changes)})")

        row = await self._source.get_row(rule_id)
        if row is None:
            raise RuleNotFoundError(rule_id)
        return self._to_dto(parse_rule(row))

    async def delete_rule(self, rule_id: str) -> None:
        """Remove a rule.

        Raises:
            RuleNotFoundError: If the rule does not exist
        """
        if not await self._source.delete_row(rule_id):
            raise RuleNotFoundError(rule_id)
        self._repository.invalidate()
        logger.info(f"Workflow rule deleted: {rule_id}")

    async def get_rule(self, rule_id: str) -> RuleDTO:
        row = await self._source.get_row(rule_id)
        if row is None:
            raise RuleNotFoundError(rule_id)
        return self._to_dto(parse_rule(row))

    async def list_rules(self, include_disabled: bool = True) -> List[RuleDTO]:
        """List stored rules in insertion order.

        Rows that cannot be parsed are logged and left out.
        """
        rules: List[RuleDTO] = []
        for row in await self._source.fetch_rows():
            try:
                rule = parse_rule(row)
            except RuleDefinitionError as exc:
                logger.warning(f"Skipping malformed rule row: {exc}")
                continue
            if rule.enabled or include_disabled:
                rules.append(self._to_dto(rule))
        return rules

    async def get_history(self, case_id: Optional[str] = None, limit: int = 50) -> List[ExecutionRecordDTO]:
        """Return execution history, newest first."""
        records = await self._history.list(case_id=case_id, limit=limit)
        return [
            ExecutionRecordDTO(
                id=record.id,
                case_id=record.case_id,
                rule_id=record.rule_id,
                action_type=record.action_type,
                old_value=record.old_value,
                new_value=record.new_value,
                executed_at=record.executed_at,
                executed_by=record.executed_by,
                result=record.result.value,
                notes=record.notes,
                execution_id=record.execution_id,
            )
            for record in records
        ]

    @staticmethod
    def _validate(model, payload):
        if isinstance(payload, model):
            return payload
        try:
            return model.model_validate(dict(payload))
        except ValidationError as exc:
            raise RuleDefinitionError(_validation_message(exc)) from exc

    @staticmethod
    def _to_dto(rule: WorkflowRule) -> RuleDTO:
        return RuleDTO(
            id=rule.id,
            name=rule.name,
            trigger_type=rule.trigger_type,
            conditions=dict(rule.conditions),
            actions=[action.to_dict() for action in rule.actions],
            priority=rule.priority,
            enabled=rule.enabled,
            created_at=rule.created_at,
            last_modified=rule.last_modified,
            created_by=rule.created_by,
        )
