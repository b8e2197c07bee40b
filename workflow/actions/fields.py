"""update_field handler."""

from collections.abc import Mapping
from typing import Any

from casedesk_sdk.utils.datetime import utc_now
from core.application.interfaces import ICaseStore
from core.domain.entities import CaseSnapshot
from core.domain.enums import ActionType, CasePriority
from core.domain.exceptions import ActionExecutionError

from ..models import ActionResult, ExecutionContext
from ..transitions import StatusTransitionValidator
from .base import CaseWritingHandler, Clock, require

NUMERIC_OPERATORS = ("add", "subtract", "multiply")
TEXT_OPERATORS = ("append", "prepend")

# Identity and concurrency-token fields are owned by the case store
PROTECTED_FIELDS = frozenset({"id", "created_at", "last_modified"})


def _number(value: Any, action_type: str) -> int | float:
    if value is None or value == "":
        return 0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    try:
        text = str(value)
        return int(text) if text.lstrip("-").isdigit() else float(text)
    except ValueError:
        raise ActionExecutionError(f"Value {value!r} is not numeric", action_type=action_type)


def apply_field_operator(current: Any, operand: Any, operator: str | None, action_type: str = "update_field") -> Any:
    """Combine the current field value with the operand; no operator overwrites."""
    if operator in NUMERIC_OPERATORS:
        left, right = _number(current, action_type), _number(operand, action_type)
        if operator == "add":
            return left + right
        if operator == "subtract":
            return left - right
        return left * right
    if operator in TEXT_OPERATORS:
        left = "" if current is None else str(current)
        right = "" if operand is None else str(operand)
        return left + right if operator == "append" else right + left
    return operand


class UpdateFieldHandler(CaseWritingHandler):
    action_type = ActionType.UPDATE_FIELD

    def __init__(
        self,
        case_store: ICaseStore,
        validator: StatusTransitionValidator,
        clock: Clock = utc_now,
    ) -> None:
        super().__init__(case_store, clock)
        self._validator = validator

    async def execute(
        self, params: Mapping[str, Any], case: CaseSnapshot, ctx: ExecutionContext
    ) -> ActionResult:
        field_name = require(params, "field", self.action_type)
        if field_name in PROTECTED_FIELDS:
            raise ActionExecutionError(
                f"Field {field_name!r} cannot be updated by a workflow action",
                action_type=self.action_type.value,
            )
        operator = params.get("operator")
        old_value = case.get(field_name)
        new_value = apply_field_operator(old_value, params.get("value"), operator, self.action_type.value)

        if field_name == "status" and new_value != old_value:
            # Status writes always go through the transition graph
            self._validator.validate(old_value, new_value)
        if field_name == "priority" and new_value not in CasePriority.values():
            raise ActionExecutionError(
                f"Unknown priority: {new_value!r}", action_type=self.action_type.value
            )

        await self._persist(case, {field_name: new_value, "last_modified": self._clock()})
        return ActionResult(
            action=self.action_type.value,
            success=True,
            old_value=old_value,
            new_value=new_value,
            details={"field": field_name, "operator": operator},
        )
