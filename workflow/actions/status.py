"""change_status handler."""

from collections.abc import Mapping
from typing import Any

from casedesk_sdk.utils.datetime import utc_now
from core.application.interfaces import ICaseStore
from core.domain.entities import CaseSnapshot
from core.domain.enums import ActionType

from ..models import ActionResult, ExecutionContext
from ..transitions import StatusTransitionValidator
from .base import CaseWritingHandler, Clock, require


class ChangeStatusHandler(CaseWritingHandler):
    action_type = ActionType.CHANGE_STATUS

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
        new_status = require(params, "newStatus", self.action_type)
        reason = params.get("reason")
        old_status = case.status

        if old_status == new_status:
            # Already there: a redelivered trigger must not fail
            return ActionResult(
                action=self.action_type.value,
                success=True,
                old_value=old_status,
                new_value=new_status,
                details={"reason": reason, "noop": True},
            )

        self._validator.validate(old_status, new_status)

        await self._persist(
            case,
            {
                "status": new_status,
                "last_modified": self._clock(),
                "notes": f"Status changed by workflow: {reason or 'Automatic transition'}",
            },
        )
        return ActionResult(
            action=self.action_type.value,
            success=True,
            old_value=old_status,
            new_value=new_status,
            details={"reason": reason},
        )
