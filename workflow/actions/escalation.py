"""escalate_case handler."""

from collections.abc import Mapping
from typing import Any

from casedesk_sdk.utils.datetime import utc_now
from core.application.interfaces import ICaseStore
from core.domain.entities import CaseSnapshot
from core.domain.enums import ActionType, CasePriority
from core.domain.exceptions import ActionExecutionError

from ..models import ActionResult, ExecutionContext
from ..templates import format_message
from .base import CaseWritingHandler, Clock
from .notification import NotificationDispatcher


class EscalateCaseHandler(CaseWritingHandler):
    action_type = ActionType.ESCALATE_CASE

    def __init__(
        self,
        case_store: ICaseStore,
        dispatcher: NotificationDispatcher | None = None,
        channel: str = "email",
        clock: Clock = utc_now,
    ) -> None:
        super().__init__(case_store, clock)
        self._dispatcher = dispatcher
        self._channel = channel

    async def execute(
        self, params: Mapping[str, Any], case: CaseSnapshot, ctx: ExecutionContext
    ) -> ActionResult:
        try:
            level = int(params.get("escalationLevel", 1))
        except (TypeError, ValueError):
            raise ActionExecutionError(
                f"Invalid escalationLevel: {params.get('escalationLevel')!r}",
                action_type=self.action_type.value,
            )
        escalate_to = params.get("escalationTo")
        reason = params.get("reason")

        old_priority = case.priority
        new_priority = CasePriority.escalate(old_priority, level).value
        now = self._clock()

        await self._persist(
            case,
            {
                "priority": new_priority,
                "escalated_at": now,
                "escalated_to": escalate_to,
                "escalation_reason": reason,
                "last_modified": now,
            },
        )

        details: dict[str, Any] = {
            "escalationLevel": level,
            "escalatedTo": escalate_to,
            "escalatedAt": now.isoformat(),
            "escalationReason": reason,
        }
        notifications = []
        error = None
        if escalate_to and self._dispatcher is not None:
            context = {**ctx.template_values(), "reason": reason}
            message = format_message("escalation", case.as_dict(), context)
            notifications.append(await self._dispatcher.dispatch(escalate_to, message, self._channel))
            if not notifications[0]["success"]:
                error = f"Escalation notice to {escalate_to} failed"

        return ActionResult(
            action=self.action_type.value,
            success=error is None,
            old_value=old_priority,
            new_value=new_priority,
            error=error,
            details=details,
            notifications=notifications,
        )
