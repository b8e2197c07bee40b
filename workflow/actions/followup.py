"""schedule_followup handler."""

from collections.abc import Mapping
from typing import Any

from casedesk_sdk.utils.datetime import parse_datetime, utc_now
from core.application.interfaces import IFollowupScheduler
from core.domain.entities import CaseSnapshot, Followup
from core.domain.enums import ActionType
from core.domain.exceptions import ActionExecutionError

from ..models import ActionResult, ExecutionContext
from .base import ActionHandler, Clock, require


class ScheduleFollowupHandler(ActionHandler):
    """Hands a follow-up to the scheduling collaborator; nothing happens to the case now."""

    action_type = ActionType.SCHEDULE_FOLLOWUP

    def __init__(self, scheduler: IFollowupScheduler, clock: Clock = utc_now) -> None:
        self._scheduler = scheduler
        self._clock = clock

    async def execute(
        self, params: Mapping[str, Any], case: CaseSnapshot, ctx: ExecutionContext
    ) -> ActionResult:
        raw_date = require(params, "followupDate", self.action_type)
        try:
            followup_date = parse_datetime(raw_date)
        except (TypeError, ValueError):
            raise ActionExecutionError(
                f"Invalid followupDate: {raw_date!r}", action_type=self.action_type.value
            )

        followup = Followup(
            case_id=case.id,
            followup_date=followup_date,
            followup_type=params.get("followupType"),
            assignee=params.get("assignee") or case.assignee,
            created_at=self._clock(),
        )
        accepted = await self._scheduler.schedule(followup)
        return ActionResult(
            action=self.action_type.value,
            success=bool(accepted),
            new_value=followup_date.isoformat(),
            error=None if accepted else "Follow-up was not accepted by the scheduler",
            details={
                "followupType": followup.followup_type,
                "assignee": followup.assignee,
                "status": followup.status,
            },
        )
