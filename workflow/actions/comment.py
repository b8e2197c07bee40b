"""add_comment handler."""

from collections.abc import Mapping
from typing import Any

from casedesk_sdk.utils.datetime import utc_now
from core.application.interfaces import ICaseStore
from core.domain.entities import SYSTEM_ACTOR, CaseComment, CaseSnapshot
from core.domain.enums import ActionType
from core.domain.exceptions import ActionExecutionError

from ..models import ActionResult, ExecutionContext
from ..templates import format_message
from .base import ActionHandler, Clock, require


class AddCommentHandler(ActionHandler):
    action_type = ActionType.ADD_COMMENT

    def __init__(self, case_store: ICaseStore, clock: Clock = utc_now) -> None:
        self._case_store = case_store
        self._clock = clock

    async def execute(
        self, params: Mapping[str, Any], case: CaseSnapshot, ctx: ExecutionContext
    ) -> ActionResult:
        template = require(params, "comment", self.action_type)
        text = format_message(template, case.as_dict(), ctx.template_values())
        comment = CaseComment(
            comment=text,
            comment_type=params.get("commentType") or "workflow",
            is_internal=bool(params.get("isInternal", True)),
            author=SYSTEM_ACTOR,
            created_at=self._clock(),
        )
        result = await self._case_store.append_comment(case.id, comment)
        if not result.success:
            raise ActionExecutionError(
                result.error or f"Could not add comment to case {case.id}",
                action_type=self.action_type.value,
            )
        return ActionResult(action=self.action_type.value, success=True, new_value=text)
