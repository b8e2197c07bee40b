"""Action executor - dispatches actions to registered handlers."""

import asyncio
import time
from collections.abc import Iterable

from casedesk_sdk.logging import get_logger
from casedesk_sdk.utils.datetime import utc_now
from core.application.interfaces import ICaseStore, IFollowupScheduler, INotificationService
from core.domain.entities import Action, CaseSnapshot
from core.domain.enums import ActionType
from core.domain.exceptions import DispatchTimeoutError, WorkflowError

from ..models import ActionResult, ExecutionContext
from ..retry import RetryRunner
from ..transitions import StatusTransitionValidator
from .assignment import AssignCaseHandler
from .base import ActionHandler, Clock
from .comment import AddCommentHandler
from .escalation import EscalateCaseHandler
from .fields import UpdateFieldHandler
from .followup import ScheduleFollowupHandler
from .notification import NotificationDispatcher, SendNotificationHandler
from .status import ChangeStatusHandler

DEFAULT_ACTION_TIMEOUT_SECONDS = 30.0


class ActionExecutor:
    """Runs a single action through its handler with a timeout.

    ``execute`` never raises: handler errors and timeouts come back as a
    failed ActionResult.
    """

    def __init__(
        self,
        handlers: Iterable[ActionHandler] = (),
        timeout_seconds: float = DEFAULT_ACTION_TIMEOUT_SECONDS,
    ) -> None:
        self._handlers: dict[ActionType, ActionHandler] = {}
        self._timeout_seconds = timeout_seconds
        self._logger = get_logger("workflow.executor")
        for handler in handlers:
            self.register(handler)

    @classmethod
    def with_default_handlers(
        cls,
        case_store: ICaseStore,
        notification_service: INotificationService,
        followup_scheduler: IFollowupScheduler,
        validator: StatusTransitionValidator | None = None,
        retry: RetryRunner | None = None,
        timeout_seconds: float = DEFAULT_ACTION_TIMEOUT_SECONDS,
        fallback_assignee: str = "unassigned",
        escalation_channel: str = "email",
        clock: Clock = utc_now,
    ) -> "ActionExecutor":
        """Build an executor with one handler per ActionType."""
        validator = validator or StatusTransitionValidator()
        dispatcher = NotificationDispatcher(notification_service, retry)
        return cls(
            handlers=[
                ChangeStatusHandler(case_store, validator, clock),
                AssignCaseHandler(case_store, fallback_assignee=fallback_assignee, clock=clock),
                SendNotificationHandler(dispatcher, default_channel=escalation_channel),
                EscalateCaseHandler(case_store, dispatcher, channel=escalation_channel, clock=clock),
                AddCommentHandler(case_store, clock),
                UpdateFieldHandler(case_store, validator, clock),
                ScheduleFollowupHandler(followup_scheduler, clock),
            ],
            timeout_seconds=timeout_seconds,
        )

    def register(self, handler: ActionHandler) -> None:
        self._handlers[ActionType(handler.action_type)] = handler

    def handler_for(self, action_type: str) -> ActionHandler | None:
        try:
            return self._handlers.get(ActionType(action_type))
        except ValueError:
            return None

    @property
    def supported_types(self) -> list[str]:
        return [t.value for t in self._handlers]

    async def execute(self, action: Action, case: CaseSnapshot, ctx: ExecutionContext) -> ActionResult:
        handler = self.handler_for(action.type)
        if handler is None:
            self._logger.warning(f"Unknown action type {action.type!r} in rule {ctx.rule_id}")
            return ActionResult(action=action.type, success=False, error=f"Unknown action type: {action.type}")

        started = time.monotonic()
        try:
            result = await asyncio.wait_for(
                handler.execute(action.parameters, case, ctx), timeout=self._timeout_seconds
            )
        except asyncio.TimeoutError:
            error = DispatchTimeoutError(action.type, self._timeout_seconds)
            self._logger.warning(
                f"Action {action.type} timed out after {self._timeout_seconds}s "
                f"(case {case.id}, rule {ctx.rule_id})"
            )
            result = ActionResult(action=action.type, success=False, error=str(error))
        except WorkflowError as exc:
            self._logger.warning(f"Action {action.type} failed for case {case.id}: {exc}")
            result = ActionResult(action=action.type, success=False, error=str(exc))
        except Exception as exc:
            self._logger.error(
                f"Action {action.type} raised for case {case.id}: {exc}", exc_info=True
            )
            result = ActionResult(action=action.type, success=False, error=str(exc) or exc.__class__.__name__)

        result.duration_ms = int((time.monotonic() - started) * 1000)
        return result
