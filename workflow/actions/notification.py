"""send_notification handler and the retrying dispatcher it shares with escalation."""

from collections.abc import Mapping
from typing import Any

from core.application.interfaces import INotificationService
from core.domain.entities import CaseSnapshot
from core.domain.enums import ActionType

from ..models import ActionResult, ExecutionContext
from ..retry import RetryRunner
from ..templates import format_message
from .base import ActionHandler, require


def _as_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return [str(item) for item in value]


class NotificationDispatcher:
    """Sends one message per (recipient, channel) pair under a retry policy."""

    def __init__(self, service: INotificationService, retry: RetryRunner | None = None) -> None:
        self._service = service
        self._retry = retry or RetryRunner()

    async def dispatch(self, recipient: str, message: str, channel: str) -> dict[str, Any]:
        outcome = await self._retry.run(
            lambda: self._service.send(recipient, message, channel),
            description=f"{channel} notification to {recipient}",
        )
        entry: dict[str, Any] = {
            "recipient": recipient,
            "channel": channel,
            "success": outcome.success,
            "attempts": outcome.attempts,
        }
        if outcome.error and not outcome.success:
            entry["error"] = outcome.error
        return entry


class SendNotificationHandler(ActionHandler):
    action_type = ActionType.SEND_NOTIFICATION

    def __init__(self, dispatcher: NotificationDispatcher, default_channel: str = "email") -> None:
        self._dispatcher = dispatcher
        self._default_channel = default_channel

    async def execute(
        self, params: Mapping[str, Any], case: CaseSnapshot, ctx: ExecutionContext
    ) -> ActionResult:
        recipients = _as_list(require(params, "recipients", self.action_type))
        channels = _as_list(params.get("channels")) or [self._default_channel]
        message = format_message(params.get("template"), case.as_dict(), ctx.template_values())

        notifications = []
        for recipient in recipients:
            for channel in channels:
                notifications.append(await self._dispatcher.dispatch(recipient, message, channel))

        failed = [n for n in notifications if not n["success"]]
        return ActionResult(
            action=self.action_type.value,
            success=not failed,
            new_value=message,
            error=f"{len(failed)} of {len(notifications)} notification(s) failed" if failed else None,
            notifications=notifications,
        )
