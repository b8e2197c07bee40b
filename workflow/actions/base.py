"""Action handler contract and shared persistence helper."""

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from casedesk_sdk.utils.datetime import utc_now
from core.application.interfaces import ICaseStore
from core.domain.entities import CaseSnapshot
from core.domain.enums import ActionType
from core.domain.exceptions import ActionExecutionError

from ..models import ActionResult, ExecutionContext

Clock = Callable[[], datetime]


class ActionHandler(ABC):
    """Executes one kind of action.

    Handlers raise on failure; the executor turns exceptions into failed
    ActionResults. Re-running a handler with the same parameters against a
    case it already changed must be harmless.
    """

    action_type: ActionType

    @abstractmethod
    async def execute(
        self, params: Mapping[str, Any], case: CaseSnapshot, ctx: ExecutionContext
    ) -> ActionResult:
        """Run the action.

        Args:
            params: Action parameters from the rule definition
            case: Case snapshot; updated in place after successful writes
            ctx: Execution context

        Returns:
            ActionResult describing the outcome
        """
        ...


class CaseWritingHandler(ActionHandler):
    """Base for handlers that persist changes through the case store."""

    def __init__(self, case_store: ICaseStore, clock: Clock = utc_now) -> None:
        self._case_store = case_store
        self._clock = clock

    async def _persist(self, case: CaseSnapshot, changes: dict[str, Any]) -> None:
        """Write ``changes`` with an optimistic check, then mirror them on the snapshot."""
        result = await self._case_store.update_case(
            case.id, changes, expected_last_modified=case.last_modified
        )
        if not result.success:
            raise ActionExecutionError(
                result.error or f"Case store rejected update of case {case.id}",
                action_type=self.action_type.value,
            )
        case.apply(changes)


def require(params: Mapping[str, Any], name: str, action_type: ActionType) -> Any:
    value = params.get(name)
    if value is None or value == "":
        raise ActionExecutionError(
            f"Missing required parameter '{name}' for {action_type.value}",
            action_type=action_type.value,
        )
    return value
