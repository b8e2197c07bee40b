"""Escalation scheduler - periodic and daily sweeps that raise synthetic triggers."""

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime

from casedesk_sdk.logging import get_logger
from casedesk_sdk.utils.datetime import ensure_utc, utc_now
from core.application.interfaces import ICaseStore, INotificationService
from core.domain.entities import CaseSnapshot
from core.domain.enums import CasePriority, CaseStatus, TriggerType
from core.domain.exceptions import SweepIterationError
from core.settings.modules.workflow_settings import WorkflowSettings

from .engine import WorkflowEngine
from .models import SweepResult

PERIODIC = "periodic"
DAILY = "daily"

# Operational alert severities (0-100)
SWEEP_FAILURE_SEVERITY = 60
SWEEP_ABORTED_SEVERITY = 80


@dataclass(frozen=True)
class EscalationThresholds:
    """Case age limits in hours."""

    response_time_hours: float = 24.0
    priority_high_hours: float = 8.0
    priority_critical_hours: float = 4.0

    @classmethod
    def from_settings(cls, settings: WorkflowSettings) -> "EscalationThresholds":
        return cls(
            response_time_hours=settings.response_time_threshold_hours,
            priority_high_hours=settings.priority_high_threshold_hours,
            priority_critical_hours=settings.priority_critical_threshold_hours,
        )


def case_age_hours(case: CaseSnapshot, now: datetime) -> float | None:
    if case.created_at is None:
        return None
    return (ensure_utc(now) - ensure_utc(case.created_at)).total_seconds() / 3600


class EscalationScheduler:
    """Drives time-based triggers into the workflow engine.

    Each sweep kind runs at most once at a time; a tick that arrives while the
    previous sweep of the same kind is still running is skipped. Sweeps check
    their time budget before each case and stop early when it is spent.
    When an ``alerts`` service is given, a sweep that could not list cases
    or had per-case failures sends one operational summary through
    ``INotificationService.notify``.
    """

    def __init__(
        self,
        engine: WorkflowEngine,
        case_store: ICaseStore,
        thresholds: EscalationThresholds | None = None,
        periodic_priority_checks: bool = True,
        budget_seconds: float | None = None,
        clock: Callable[[], datetime] = utc_now,
        monotonic: Callable[[], float] = time.monotonic,
        alerts: INotificationService | None = None,
    ) -> None:
        self._engine = engine
        self._case_store = case_store
        self._thresholds = thresholds or EscalationThresholds()
        self._periodic_priority_checks = periodic_priority_checks
        self._budget_seconds = budget_seconds
        self._clock = clock
        self._monotonic = monotonic
        self._alerts = alerts
        self._locks = {PERIODIC: asyncio.Lock(), DAILY: asyncio.Lock()}
        self._logger = get_logger("workflow.scheduler")

    # ------------------------------------------------------------------
    # Trigger decisions
    # ------------------------------------------------------------------

    def _priority_triggers(self, case: CaseSnapshot, age: float) -> list[str]:
        if case.priority == CasePriority.HIGH and age > self._thresholds.priority_high_hours:
            return [TriggerType.PRIORITY_ESCALATION.value]
        if case.priority == CasePriority.CRITICAL and age > self._thresholds.priority_critical_hours:
            return [TriggerType.CRITICAL_ESCALATION.value]
        return []

    def periodic_triggers(self, case: CaseSnapshot, now: datetime) -> list[str]:
        """Triggers the periodic check raises for ``case``."""
        age = case_age_hours(case, now)
        if age is None:
            return []
        triggers = []
        if case.status == CaseStatus.NEW and age > self._thresholds.response_time_hours:
            triggers.append(TriggerType.RESPONSE_TIME_EXCEEDED.value)
        if self._periodic_priority_checks:
            triggers.extend(self._priority_triggers(case, age))
        return triggers

    def escalation_triggers(self, case: CaseSnapshot, now: datetime) -> list[str]:
        """Triggers the daily escalation sweep raises for ``case``."""
        age = case_age_hours(case, now)
        if age is None:
            return []
        return self._priority_triggers(case, age)

    # ------------------------------------------------------------------
    # Sweeps
    # ------------------------------------------------------------------

    async def periodic_check(self, budget_seconds: float | None = None) -> SweepResult:
        return await self._sweep(
            PERIODIC, self._case_store.list_active_cases, self.periodic_triggers, budget_seconds
        )

    async def escalation_sweep(self, budget_seconds: float | None = None) -> SweepResult:
        return await self._sweep(
            DAILY,
            self._case_store.list_cases_eligible_for_escalation,
            self.escalation_triggers,
            budget_seconds,
        )

    async def on_periodic_tick(self) -> SweepResult:
        return await self.periodic_check()

    async def on_daily_tick(self) -> SweepResult:
        return await self.escalation_sweep()

    async def _sweep(
        self,
        kind: str,
        fetch: Callable[[], Awaitable[list[CaseSnapshot]]],
        decide: Callable[[CaseSnapshot, datetime], list[str]],
        budget_seconds: float | None,
    ) -> SweepResult:
        result = SweepResult(kind=kind, started_at=self._clock())
        lock = self._locks[kind]
        if lock.locked():
            self._logger.info(f"{kind} sweep already running, skipping this tick")
            result.skipped = True
            result.finished_at = self._clock()
            return result

        async with lock:
            budget = budget_seconds if budget_seconds is not None else self._budget_seconds
            deadline = self._monotonic() + budget if budget is not None else None

            try:
                cases = await fetch()
            except Exception as exc:
                self._logger.error(f"{kind} sweep could not list cases: {exc}", exc_info=True)
                result.error = str(exc)
                result.finished_at = self._clock()
                await self._alert(
                    f"{kind} sweep aborted: could not list cases ({exc})", SWEEP_ABORTED_SEVERITY
                )
                return result

            self._logger.info(f"Running {kind} sweep over {len(cases)} case(s)")
            for case in cases:
                if deadline is not None and self._monotonic() >= deadline:
                    self._logger.warning(
                        f"{kind} sweep budget exhausted after {result.cases_examined} case(s)"
                    )
                    result.cancelled = True
                    break

                result.cases_examined += 1
                try:
                    for trigger in decide(case, self._clock()):
                        result.triggers_raised += 1
                        result.results.append(await self._engine.process(case, trigger))
                except Exception as exc:
                    error = SweepIterationError(case.id, exc)
                    self._logger.error(str(error), exc_info=True)
                    result.failures.append({"case_id": case.id, "error": str(exc)})

            result.finished_at = self._clock()
            self._logger.info(
                f"{kind} sweep finished: {result.cases_examined} case(s), "
                f"{result.triggers_raised} trigger(s), {len(result.failures)} failure(s)"
            )
            if result.failures:
                failed = ", ".join(f["case_id"] for f in result.failures)
                await self._alert(
                    f"{kind} sweep: {len(result.failures)} of {result.cases_examined} case(s) failed ({failed})",
                    SWEEP_FAILURE_SEVERITY,
                )
            return result

    async def _alert(self, message: str, severity: int) -> None:
        if self._alerts is None:
            return
        try:
            await self._alerts.notify(message, severity)
        except Exception as exc:
            self._logger.error(f"Sweep alert could not be sent: {exc}", exc_info=True)
