"""Bounded retry policy for external dispatches."""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from casedesk_sdk.logging import get_logger

Backoff = Callable[[int], float]
Sleep = Callable[[float], Awaitable[None]]


def exponential_backoff(base_seconds: float = 1.0, max_seconds: float = 10.0, factor: float = 2.0) -> Backoff:
    """Delay before the retry that follows ``attempt`` (1-based)."""

    def _delay(attempt: int) -> float:
        return min(base_seconds * factor ** (attempt - 1), max_seconds)

    return _delay


def no_backoff(attempt: int) -> float:
    return 0.0


@dataclass
class RetryPolicy:
    """Retry policy for external calls."""

    max_attempts: int = 3
    backoff: Backoff = field(default=no_backoff)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")


@dataclass
class RetryOutcome:
    """Result of running an operation under a retry policy."""

    success: bool
    attempts: int
    error: str | None = None


class RetryRunner:
    """Executes boolean-returning async operations under a RetryPolicy.

    A ``False`` return and a raised exception both count as a failed attempt.
    ``sleep`` is injectable so tests do not wait on real timers.
    """

    def __init__(self, policy: RetryPolicy | None = None, sleep: Sleep = asyncio.sleep) -> None:
        self.policy = policy or RetryPolicy(max_attempts=1)
        self._sleep = sleep
        self._logger = get_logger("workflow.retry")

    async def run(self, operation: Callable[[], Awaitable[bool]], description: str = "operation") -> RetryOutcome:
        last_error: str | None = None
        for attempt in range(1, self.policy.max_attempts + 1):
            try:
                if await operation():
                    return RetryOutcome(success=True, attempts=attempt)
                last_error = "dispatch returned false"
            except Exception as exc:
                last_error = str(exc) or exc.__class__.__name__

            if attempt < self.policy.max_attempts:
                delay = self.policy.backoff(attempt)
                self._logger.warning(
                    f"{description} failed (attempt {attempt}/{self.policy.max_attempts}): "
                    f"{last_error}; retrying in {delay:.2f}s"
                )
                if delay > 0:
                    await self._sleep(delay)

        return RetryOutcome(success=False, attempts=self.policy.max_attempts, error=last_error)
