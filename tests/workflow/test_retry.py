"""Tests for RetryRunner and backoff."""

import pytest

from workflow.retry import RetryPolicy, RetryRunner, exponential_backoff


class FakeSleep:
    """Records requested delays instead of sleeping."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


def test_exponential_backoff_is_capped():
    backoff = exponential_backoff(base_seconds=1.0, max_seconds=5.0)
    assert [backoff(n) for n in range(1, 6)] == [1.0, 2.0, 4.0, 5.0, 5.0]


def test_policy_requires_one_attempt():
    with pytest.raises(ValueError):
        RetryPolicy(max_attempts=0)


@pytest.mark.asyncio
async def test_retry_success_after_failures():
    sleep = FakeSleep()
    runner = RetryRunner(RetryPolicy(max_attempts=3, backoff=exponential_backoff(1.0, 10.0)), sleep=sleep)
    calls = {"n": 0}

    async def flaky() -> bool:
        calls["n"] += 1
        if calls["n"] == 1:
            raise ConnectionError("temporary error")
        return calls["n"] >= 3

    outcome = await runner.run(flaky)

    assert outcome.success is True
    assert outcome.attempts == 3
    assert sleep.delays == [1.0, 2.0]


@pytest.mark.asyncio
async def test_retry_gives_up_after_max_attempts():
    sleep = FakeSleep()
    runner = RetryRunner(RetryPolicy(max_attempts=2), sleep=sleep)

    async def always_false() -> bool:
        return False

    outcome = await runner.run(always_false)

    assert outcome.success is False
    assert outcome.attempts == 2
    assert outcome.error == "dispatch returned false"
    # no_backoff never sleeps
    assert sleep.delays == []
