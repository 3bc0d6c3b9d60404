from __future__ import annotations

import pytest

from roadmap_ai.errors import ErrorKind, GenerationError
from roadmap_ai.retry import RetryPolicy, run_with_retry
from roadmap_ai.settings import Settings


class _ScriptedOperation:
    def __init__(self, outcomes: list[object]) -> None:
        self._outcomes = list(outcomes)
        self.attempts: list[int] = []

    async def __call__(self, attempt: int):
        self.attempts.append(attempt)
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.mark.asyncio
async def test_retryable_failure_backs_off_once_then_succeeds(sleep_recorder) -> None:
    operation = _ScriptedOperation([TimeoutError("timed out"), "document"])
    policy = RetryPolicy(max_attempts=2, initial_delay=0.5, max_delay=4.0)

    result = await run_with_retry(operation, policy, sleep=sleep_recorder)

    assert result == "document"
    assert operation.attempts == [1, 2]
    assert sleep_recorder.delays == [0.5]


@pytest.mark.asyncio
async def test_non_retryable_failure_stops_immediately(sleep_recorder) -> None:
    operation = _ScriptedOperation([RuntimeError("Invalid API key"), "never reached"])
    policy = RetryPolicy(max_attempts=2)

    with pytest.raises(GenerationError) as excinfo:
        await run_with_retry(operation, policy, sleep=sleep_recorder)

    assert excinfo.value.kind is ErrorKind.CONFIG
    assert operation.attempts == [1]
    assert sleep_recorder.delays == []


@pytest.mark.asyncio
async def test_exhausted_attempts_raise_the_last_error(sleep_recorder) -> None:
    operation = _ScriptedOperation(
        [
            TimeoutError("timed out"),
            RuntimeError("connection reset by peer"),
            RuntimeError("Invalid response format: Expecting value"),
        ]
    )
    policy = RetryPolicy(max_attempts=3, initial_delay=1.0, max_delay=8.0)

    with pytest.raises(GenerationError) as excinfo:
        await run_with_retry(operation, policy, sleep=sleep_recorder)

    assert excinfo.value.kind is ErrorKind.INVALID_RESPONSE_FORMAT
    assert operation.attempts == [1, 2, 3]
    assert sleep_recorder.delays == [1.0, 2.0]


@pytest.mark.asyncio
async def test_single_attempt_policy_never_sleeps(sleep_recorder) -> None:
    operation = _ScriptedOperation([TimeoutError("timed out")])

    with pytest.raises(GenerationError):
        await run_with_retry(operation, RetryPolicy(max_attempts=1), sleep=sleep_recorder)

    assert sleep_recorder.delays == []


def test_backoff_doubles_and_is_capped() -> None:
    policy = RetryPolicy(max_attempts=5, initial_delay=1.0, max_delay=3.0)
    assert [policy.backoff_delay(n) for n in range(1, 5)] == [1.0, 2.0, 3.0, 3.0]


def test_policy_rejects_zero_attempts() -> None:
    with pytest.raises(ValueError):
        RetryPolicy(max_attempts=0)


def test_policy_from_settings() -> None:
    policy = RetryPolicy.from_settings(
        Settings(retry_max_attempts=3, retry_initial_delay=0.25, retry_max_delay=2.0)
    )
    assert policy == RetryPolicy(max_attempts=3, initial_delay=0.25, max_delay=2.0)
