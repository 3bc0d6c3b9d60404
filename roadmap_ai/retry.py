## Bounded retry with exponential backoff
import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, TypeVar

import structlog

from roadmap_ai.errors import GenerationError, classify
from roadmap_ai.settings import Settings

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class RequestState(str, Enum):
    RECEIVED = "RECEIVED"
    DEDUP_WAIT = "DEDUP_WAIT"
    GENERATING = "GENERATING"
    PARSING = "PARSING"
    VALIDATING = "VALIDATING"
    BACKOFF = "BACKOFF"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 2
    initial_delay: float = 1.0
    max_delay: float = 8.0

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.initial_delay < 0 or self.max_delay < 0:
            raise ValueError("retry delays must be >= 0")

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetryPolicy":
        return cls(
            max_attempts=settings.retry_max_attempts,
            initial_delay=settings.retry_initial_delay,
            max_delay=settings.retry_max_delay,
        )

    def backoff_delay(self, attempt: int) -> float:
        """Delay after failed attempt number `attempt` (1-based)."""
        return min(self.initial_delay * 2 ** (attempt - 1), self.max_delay)


async def run_with_retry(
    operation: Callable[[int], Awaitable[T]],
    policy: RetryPolicy,
    *,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    log=logger,
) -> T:
    """
    Run `operation(attempt)` until it succeeds, fails with a non-retryable
    error, or `policy.max_attempts` is used up. Failures are always raised
    as a classified GenerationError.
    """
    last_error: GenerationError | None = None

    for attempt in range(1, policy.max_attempts + 1):
        try:
            result = await operation(attempt)
        except Exception as e:
            last_error = classify(e)
            log.warning(
                "generation_failed",
                attempt=attempt,
                max_attempts=policy.max_attempts,
                kind=last_error.kind.value,
                retryable=last_error.retryable,
                error=last_error.message,
            )
            if not last_error.retryable or attempt == policy.max_attempts:
                break

            delay = policy.backoff_delay(attempt)
            log.info("state_transition", state=RequestState.BACKOFF.value, attempt=attempt, delay=delay)
            await sleep(delay)
            continue

        log.info("state_transition", state=RequestState.SUCCEEDED.value, attempt=attempt)
        return result

    log.info("state_transition", state=RequestState.FAILED.value, kind=last_error.kind.value)
    raise last_error
