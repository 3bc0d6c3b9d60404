## In-flight request deduplication
import asyncio
from typing import Awaitable, Callable, Dict, TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")


def _retrieve_exception(task: asyncio.Task) -> None:
    # Marks the exception as seen when every waiter has walked away.
    if not task.cancelled():
        task.exception()


def fingerprint(*fields: str | None) -> str:
    """Case-folded, trimmed composite key of the fields that define a request."""
    return "::".join((f or "").strip().lower() for f in fields)


class InFlightDeduplicator:
    """
    Maps a fingerprint to the task currently producing its result.

    Concurrent callers with the same fingerprint share one run and all see
    its outcome, value or exception. Entries only live while the run does.
    Lookup and insert happen without an await in between, so on a single
    event loop the check-then-insert is atomic. Not safe across threads.
    """

    def __init__(self):
        self._inflight: Dict[str, asyncio.Task] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._inflight

    def __len__(self) -> int:
        return len(self._inflight)

    async def _run_and_release(self, key: str, factory: Callable[[], Awaitable[T]]) -> T:
        try:
            return await factory()
        finally:
            if self._inflight.get(key) is asyncio.current_task():
                del self._inflight[key]

    async def run(self, key: str, factory: Callable[[], Awaitable[T]]) -> T:
        task = self._inflight.get(key)
        if task is not None:
            logger.info("dedup_join", fingerprint=key)
        else:
            task = asyncio.get_running_loop().create_task(self._run_and_release(key, factory))
            task.add_done_callback(_retrieve_exception)
            self._inflight[key] = task

        # A caller that stops waiting must not cancel the run the others share.
        return await asyncio.shield(task)
