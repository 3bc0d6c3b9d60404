## Roadmap generation service: dedup -> retry -> generate + ingest
import asyncio
from typing import Awaitable, Callable

import structlog

from roadmap_ai.agents.llm.base import LLMClient
from roadmap_ai.agents.schemas import ContentDocument, SyllabusDocument
from roadmap_ai.agents.workflow import generate_content_once, generate_syllabus_once
from roadmap_ai.dedupe import InFlightDeduplicator, fingerprint
from roadmap_ai.retry import RequestState, RetryPolicy, run_with_retry

logger = structlog.get_logger(__name__)


class RoadmapService:
    """
    Produces SyllabusDocument / ContentDocument or raises GenerationError.
    Each instance owns its own in-flight map.
    """

    def __init__(self, llm: LLMClient, policy: RetryPolicy | None = None, * ,
    deduplicator: InFlightDeduplicator | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep):
        self.llm = llm
        self.policy = policy or RetryPolicy()
        self.deduplicator = deduplicator or InFlightDeduplicator()
        self._sleep = sleep

    @staticmethod
    def syllabus_key(topic: str) -> str:
        return fingerprint("syllabus", topic)

    @staticmethod
    def content_key(topic: str, module_title: str) -> str:
        return fingerprint("content", topic, module_title)

    def is_inflight(self, key: str) -> bool:
        return key in self.deduplicator

    async def _dedupe(self, key: str, factory, log):
        if key in self.deduplicator:
            log.info("state_transition", state=RequestState.DEDUP_WAIT.value)
        return await self.deduplicator.run(key, factory)

    async def generate_syllabus(self, topic: str) -> SyllabusDocument:
        log = logger.bind(topic=topic)
        log.info("state_transition", state=RequestState.RECEIVED.value)

        async def run() -> SyllabusDocument:
            return await run_with_retry(
                lambda attempt: generate_syllabus_once(self.llm, topic, attempt=attempt),
                self.policy,
                sleep=self._sleep,
                log=log,
            )

        return await self._dedupe(self.syllabus_key(topic), run, log)

    async def generate_content(self, topic: str, module_title: str) -> ContentDocument:
        log = logger.bind(topic=topic, module_title=module_title)
        log.info("state_transition", state=RequestState.RECEIVED.value)

        async def run() -> ContentDocument:
            return await run_with_retry(
                lambda attempt: generate_content_once(self.llm, topic, module_title, attempt=attempt),
                self.policy,
                sleep=self._sleep,
                log=log,
            )

        return await self._dedupe(self.content_key(topic, module_title), run, log)

    async def aclose(self) -> None:
        await self.llm.aclose()
