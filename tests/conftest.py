from __future__ import annotations

import asyncio
import copy

import pytest

from roadmap_ai.agents.llm.base import LLMClient


class FakeLLM(LLMClient):
    """Returns (or raises) scripted outputs in order, optionally holding each call on a gate."""

    def __init__(self, outputs: list[object], gate: asyncio.Event | None = None) -> None:
        self._outputs = list(outputs)
        self.gate = gate
        self.prompts: list[str] = []

    @property
    def calls(self) -> int:
        return len(self.prompts)

    async def generate_text(self, *, system: str, user: str, temperature: float | None = None) -> str:
        self.prompts.append(user)
        if self.gate is not None:
            await self.gate.wait()
        if not self._outputs:
            raise RuntimeError("no_more_outputs")
        next_item = self._outputs.pop(0)
        if isinstance(next_item, BaseException):
            raise next_item
        return str(next_item)


class SleepRecorder:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


DOCKER_OUTPUT = (
    '{"courseTitle":"Docker Essentials","overview":"Learn containers","modules":[{"title":'
    '"Fundamental Container Concepts","description":"What containers are","difficulty":"Beginner",'
    '"estimatedTime":"15 Menit","subTopics":["Images","Containers"]}]}'
)

_SYLLABUS = {
    "courseTitle": "Docker Essentials",
    "overview": "Learn containers from the ground up",
    "modules": [
        {
            "title": "Fundamental Container Concepts",
            "description": "What containers are and why they matter",
            "difficulty": "Beginner",
            "estimatedTime": "20 minutes",
            "subTopics": ["Images", "Containers", "Registries"],
        },
        {
            "title": "Building Images With Dockerfiles",
            "description": "Writing Dockerfiles and understanding layers",
            "difficulty": "Intermediate",
            "estimatedTime": "30 minutes",
            "subTopics": ["FROM and RUN", "Layer caching"],
        },
    ],
}

_CONTENT = {
    "title": "Fundamental Container Concepts",
    "markdownContent": "# Containers\n\nA container is an **isolated process**.\n\n## Images\n\n- Layers\n- Tags",
    "quiz": [
        {
            "question": "What does a container image contain?",
            "options": [
                {"id": "a", "text": "A filesystem snapshot and metadata", "isCorrect": True},
                {"id": "b", "text": "A running virtual machine", "isCorrect": False},
            ],
            "explanation": "Images are layered filesystem snapshots plus configuration.",
        }
    ],
}


@pytest.fixture
def syllabus_payload() -> dict:
    return copy.deepcopy(_SYLLABUS)


@pytest.fixture
def content_payload() -> dict:
    return copy.deepcopy(_CONTENT)


@pytest.fixture
def fake_llm():
    return FakeLLM


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def docker_output() -> str:
    return DOCKER_OUTPUT
