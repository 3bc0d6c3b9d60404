## Shared FastAPI dependencies
from functools import lru_cache

from roadmap_ai.agents.llm.client import get_llm_client
from roadmap_ai.retry import RetryPolicy
from roadmap_ai.service import RoadmapService
from roadmap_ai.settings import settings


@lru_cache
def get_service() -> RoadmapService:
    return RoadmapService(get_llm_client(settings), RetryPolicy.from_settings(settings))
