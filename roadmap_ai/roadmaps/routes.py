# Roadmap generation API
import time
import uuid

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from roadmap_ai.deps import get_service
from roadmap_ai.errors import GenerationError
from roadmap_ai.service import RoadmapService

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/api/roadmap")


class GenerateRoadmapRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    topic: str = Field(min_length=3, max_length=100)


class GenerateContentRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    topic: str = Field(min_length=3, max_length=100)
    module_title: str = Field(alias="moduleTitle", min_length=3, max_length=150)


def _headers(request_id: str, started: float, cache_status: str | None = None) -> dict:
    headers = {
        "X-Request-ID": request_id,
        "X-Generation-Time": f"{int((time.perf_counter() - started) * 1000)}ms",
    }
    if cache_status:
        headers["X-Cache-Status"] = cache_status
    return headers


def _error_response(e: GenerationError, request_id: str, started: float) -> JSONResponse:
    headers = _headers(request_id, started)
    if e.retryable:
        headers["Retry-After"] = "5"
    body = e.to_dict()
    body.update({"error": e.message, "type": e.kind.value, "requestId": request_id})
    return JSONResponse(
        body,
        status_code=e.http_status,
        headers=headers,
    )


@router.post("/generate")
async def generate_roadmap(body: GenerateRoadmapRequest, service: RoadmapService = Depends(get_service)):
    request_id = str(uuid.uuid4())
    started = time.perf_counter()
    log = logger.bind(request_id=request_id, route="/api/roadmap/generate", topic=body.topic)

    cache_status = "DEDUPLICATED" if service.is_inflight(service.syllabus_key(body.topic)) else "MISS"
    try:
        syllabus = await service.generate_syllabus(body.topic)
    except GenerationError as e:
        log.error("request_failed", kind=e.kind.value, retryable=e.retryable, error=e.message)
        return _error_response(e, request_id, started)

    headers = _headers(request_id, started, cache_status)
    log.info("request_succeeded", modules=len(syllabus.modules), cache_status=cache_status,
    duration=headers["X-Generation-Time"])
    return JSONResponse({"data": syllabus.model_dump(by_alias=True)}, headers=headers)


@router.post("/content")
async def generate_content(body: GenerateContentRequest, service: RoadmapService = Depends(get_service)):
    request_id = str(uuid.uuid4())
    started = time.perf_counter()
    log = logger.bind(request_id=request_id, route="/api/roadmap/content",
    topic=body.topic, module_title=body.module_title)

    key = service.content_key(body.topic, body.module_title)
    cache_status = "DEDUPLICATED" if service.is_inflight(key) else "MISS"
    try:
        content = await service.generate_content(body.topic, body.module_title)
    except GenerationError as e:
        log.error("request_failed", kind=e.kind.value, retryable=e.retryable, error=e.message)
        return _error_response(e, request_id, started)

    headers = _headers(request_id, started, cache_status)
    log.info("request_succeeded", quiz=len(content.quiz), content_length=len(content.markdown_content),
    cache_status=cache_status, duration=headers["X-Generation-Time"])
    return JSONResponse({"data": content.model_dump(by_alias=True)}, headers=headers)
