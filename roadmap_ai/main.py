## Main application entry point
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from roadmap_ai.deps import get_service
from roadmap_ai.logging_config import configure_logging
from roadmap_ai.roadmaps.routes import router as roadmaps_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    yield
    if get_service.cache_info().currsize:
        await get_service().aclose()


app = FastAPI(title="roadmap-ai", lifespan=lifespan)


@app.exception_handler(RequestValidationError)
async def invalid_request_handler(request: Request, exc: RequestValidationError):
    details = [
        {"field": ".".join(str(p) for p in err["loc"] if p != "body"), "message": err["msg"]}
        for err in exc.errors()
    ]
    return JSONResponse(
        {"error": "Invalid input", "type": "VALIDATION_ERROR", "retryable": False, "details": details},
        status_code=400,
    )


@app.get("/health")
async def health():
    return {"status": "ok"}


app.include_router(roadmaps_router)
