## Error taxonomy for generation requests
import asyncio
from enum import Enum

import httpx
import openai

from roadmap_ai.ingestion.errors import PayloadError


class ErrorKind(str, Enum):
    CONFIG = "ConfigError"
    TIMEOUT = "Timeout"
    INVALID_RESPONSE_FORMAT = "InvalidResponseFormat"
    GENERATION_FAILED = "GenerationFailed"
    NETWORK = "NetworkError"
    RATE_LIMITED = "RateLimited"
    UNKNOWN = "Unknown"


# kind -> (http status, retryable)
_POLICY = {
    ErrorKind.CONFIG: (503, False),
    ErrorKind.TIMEOUT: (504, True),
    ErrorKind.INVALID_RESPONSE_FORMAT: (502, True),
    ErrorKind.GENERATION_FAILED: (502, True),
    ErrorKind.NETWORK: (503, True),
    ErrorKind.RATE_LIMITED: (429, True),
    ErrorKind.UNKNOWN: (500, False),
}

# Checked in order; first hit wins.
_TYPE_RULES: list[tuple[tuple[type[BaseException], ...], ErrorKind]] = [
    ((openai.AuthenticationError, openai.PermissionDeniedError), ErrorKind.CONFIG),
    # Rejected request shape; sending it again gets the same answer.
    ((openai.BadRequestError, openai.NotFoundError, openai.UnprocessableEntityError), ErrorKind.UNKNOWN),
    ((asyncio.TimeoutError, TimeoutError, httpx.TimeoutException, openai.APITimeoutError), ErrorKind.TIMEOUT),
    ((PayloadError,), ErrorKind.INVALID_RESPONSE_FORMAT),
    ((httpx.TransportError, openai.APIConnectionError, ConnectionError), ErrorKind.NETWORK),
    ((openai.RateLimitError,), ErrorKind.RATE_LIMITED),
    ((openai.InternalServerError,), ErrorKind.GENERATION_FAILED),
]

_MESSAGE_RULES: list[tuple[tuple[str, ...], ErrorKind]] = [
    (("api key", "api_key", "apikey", "credential", "unauthorized", "authentication", "configuration"), ErrorKind.CONFIG),
    (("timeout", "timed out", "deadline exceeded"), ErrorKind.TIMEOUT),
    (("invalid", "json", "parse", "truncat", "malformed"), ErrorKind.INVALID_RESPONSE_FORMAT),
    (("generation failed", "failed to generate"), ErrorKind.GENERATION_FAILED),
    (("network", "connection", "econnrefused", "econnreset", "fetch failed", "socket", "dns"), ErrorKind.NETWORK),
    (("rate limit", "rate_limit", "too many requests", "429", "quota"), ErrorKind.RATE_LIMITED),
]


class GenerationError(Exception):
    """A classified failure. This is the only error shape the service raises."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def http_status(self) -> int:
        return _POLICY[self.kind][0]

    @property
    def retryable(self) -> bool:
        return _POLICY[self.kind][1]

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "httpStatus": self.http_status,
            "retryable": self.retryable,
        }

    def __repr__(self) -> str:
        return f"GenerationError(kind={self.kind.value!r}, message={self.message!r})"


def _status_code(error: BaseException) -> int | None:
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code
    return getattr(error, "status_code", None)


def _kind_for_status(status: int) -> ErrorKind | None:
    if status in (401, 403):
        return ErrorKind.CONFIG
    if status in (408, 504):
        return ErrorKind.TIMEOUT
    if status == 429:
        return ErrorKind.RATE_LIMITED
    if status >= 500:
        return ErrorKind.GENERATION_FAILED
    if 400 <= status < 500:
        return ErrorKind.UNKNOWN
    return None


def _kind_for(error: BaseException) -> ErrorKind:
    for types, kind in _TYPE_RULES:
        if isinstance(error, types):
            return kind

    status = _status_code(error)
    if isinstance(status, int):
        kind = _kind_for_status(status)
        if kind is not None:
            return kind

    message = str(error).lower()
    for needles, kind in _MESSAGE_RULES:
        if any(needle in message for needle in needles):
            return kind
    return ErrorKind.UNKNOWN


def classify(error: BaseException) -> GenerationError:
    if isinstance(error, GenerationError):
        return error

    kind = _kind_for(error)
    classified = GenerationError(kind, str(error) or type(error).__name__)
    classified.__cause__ = error
    return classified
