## Second-chance repair for candidates that fail to parse
import json
import re
from typing import Any, Callable

import structlog

from roadmap_ai.ingestion.errors import MalformedPayloadError

logger = structlog.get_logger(__name__)

_STRING_WHITESPACE = re.compile(r"[\r\n\t]+")
_TRAILING_COMMA = re.compile(r",(\s*[}\]])")
_BARE_KEY = re.compile(r"([{,]\s*)([A-Za-z_$][A-Za-z0-9_$]*)(\s*:)")


def _segments(text: str) -> list[tuple[bool, str]]:
    """Split into (is_string_literal, chunk) runs. Quotes stay with their literal."""
    segments: list[tuple[bool, str]] = []
    start = 0
    in_string = False
    escaped = False
    for i, ch in enumerate(text):
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == '"':
            if in_string:
                segments.append((True, text[start:i + 1]))
                start = i + 1
            else:
                if i > start:
                    segments.append((False, text[start:i]))
                start = i
            in_string = not in_string
    if start < len(text):
        segments.append((in_string, text[start:]))
    return segments


def _rewrite(text: str, *, strings: Callable[[str], str] | None = None,
             structure: Callable[[str], str] | None = None) -> str:
    out = []
    for is_string, chunk in _segments(text):
        fn = strings if is_string else structure
        out.append(fn(chunk) if fn else chunk)
    return "".join(out)


def flatten_string_whitespace(text: str) -> str:
    return _rewrite(text, strings=lambda s: _STRING_WHITESPACE.sub(" ", s))


def remove_trailing_commas(text: str) -> str:
    return _rewrite(text, structure=lambda s: _TRAILING_COMMA.sub(r"\1", s))


def quote_bare_keys(text: str) -> str:
    return _rewrite(text, structure=lambda s: _BARE_KEY.sub(r'\1"\2"\3', s))


def repair(candidate: str) -> str:
    text = flatten_string_whitespace(candidate)
    text = remove_trailing_commas(text)
    return quote_bare_keys(text)


def parse_json(candidate: str) -> Any:
    """
    Parse a candidate, falling back to `repair` once.
    If the repaired text still fails, the error from the first attempt is raised.
    """
    try:
        return json.loads(candidate)
    except json.JSONDecodeError as e:
        first_error = e

    try:
        value = json.loads(repair(candidate))
    except json.JSONDecodeError:
        raise MalformedPayloadError(f"Invalid response format: {first_error}") from first_error

    logger.info("payload_repaired", reason=first_error.msg, position=first_error.pos)
    return value
