## Locate the JSON payload inside raw model output
import re
from typing import NamedTuple

from roadmap_ai.ingestion.repair import remove_trailing_commas
from roadmap_ai.ingestion.salvage import is_complete

_FENCE_OPEN = re.compile(r"```[A-Za-z0-9_-]*[ \t]*\r?\n?")
_FENCE = "```"
_BROKEN_STRING = re.compile(r'"[ \t]*(?:\r\n|\r|\n)+[ \t]*"')


class Extraction(NamedTuple):
    candidate: str
    complete: bool


def join_broken_strings(text: str) -> str:
    """Collapse `"` + line break(s) + `"` left behind when a model wraps a string value."""
    return _BROKEN_STRING.sub("", text)


def _fenced_body(text: str) -> str | None:
    opening = _FENCE_OPEN.search(text)
    if opening is None:
        return None

    first_brace = text.find("{")
    # A fence opening after the payload has started is part of a string value.
    if first_brace != -1 and first_brace < opening.start():
        return None

    body_start = opening.end()
    closing = text.rfind(_FENCE, max(body_start, text.rfind("}")))
    if closing == -1:
        # Unclosed fence: the completion was cut off, salvage deals with the rest.
        return text[body_start:]
    return text[body_start:closing]


def _locate(text: str) -> str:
    fenced = _fenced_body(text)
    if fenced is not None:
        return fenced.strip()

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end < start:
        # Nothing brace-delimited; parsing will fail on this and that is fine.
        return text.strip()
    return text[start:end + 1]


def extract_candidate(text: str) -> Extraction:
    """
    Best-effort extraction of the JSON value from sanitized model text.
    Never raises: a hopeless input simply yields a candidate that won't parse.
    """
    candidate = _locate(text)
    candidate = join_broken_strings(candidate)
    candidate = remove_trailing_commas(candidate)
    return Extraction(candidate=candidate, complete=is_complete(candidate))
