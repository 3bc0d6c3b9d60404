## Completeness check and salvage for truncated JSON candidates
from dataclasses import dataclass, field

from roadmap_ai.ingestion.errors import TruncatedPayloadError

_OPENERS = {"{": "}", "[": "]"}


@dataclass
class ScanState:
    # closers still owed, innermost last
    pending: list[str] = field(default_factory=list)
    in_string: bool = False
    escaped: bool = False
    mismatched: bool = False

    @property
    def brace_depth(self) -> int:
        return self.pending.count("}")

    @property
    def bracket_depth(self) -> int:
        return self.pending.count("]")

    @property
    def complete(self) -> bool:
        return not (self.pending or self.in_string or self.mismatched)


def scan(text: str) -> ScanState:
    """Single left-to-right pass over `text`, honoring backslash escapes."""
    state = ScanState()
    for ch in text:
        if state.escaped:
            state.escaped = False
            continue
        if ch == "\\":
            state.escaped = True
            continue
        if ch == '"':
            state.in_string = not state.in_string
            continue
        if state.in_string:
            continue
        if ch in _OPENERS:
            state.pending.append(_OPENERS[ch])
        elif ch in "}]":
            if state.pending and state.pending[-1] == ch:
                state.pending.pop()
            else:
                state.mismatched = True
    return state


def is_complete(text: str) -> bool:
    return scan(text).complete


def salvage(candidate: str) -> str:
    """
    Close whatever a truncated candidate left open: a dangling string first,
    then arrays and objects in reverse opening order.
    Raises TruncatedPayloadError when appending closers cannot balance it.
    """
    state = scan(candidate)
    if state.complete:
        return candidate

    text = candidate
    if state.escaped:
        text = text[:-1]
    if state.in_string:
        text += '"'
    else:
        text = text.rstrip()
        if text.endswith(","):
            text = text[:-1]
    text += "".join(reversed(state.pending))

    if not is_complete(text):
        raise TruncatedPayloadError(len(candidate))
    return text
