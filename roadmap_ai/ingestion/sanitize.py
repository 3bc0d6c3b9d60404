## Text sanitization for model output and document fields
import re

# Control characters except tab, newline and carriage return, plus DEL
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_LINE_BREAKS = re.compile(r"[\r\n\t]+")
_WHITESPACE = re.compile(r"\s+")


def sanitize_strict(text: str) -> str:
    """Single-line form: control characters removed, whitespace collapsed, trimmed."""
    text = _CONTROL_CHARS.sub("", text)
    text = _LINE_BREAKS.sub(" ", text)
    return _WHITESPACE.sub(" ", text).strip()


def sanitize_markdown(text: str) -> str:
    """Removes control characters only. Newlines, tabs and spacing are kept."""
    return _CONTROL_CHARS.sub("", text)
