## Pydantic Schemas for Structured Output
from typing import Annotated, Any, Callable, List, Literal, Type, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StrictBool, StrictStr, ValidationError
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from roadmap_ai.ingestion.errors import SchemaValidationError
from roadmap_ai.ingestion.sanitize import sanitize_markdown, sanitize_strict

Difficulty = Literal["Beginner", "Intermediate", "Advanced"]


def _sanitized(sanitize: Callable[[str], str], min_length: int, max_length: int | None):
    def check(value: str) -> str:
        value = sanitize(value)
        if len(value) < min_length:
            raise PydanticCustomError(
                "string_too_short",
                "String should have at least {min_length} characters after sanitization",
                {"min_length": min_length},
            )
        if max_length is not None and len(value) > max_length:
            raise PydanticCustomError(
                "string_too_long",
                "String should have at most {max_length} characters after sanitization",
                {"max_length": max_length},
            )
        return value

    return AfterValidator(check)


def plain_text(min_length: int = 1, max_length: int | None = None):
    """Single-line string: strict sanitization, bounds checked on the cleaned value."""
    return Annotated[StrictStr, _sanitized(sanitize_strict, min_length, max_length)]


def markdown_text(min_length: int = 1, max_length: int | None = None):
    """Markdown string: only control characters are stripped."""
    return Annotated[StrictStr, _sanitized(sanitize_markdown, min_length, max_length)]


class _Document(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, frozen=True)


class Module(_Document):
    # Prompts ask for descriptive titles (10+ chars); only 1..150 is enforced.
    title: plain_text(1, 150)
    description: plain_text(1, 500)
    difficulty: Difficulty = "Beginner"
    estimated_time: plain_text(0) = "15 minutes"
    sub_topics: List[plain_text(0)] = Field(min_length=1, max_length=10)


class SyllabusDocument(_Document):
    course_title: plain_text(1, 200)
    overview: plain_text(1, 1000)
    modules: List[Module] = Field(min_length=1, max_length=20)


class QuizOption(_Document):
    id: plain_text(1) = "a"
    text: plain_text(1, 500)
    is_correct: StrictBool


class QuizQuestion(_Document):
    question: plain_text(1, 1000)
    options: List[QuizOption] = Field(min_length=2, max_length=6)
    explanation: plain_text(1, 1000) = "No explanation available"

    @property
    def correct_option_count(self) -> int:
        return sum(1 for option in self.options if option.is_correct)


class ContentDocument(_Document):
    title: plain_text(1, 200)
    markdown_content: markdown_text(10, 50000)
    quiz: List[QuizQuestion] = Field(min_length=1, max_length=10)


T = TypeVar("T", bound=BaseModel)


def _format_loc(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) or "(root)"


def validate_document(schema: Type[T], data: Any, document: str) -> T:
    """Validate the whole tree, then raise once naming every failing field."""
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        issues = [(_format_loc(err["loc"]), err["msg"]) for err in e.errors()]
        raise SchemaValidationError(document, issues) from e


def validate_syllabus(data: Any) -> SyllabusDocument:
    return validate_document(SyllabusDocument, data, "syllabus")


def validate_content(data: Any) -> ContentDocument:
    return validate_document(ContentDocument, data, "content")
