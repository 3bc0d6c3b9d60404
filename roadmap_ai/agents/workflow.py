# roadmap_ai/agents/workflow.py
import structlog

from roadmap_ai.agents.llm.base import LLMClient
from roadmap_ai.agents.prompts import (
    CONTENT_FORMAT_INSTRUCTIONS,
    CONTENT_PROMPT,
    SYLLABUS_FORMAT_INSTRUCTIONS,
    SYLLABUS_PROMPT,
    SYSTEM_PLANNER,
    SYSTEM_TEACHER,
)
from roadmap_ai.agents.schemas import ContentDocument, SyllabusDocument, validate_content, validate_syllabus
from roadmap_ai.ingestion.pipeline import parse_payload
from roadmap_ai.retry import RequestState

logger = structlog.get_logger(__name__)


def build_syllabus_variables(topic: str) -> dict:
    return {"topic": topic, "format_instructions": SYLLABUS_FORMAT_INSTRUCTIONS}


def build_content_variables(topic: str, module_title: str) -> dict:
    return {
        "topic": topic,
        "moduleTitle": module_title,
        "format_instructions": CONTENT_FORMAT_INSTRUCTIONS,
    }


def _warn_on_ambiguous_quiz(content: ContentDocument, log) -> None:
    # More or fewer than one correct option is allowed through; just make it visible.
    for index, question in enumerate(content.quiz):
        count = question.correct_option_count
        if count != 1:
            log.warning("quiz_correct_option_count", question_index=index, correct_options=count)


async def generate_syllabus_once(llm: LLMClient, topic: str, *, attempt: int = 1) -> SyllabusDocument:
    """One generation attempt: call the model, then turn its text into a SyllabusDocument."""
    log = logger.bind(topic=topic, attempt=attempt)

    log.info("state_transition", state=RequestState.GENERATING.value)
    raw_text = await llm.generate(SYLLABUS_PROMPT, build_syllabus_variables(topic), system=SYSTEM_PLANNER)

    log.info("state_transition", state=RequestState.PARSING.value)
    payload = parse_payload(raw_text)

    log.info("state_transition", state=RequestState.VALIDATING.value)
    syllabus = validate_syllabus(payload)
    log.info("syllabus_validated", modules=len(syllabus.modules))
    return syllabus


async def generate_content_once(llm: LLMClient, topic: str, module_title: str, *,
attempt: int = 1) -> ContentDocument:
    """One generation attempt for a module's lesson and quiz."""
    log = logger.bind(topic=topic, module_title=module_title, attempt=attempt)

    log.info("state_transition", state=RequestState.GENERATING.value)
    raw_text = await llm.generate(
        CONTENT_PROMPT, build_content_variables(topic, module_title), system=SYSTEM_TEACHER
    )

    log.info("state_transition", state=RequestState.PARSING.value)
    payload = parse_payload(raw_text)

    log.info("state_transition", state=RequestState.VALIDATING.value)
    content = validate_content(payload)
    _warn_on_ambiguous_quiz(content, log)
    log.info("content_validated", quiz=len(content.quiz), content_length=len(content.markdown_content))
    return content
