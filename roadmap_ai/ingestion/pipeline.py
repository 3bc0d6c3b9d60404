## Raw model text -> parsed JSON value
from typing import Any

import structlog

from roadmap_ai.ingestion.extract import extract_candidate
from roadmap_ai.ingestion.repair import parse_json
from roadmap_ai.ingestion.salvage import salvage
from roadmap_ai.ingestion.sanitize import sanitize_markdown

logger = structlog.get_logger(__name__)


def parse_payload(raw: str) -> Any:
    """sanitize -> extract -> salvage -> parse (with one repair pass)."""
    logger.debug("raw_output_preview", preview=raw[:100].replace("\n", "\\n"), length=len(raw))

    extraction = extract_candidate(sanitize_markdown(raw))
    candidate = extraction.candidate
    if not extraction.complete:
        candidate = salvage(candidate)
        logger.info("payload_salvaged", original_length=len(extraction.candidate), salvaged_length=len(candidate))

    return parse_json(candidate)
