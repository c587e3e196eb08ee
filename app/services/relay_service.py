"""
Relay: answer one question from the knowledge record via the text-generation provider.

Responsibility: validate the query, compose the grounded prompt, make exactly one
provider call, and hand back its text untouched. Called by the API and the CLI; no HTTP here.
"""

import logging

from app.agent.llm import TextGenerator
from app.agent.prompts import SYSTEM_INSTRUCTION, build_prompt
from app.core.errors import InvalidRequestError, UpstreamError
from app.core.knowledge import (
    KnowledgeRecord,
    get_knowledge_record,
    get_serialized_record,
    serialize_record,
)

logger = logging.getLogger(__name__)

QUERY_REQUIRED = "Query parameter is required."


def compose_prompt(query: str, record: KnowledgeRecord | None = None) -> str:
    """Prompt for query grounded on record (the process-wide record when omitted)."""
    if record is None:
        return build_prompt(get_serialized_record(), query, subject=get_knowledge_record().name)
    return build_prompt(serialize_record(record), query, subject=record.name)


def answer(query: str | None, generator: TextGenerator, record: KnowledgeRecord | None = None) -> str:
    """
    Return the provider's answer to query, verbatim.

    Raises InvalidRequestError for a missing or empty query (no provider call),
    UpstreamError when the provider call fails for any reason. Never retries.
    """
    if not isinstance(query, str) or not query:
        logger.info("[relay:answer] rejected empty query=%r", query)
        raise InvalidRequestError(QUERY_REQUIRED)
    prompt = compose_prompt(query, record)
    logger.info("[relay:answer] IN  query_len=%d prompt_len=%d", len(query), len(prompt))
    try:
        text = generator.generate(prompt, SYSTEM_INSTRUCTION)
    except UpstreamError as e:
        logger.warning("[relay:answer] upstream failed: %s", e.message)
        raise
    except Exception as e:
        logger.exception("[relay:answer] provider raised unexpectedly")
        raise UpstreamError(str(e) or e.__class__.__name__) from e
    logger.info("[relay:answer] OUT answer_len=%d", len(text))
    return text
