# terusrag/domain/services/prompting.py
# Pure domain service: builds the text handed to the generation provider.
from __future__ import annotations

import json
from collections.abc import Sequence

from terusrag.domain.models import RankedChunk

# The response parser relies on the "[<id>]" line prefix requested here.
CITATION_INSTRUCTION = (
    "Start every line of your answer with the id of the context item it is based on, "
    'in square brackets, for example "[12] ...". Use one line per statement.'
)

DEFAULT_SYSTEM_PROMPT = (
    "You are a Moodle assistant specialized in answering questions about course materials. "
    "Use only the provided context to construct your response. " + CITATION_INSTRUCTION
)


def build_context_block(chunks: Sequence[RankedChunk]) -> str:
    payload = [c.as_context() for c in chunks]
    return "Context:\n" + json.dumps(payload, ensure_ascii=False) + "\n\n"


def with_citation_instruction(system_prompt: str) -> str:
    """Append the bracketed-id instruction unless the prompt already carries it."""
    if CITATION_INSTRUCTION in system_prompt:
        return system_prompt
    return f"{system_prompt.rstrip()} {CITATION_INSTRUCTION}".lstrip()


def build_prompt(system_prompt: str, chunks: Sequence[RankedChunk], question: str) -> str:
    """Assemble ``system prompt``, context block and question into a single prompt.

    Custom system prompts get the citation instruction appended, since answer
    lines are only resolvable when they start with a bracketed chunk id.
    """
    return (
        with_citation_instruction(system_prompt)
        + "\n"
        + build_context_block(chunks)
        + "Question: "
        + question
        + "\nAnswer:"
    )
