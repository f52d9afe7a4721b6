"""Tests for prompt assembly."""

import json

from terusrag.domain.models import RankedChunk
from terusrag.domain.services.prompting import (
    CITATION_INSTRUCTION,
    DEFAULT_SYSTEM_PROMPT,
    build_context_block,
    build_prompt,
    with_citation_instruction,
)


def test_context_block_is_json_of_content_and_id():
    chunks = [RankedChunk(id=1, content="Paris", score=0.9), RankedChunk(id=2, content="Rome")]
    block = build_context_block(chunks)

    assert block.startswith("Context:\n")
    assert block.endswith("\n\n")
    payload = json.loads(block[len("Context:\n") : -2])
    assert payload == [{"content": "Paris", "id": 1}, {"content": "Rome", "id": 2}]


def test_context_block_keeps_non_ascii():
    block = build_context_block([RankedChunk(id=1, content="Zürich")])
    assert "Zürich" in block


def test_prompt_layout():
    prompt = build_prompt(DEFAULT_SYSTEM_PROMPT, [RankedChunk(id=5, content="text")], "Why?")
    assert prompt == (
        DEFAULT_SYSTEM_PROMPT
        + '\nContext:\n[{"content": "text", "id": 5}]\n\nQuestion: Why?\nAnswer:'
    )


def test_default_prompt_asks_for_bracketed_ids():
    assert CITATION_INSTRUCTION in DEFAULT_SYSTEM_PROMPT
    assert "[12]" in CITATION_INSTRUCTION


def test_custom_system_prompt_keeps_citation_instruction():
    prompt = build_prompt("You are a tutor.", [RankedChunk(id=1, content="alpha")], "alpha")

    assert prompt.startswith("You are a tutor. " + CITATION_INSTRUCTION + "\nContext:\n")
    assert "square brackets" in prompt


def test_citation_instruction_is_not_repeated():
    assert with_citation_instruction(DEFAULT_SYSTEM_PROMPT) == DEFAULT_SYSTEM_PROMPT
    assert with_citation_instruction("") == CITATION_INSTRUCTION
