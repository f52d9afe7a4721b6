# terusrag/domain/services/response_parsing.py
# Pure domain service: no I/O, deterministic, no external libraries.
"""
Line parsing of generated answers.

The prompt asks the model to prefix each answer line with the bracketed id of the
context chunk it is based on, e.g. ``[42] Paris is the capital of France``. This
module turns raw answer text into ``ParsedLine`` items; resolving ids against the
store happens in the application layer.
"""

from __future__ import annotations

import re
from collections.abc import Iterator

from terusrag.domain.models import ParsedLine

_FIRST_NUMBER_RE = re.compile(r"(\d+)")
_ID_PREFIX_RE = re.compile(r"^\[\d+\]\s*")


def parse_answer_line(line: str) -> ParsedLine:
    """Extract the first run of digits as chunk id and strip a leading ``[n]`` prefix."""
    match = _FIRST_NUMBER_RE.search(line)
    chunk_id = int(match.group(1)) if match else None
    content = _ID_PREFIX_RE.sub("", line, count=1)
    return ParsedLine(id=chunk_id, content=content)


def iter_answer_lines(text: str) -> Iterator[ParsedLine]:
    """Yield one ``ParsedLine`` per non-blank line, lazily."""
    for raw in text.strip().splitlines():
        line = raw.strip()
        if line:
            yield parse_answer_line(line)
