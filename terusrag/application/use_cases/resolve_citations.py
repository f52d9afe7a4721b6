# terusrag/application/use_cases/resolve_citations.py
from __future__ import annotations

import logging
from collections.abc import Iterator

from terusrag.application.ports.chunk_store_port import ChunkStorePort
from terusrag.application.ports.owner_resolver_port import OwnerResolverPort
from terusrag.domain.models import UNKNOWN_TITLE, Citation, ParsedLine
from terusrag.domain.services.response_parsing import iter_answer_lines

logger = logging.getLogger(__name__)

# Largest id a chunk row can hold (signed 64-bit integer column).
MAX_CHUNK_ID = 2**63 - 1


class CitationResolver:
    """
    Turns generated answer text into resolved citations.

    Each line's candidate id is looked up as a chunk id; the chunk's owning
    content item supplies title and view URL. Lines whose id is missing, zero,
    unknown, or whose owner cannot be resolved are dropped.
    """

    def __init__(self, chunk_store: ChunkStorePort, owners: OwnerResolverPort) -> None:
        self.chunk_store = chunk_store
        self.owners = owners

    def resolve(self, line: ParsedLine) -> Citation:
        if not line.id or line.id > MAX_CHUNK_ID:
            return Citation.unresolved()
        chunk = self.chunk_store.get_chunk(line.id)
        if chunk is None:
            return Citation.unresolved()
        owner = self.owners.resolve_owner(chunk.moduletype, chunk.moduleid)
        return Citation(
            id=line.id,
            title=owner.title if owner else UNKNOWN_TITLE,
            content=line.content,
            viewurl=owner.view_url if owner else None,
        )

    def iter_citations(self, text: str) -> Iterator[Citation]:
        """Lazily yield resolved citations, one per usable answer line."""
        for line in iter_answer_lines(text):
            citation = self.resolve(line)
            if citation.resolved:
                yield citation
            else:
                logger.debug("Dropping unresolved answer line: %r", line.content)

    def parse_response(self, text: str) -> list[Citation]:
        return list(self.iter_citations(text))
