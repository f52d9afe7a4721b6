# terusrag/domain/models.py
# Domain models must be pure (no I/O, no external libs)
from __future__ import annotations

from dataclasses import dataclass

from terusrag.domain.types import Score, Vector

UNKNOWN_TITLE = "Unknown Course"


@dataclass(frozen=True)
class Chunk:
    """
    Immutable unit of indexed content.

    - id:           stable identifier, unique across the corpus
    - content:      the chunk text
    - embedding:    embedding vector, or None when absent or undecodable
    - moduletype:   type of the owning content item (e.g. "course", "page")
    - moduleid:     id of the owning content item
    - contenthash:  sha1 of ``content``; used for change detection on upsert
    - title:        display title captured at ingestion time
    - timecreated / timemodified: unix seconds
    """

    id: int
    content: str
    embedding: Vector | None = None
    moduletype: str = "course"
    moduleid: int = 0
    contenthash: str = ""
    title: str = ""
    timecreated: int = 0
    timemodified: int = 0


@dataclass(frozen=True)
class RankedChunk:
    """A chunk selected by the hybrid ranker, reduced to what the prompt needs."""

    id: int
    content: str
    score: Score = 0.0

    def as_context(self) -> dict[str, object]:
        return {"content": self.content, "id": self.id}


@dataclass(frozen=True)
class ContentOwner:
    """Display data of the content item that owns a chunk."""

    title: str
    view_url: str | None


@dataclass(frozen=True)
class ParsedLine:
    """One non-blank answer line: candidate chunk id (if any) and cleaned text."""

    id: int | None
    content: str


@dataclass(frozen=True)
class Citation:
    """Answer line resolved back to its source chunk and owning content item."""

    id: int
    title: str
    content: str
    viewurl: str | None

    @property
    def resolved(self) -> bool:
        return bool(self.id) and self.viewurl is not None

    @classmethod
    def unresolved(cls) -> Citation:
        return cls(id=0, title=UNKNOWN_TITLE, content=UNKNOWN_TITLE, viewurl=None)

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "viewurl": self.viewurl,
        }


@dataclass(frozen=True)
class TokenUsage:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
