# terusrag/application/dto/query_dto.py
from __future__ import annotations

from dataclasses import dataclass, field

from terusrag.domain.models import Citation, TokenUsage


@dataclass(frozen=True)
class QueryRequest:
    """
    DTO for querying the knowledge base.

    - question:  user question (non-empty)
    - timeout_s: bound for each provider call; adapter default when None
    """

    question: str
    timeout_s: float | None = None


@dataclass(frozen=True)
class RAGAnswer:
    """Resolved citations plus the token usage reported by the generation provider."""

    answer: list[Citation] = field(default_factory=list)
    usage: TokenUsage = field(default_factory=TokenUsage)

    @property
    def prompt_token_count(self) -> int:
        return self.usage.prompt_tokens

    @property
    def response_token_count(self) -> int:
        return self.usage.completion_tokens

    @property
    def total_token_count(self) -> int:
        return self.usage.total_tokens

    def to_dict(self) -> dict[str, object]:
        """Response shape of the query endpoint."""
        return {
            "answer": [c.to_dict() for c in self.answer],
            "promptTokenCount": self.prompt_token_count,
            "responseTokenCount": self.response_token_count,
            "totalTokenCount": self.total_token_count,
        }
