"""Tests for the HybridRanker use case."""

from collections.abc import Sequence

from terusrag.application.use_cases.rank_chunks import HybridRanker
from terusrag.domain.errors import (
    EmptyResponseError,
    ProviderTransportError,
    RetrievalError,
)
from terusrag.domain.models import Chunk


class FakeEmbedding:
    """Fake embedding adapter returning a fixed query vector."""

    name = "fake"

    def __init__(self, vector: list[float] | None = None, error: Exception | None = None) -> None:
        self.vector = [1.0, 0.0] if vector is None else vector
        self.error = error
        self.calls: list[tuple[str, float | None]] = []

    def embed_query(self, text: str, timeout: float | None = None) -> list[float]:
        self.calls.append((text, timeout))
        if self.error is not None:
            raise self.error
        return self.vector

    def embed_texts(
        self, texts: Sequence[str], timeout: float | None = None
    ) -> list[list[float]]:
        return [self.embed_query(t, timeout) for t in texts]


def corpus(n: int) -> list[Chunk]:
    return [Chunk(id=i, content=f"chunk {i}", embedding=(1.0, 0.0)) for i in range(1, n + 1)]


class TestHybridRanker:
    def test_empty_corpus_skips_embedding(self) -> None:
        """Nothing to rank means no provider round trip."""
        embedding = FakeEmbedding()
        result = HybridRanker(embedding).rank("q", [])

        assert result.ok
        assert result.value == []
        assert embedding.calls == []

    def test_ranks_and_truncates(self) -> None:
        embedding = FakeEmbedding()
        result = HybridRanker(embedding, top_n=3).rank("chunk", corpus(6), timeout=2.5)

        assert result.ok
        assert [r.id for r in result.value] == [1, 2, 3]
        assert embedding.calls == [("chunk", 2.5)]

    def test_provider_error_is_returned_unchanged(self) -> None:
        err = ProviderTransportError("down", provider="fake", operation="embedding", status=503)
        result = HybridRanker(FakeEmbedding(error=err)).rank("q", corpus(2))

        assert not result.ok
        assert result.error is err

    def test_unexpected_exception_becomes_transport_error(self) -> None:
        result = HybridRanker(FakeEmbedding(error=RuntimeError("socket closed"))).rank(
            "q", corpus(2)
        )

        assert isinstance(result.error, ProviderTransportError)
        assert result.error.provider == "fake"
        assert result.error.operation == "embedding"
        assert "socket closed" in result.error.message

    def test_empty_query_vector_is_an_empty_response(self) -> None:
        result = HybridRanker(FakeEmbedding(vector=[])).rank("q", corpus(2))
        assert isinstance(result.error, EmptyResponseError)

    def test_dimension_mismatch_is_a_retrieval_error(self) -> None:
        result = HybridRanker(FakeEmbedding(vector=[1.0, 0.0, 0.0])).rank("q", corpus(2))

        assert isinstance(result.error, RetrievalError)
        assert "dimensions differ" in str(result.error)
