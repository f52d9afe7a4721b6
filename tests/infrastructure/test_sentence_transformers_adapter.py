"""Tests for the local sentence-transformers embedding adapter with an injected model."""

import pytest

from terusrag.domain.errors import EmptyResponseError, ProviderError
from terusrag.infrastructure.embeddings.hf_sentence_transformers import HFEmbeddingAdapter


class _FakeModel:
    """Stand-in for sentence_transformers.SentenceTransformer."""

    def __init__(self, dim: int = 3, fail: bool = False) -> None:
        self.dim = dim
        self.fail = fail
        self.kwargs: dict = {}

    def encode(self, sentences, **kwargs):
        self.kwargs = kwargs
        if self.fail:
            raise RuntimeError("CUDA out of memory")
        if isinstance(sentences, str):
            return [1.0] * self.dim
        return [[float(i)] * self.dim for i, _ in enumerate(sentences)]


def test_embed_query_normalizes():
    model = _FakeModel()
    adapter = HFEmbeddingAdapter(_model=model)

    assert adapter.embed_query("hello") == [1.0, 1.0, 1.0]
    assert model.kwargs["normalize_embeddings"] is True


def test_embed_texts():
    adapter = HFEmbeddingAdapter(_model=_FakeModel(dim=2))
    assert adapter.embed_texts(["a", "b"]) == [[0.0, 0.0], [1.0, 1.0]]


def test_embed_texts_empty_batch():
    assert HFEmbeddingAdapter(_model=_FakeModel()).embed_texts([]) == []


def test_encode_failure_is_provider_error():
    adapter = HFEmbeddingAdapter(_model=_FakeModel(fail=True))
    with pytest.raises(ProviderError) as exc:
        adapter.embed_query("x")
    assert exc.value.provider == "sentence-transformers"


def test_empty_vector_is_empty_response():
    adapter = HFEmbeddingAdapter(_model=_FakeModel(dim=0))
    with pytest.raises(EmptyResponseError):
        adapter.embed_query("x")


def test_model_load_failure(monkeypatch):
    def _missing(name):
        raise ImportError(f"No module named {name!r}")

    monkeypatch.setattr(
        "terusrag.infrastructure.embeddings.hf_sentence_transformers.import_module", _missing
    )
    with pytest.raises(ProviderError, match="Failed to load embedding model"):
        HFEmbeddingAdapter().embed_query("x")
