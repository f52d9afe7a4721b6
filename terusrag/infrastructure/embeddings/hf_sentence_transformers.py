from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from importlib import import_module
from typing import Any, cast

from terusrag.application.ports.embedding_port import EmbeddingPort
from terusrag.domain.errors import EmptyResponseError, ProviderError

logger = logging.getLogger(__name__)


@dataclass
class HFEmbeddingAdapter(EmbeddingPort):
    """Local HuggingFace Sentence-Transformers embeddings.

    Runs in-process, so ``timeout`` is accepted for port compatibility but unused.
    Chunks must have been embedded with the same model as the queries.
    """

    model_name: str = "sentence-transformers/all-MiniLM-L6-v2"
    device: str = "cpu"  # switch to "cuda" when available
    local_files_only: bool = False  # support offline deployments
    name: str = "sentence-transformers"
    _model: Any | None = None

    def _ensure_model(self) -> Any:
        if self._model is not None:
            return self._model
        try:
            st_module = import_module("sentence_transformers")
            logger.info("Loading embedding model: %s", self.model_name)
            self._model = st_module.SentenceTransformer(
                self.model_name,
                device=self.device,
                local_files_only=self.local_files_only,
            )
        except Exception as ex:  # noqa: BLE001
            raise ProviderError(
                f"Failed to load embedding model '{self.model_name}': {ex}",
                provider=self.name,
                operation="embedding",
            ) from ex
        return self._model

    def embed_texts(
        self, texts: Sequence[str], timeout: float | None = None
    ) -> list[list[float]]:
        if not texts:
            return []
        model = self._ensure_model()
        try:
            raw_vectors = model.encode(
                list(texts),
                normalize_embeddings=True,
                convert_to_numpy=True,
                show_progress_bar=False,
            )
        except Exception as ex:  # noqa: BLE001
            raise ProviderError(
                f"Embedding texts failed: {ex}", provider=self.name, operation="embedding"
            ) from ex
        vectors = cast(Sequence[Sequence[float]], raw_vectors)
        return [list(map(float, vec)) for vec in vectors]

    def embed_query(self, text: str, timeout: float | None = None) -> list[float]:
        model = self._ensure_model()
        try:
            raw_vector = model.encode(
                text,
                normalize_embeddings=True,
                convert_to_numpy=True,
                show_progress_bar=False,
            )
        except Exception as ex:  # noqa: BLE001
            raise ProviderError(
                f"Embedding query failed: {ex}", provider=self.name, operation="embedding"
            ) from ex
        vector = [float(x) for x in cast(Sequence[float], raw_vector)]
        if not vector:
            raise EmptyResponseError(
                "model returned an empty vector", provider=self.name, operation="embedding"
            )
        return vector
