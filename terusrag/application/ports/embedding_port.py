from collections.abc import Sequence
from typing import Protocol, overload, runtime_checkable


@runtime_checkable
class EmbeddingPort(Protocol):
    def embed_texts(
        self, texts: Sequence[str], timeout: float | None = None
    ) -> list[list[float]]: ...

    def embed_query(self, text: str, timeout: float | None = None) -> list[float]: ...

    @overload
    def embed(self, text_or_batch: str, timeout: float | None = None) -> list[float]: ...

    @overload
    def embed(
        self, text_or_batch: Sequence[str], timeout: float | None = None
    ) -> list[list[float]]: ...

    def embed(self, text_or_batch, timeout=None):
        """Embed a single string or a batch of strings.

        Note:
            Default implementation dispatches to ``embed_query`` / ``embed_texts``.
            Output dimensionality is fixed per deployed embedding model.
        """
        if isinstance(text_or_batch, str):
            return self.embed_query(text_or_batch, timeout=timeout)
        return self.embed_texts(list(text_or_batch), timeout=timeout)
