# terusrag/application/use_cases/rank_chunks.py
from __future__ import annotations

import logging
from collections.abc import Sequence

from terusrag.application.ports.embedding_port import EmbeddingPort
from terusrag.domain.errors import (
    DomainError,
    EmptyResponseError,
    ProviderError,
    ProviderTransportError,
    RetrievalError,
)
from terusrag.domain.models import Chunk, RankedChunk
from terusrag.domain.services.hybrid_ranking import TOP_N, hybrid_rank
from terusrag.domain.types import Result

logger = logging.getLogger(__name__)


class HybridRanker:
    """
    Ranks a corpus snapshot against a query: one embedding call, one fresh BM25
    index, weighted fusion, top-N selection.

    Holds no per-query state, so one instance may serve concurrent queries.
    """

    def __init__(self, embedding: EmbeddingPort, top_n: int = TOP_N) -> None:
        self.embedding = embedding
        self.top_n = top_n

    def rank(
        self,
        query: str,
        corpus: Sequence[Chunk],
        timeout: float | None = None,
    ) -> Result[list[RankedChunk], DomainError]:
        if not corpus:
            return Result.success([])

        # 1) Embed query; any provider failure aborts the whole call
        provider = getattr(self.embedding, "name", type(self.embedding).__name__)
        try:
            q_vec = self.embedding.embed_query(query, timeout=timeout)
        except ProviderError as ex:
            logger.warning("Query embedding failed: %s", ex)
            return Result.failure(ex)
        except Exception as ex:  # noqa: BLE001
            logger.exception("Query embedding failed unexpectedly")
            return Result.failure(
                ProviderTransportError(str(ex), provider=provider, operation="embedding")
            )
        if not q_vec:
            return Result.failure(
                EmptyResponseError(
                    "provider returned an empty query embedding",
                    provider=provider,
                    operation="embedding",
                )
            )

        # 2) Similarity + BM25 + fusion + stable top-N
        try:
            ranked = hybrid_rank(query, q_vec, corpus, top_n=self.top_n)
        except ValueError as ex:
            return Result.failure(RetrievalError(f"ranking failed: {ex}"))

        logger.debug("Ranked %d chunks, kept %d", len(corpus), len(ranked))
        return Result.success(ranked)
