# terusrag/domain/services/hybrid_ranking.py
# Pure domain service: no I/O, deterministic, no external libraries.
from __future__ import annotations

from collections.abc import Sequence

from terusrag.domain.models import Chunk, RankedChunk
from terusrag.domain.services.bm25 import BM25Index
from terusrag.domain.similarity import cosine_similarity

SEMANTIC_WEIGHT = 0.7
LEXICAL_WEIGHT = 0.3
TOP_N = 5


def similarity_scores(query_vector: Sequence[float], corpus: Sequence[Chunk]) -> list[float]:
    """Cosine similarity of every chunk to the query; chunks without embedding score 0.

    Raises:
        ValueError: If a stored embedding has a different dimensionality than the query
    """
    return [
        cosine_similarity(query_vector, chunk.embedding) if chunk.embedding else 0.0
        for chunk in corpus
    ]


def lexical_scores(query: str, corpus: Sequence[Chunk]) -> list[float]:
    """BM25 score of every chunk, using one index built over the whole corpus."""
    if not corpus:
        return []
    index = BM25Index({chunk.id: chunk.content for chunk in corpus})
    return [index.score(query, chunk.content, chunk.id) for chunk in corpus]


def fuse(similarity: float, lexical: float) -> float:
    return SEMANTIC_WEIGHT * similarity + LEXICAL_WEIGHT * lexical


def hybrid_rank(
    query: str,
    query_vector: Sequence[float],
    corpus: Sequence[Chunk],
    top_n: int = TOP_N,
) -> list[RankedChunk]:
    """
    Rank chunks by ``0.7 * cosine + 0.3 * BM25`` and keep the best ``top_n``.

    - Sorting is stable: chunks with equal fused scores keep their corpus order.
    - An empty corpus yields an empty list.
    """
    if not corpus or top_n <= 0:
        return []

    sims = similarity_scores(query_vector, corpus)
    lex = lexical_scores(query, corpus)
    scored = [
        RankedChunk(id=chunk.id, content=chunk.content, score=fuse(s, l))
        for chunk, s, l in zip(corpus, sims, lex, strict=True)
    ]
    # sorted(reverse=True) preserves the relative order of equal keys.
    scored = sorted(scored, key=lambda r: r.score, reverse=True)
    return scored[:top_n]
