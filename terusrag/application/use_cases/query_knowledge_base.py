# terusrag/application/use_cases/query_knowledge_base.py
from __future__ import annotations

import logging
import time

from terusrag.application.dto.query_dto import QueryRequest, RAGAnswer
from terusrag.application.ports.chunk_store_port import ChunkStorePort
from terusrag.application.ports.llm_port import LLMPort
from terusrag.application.ports.telemetry_port import TelemetryPort
from terusrag.application.use_cases.rank_chunks import HybridRanker
from terusrag.application.use_cases.resolve_citations import CitationResolver
from terusrag.domain.errors import (
    ChunkStoreError,
    DomainError,
    ProviderError,
    ProviderTransportError,
    ValidationError,
)
from terusrag.domain.services.prompting import DEFAULT_SYSTEM_PROMPT, build_prompt
from terusrag.domain.types import Result

logger = logging.getLogger(__name__)


class QueryKnowledgeBase:
    """
    Application use case answering a question from the indexed chunks.
    No I/O of its own, uses only ports; reports errors via Result[T, E].
    """

    def __init__(
        self,
        ranker: HybridRanker,
        llm: LLMPort,
        chunk_store: ChunkStorePort,
        citations: CitationResolver,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        telemetry: TelemetryPort | None = None,
    ) -> None:
        self.ranker = ranker
        self.llm = llm
        self.chunk_store = chunk_store
        self.citations = citations
        self.system_prompt = system_prompt
        self.telemetry = telemetry

    def execute(self, req: QueryRequest) -> Result[RAGAnswer, DomainError]:
        started = time.perf_counter()
        result = self._execute(req)
        if self.telemetry is not None:
            status = "success" if result.ok else type(result.error).__name__
            self.telemetry.incr("rag.queries.total", {"status": status})
            elapsed_ms = (time.perf_counter() - started) * 1000.0
            self.telemetry.observe("rag.query.latency_ms", elapsed_ms, {"status": status})
        return result

    def _execute(self, req: QueryRequest) -> Result[RAGAnswer, DomainError]:
        # 1) Validate
        question = (req.question or "").strip()
        if not question:
            return Result.failure(ValidationError("question must not be empty"))

        # 2) Snapshot the corpus
        try:
            corpus = self.chunk_store.load_corpus()
        except ChunkStoreError as ex:
            return Result.failure(ex)

        # 3) Rank
        ranked = self.ranker.rank(question, corpus, timeout=req.timeout_s)
        if not ranked.ok or ranked.value is None:
            return Result.failure(ranked.error or DomainError("ranking failed"))
        if not ranked.value:
            logger.info("Corpus is empty; nothing to answer from")
            return Result.success(RAGAnswer())

        # 4) Generate
        prompt = build_prompt(self.system_prompt, ranked.value, question)
        try:
            response = self.llm.generate(prompt, timeout=req.timeout_s)
        except ProviderError as ex:
            logger.warning("Generation failed: %s", ex)
            return Result.failure(ex)
        except Exception as ex:  # noqa: BLE001
            logger.exception("Generation failed unexpectedly")
            provider = getattr(self.llm, "name", type(self.llm).__name__)
            return Result.failure(
                ProviderTransportError(str(ex), provider=provider, operation="generation")
            )

        # 5) Parse and resolve citations
        try:
            answer = self.citations.parse_response(response.text)
        except ChunkStoreError as ex:
            return Result.failure(ex)

        logger.info(
            "Answered query with %d citation(s) from %d context chunk(s)",
            len(answer),
            len(ranked.value),
        )
        return Result.success(RAGAnswer(answer=answer, usage=response.usage))
