"""Composition root: the only place that instantiates concrete adapters."""

from sqlalchemy.orm import Session, sessionmaker

from terusrag.application.ports.chunk_store_port import ChunkStorePort
from terusrag.application.ports.clock_port import ClockPort
from terusrag.application.ports.embedding_port import EmbeddingPort
from terusrag.application.ports.owner_resolver_port import OwnerResolverPort
from terusrag.application.ports.provider_port import ProviderPort
from terusrag.application.ports.telemetry_port import TelemetryPort
from terusrag.application.use_cases.query_knowledge_base import QueryKnowledgeBase
from terusrag.application.use_cases.rank_chunks import HybridRanker
from terusrag.application.use_cases.resolve_citations import CitationResolver
from terusrag.config.settings import AppSettings
from terusrag.infrastructure.embeddings.hf_sentence_transformers import HFEmbeddingAdapter
from terusrag.infrastructure.llm.gemini_adapter import GeminiAdapter
from terusrag.infrastructure.llm.ollama_adapter import OllamaAdapter
from terusrag.infrastructure.llm.openai_adapter import OpenAIAdapter
from terusrag.infrastructure.persistence import database
from terusrag.infrastructure.persistence.sqlalchemy_chunk_store import SqlAlchemyChunkStore
from terusrag.infrastructure.persistence.sqlalchemy_owner_resolver import (
    SqlAlchemyOwnerResolver,
)
from terusrag.infrastructure.telemetry.otel_adapter import OpenTelemetryAdapter, OtelConfig
from terusrag.infrastructure.time.system_clock import SystemClock

SUPPORTED_PROVIDERS = ("openai", "ollama", "gemini")


def build_provider(settings: AppSettings) -> ProviderPort:
    """Build the AI provider selected by ``TERUSRAG_PROVIDER``.

    Raises:
        ValueError: If the provider name is not supported
    """
    if settings.provider == "openai":
        return OpenAIAdapter(
            api_key=settings.openai_api_key,
            base_url=settings.openai_endpoint,
            chat_model=settings.openai_model_chat,
            embedding_model=settings.openai_model_embedding,
            timeout_s=settings.request_timeout_s,
        )
    if settings.provider == "ollama":
        return OllamaAdapter(
            host=settings.ollama_endpoint,
            api_key=settings.ollama_api_key,
            chat_model=settings.ollama_model_chat,
            embedding_model=settings.ollama_model_embedding,
            timeout_s=settings.request_timeout_s,
        )
    if settings.provider == "gemini":
        return GeminiAdapter(
            api_key=settings.gemini_api_key,
            host=settings.gemini_endpoint,
            chat_model=settings.gemini_model_chat,
            embedding_model=settings.gemini_model_embedding,
            timeout_s=settings.request_timeout_s,
        )
    raise ValueError(
        f"Unsupported provider '{settings.provider}', expected one of {SUPPORTED_PROVIDERS}"
    )


def build_embedding(settings: AppSettings, provider: ProviderPort) -> EmbeddingPort:
    """Provider embeddings by default; local sentence-transformers when configured."""
    if settings.embedding_backend == "sentence-transformers":
        return HFEmbeddingAdapter(
            model_name=settings.embedding_model,
            device=settings.embedding_device,
        )
    return provider


def build_session_factory(settings: AppSettings) -> sessionmaker[Session]:
    return database.build_session_factory(database.build_engine(settings.database_url))


def build_clock() -> ClockPort:
    return SystemClock()


def build_chunk_store(
    session_factory: sessionmaker[Session], clock: ClockPort | None = None
) -> ChunkStorePort:
    return SqlAlchemyChunkStore(session_factory, clock or build_clock())


def build_owner_resolver(
    settings: AppSettings, session_factory: sessionmaker[Session]
) -> OwnerResolverPort:
    return SqlAlchemyOwnerResolver(session_factory, site_url=settings.site_url)


def build_telemetry(settings: AppSettings) -> TelemetryPort | None:
    """OpenTelemetry metrics when ``TELEMETRY_ENABLED=true``, otherwise none."""
    if not settings.telemetry_enabled:
        return None
    return OpenTelemetryAdapter(
        OtelConfig(
            service_name="terusrag",
            otlp_endpoint=settings.otlp_endpoint or None,
            environment=settings.telemetry_environment,
        )
    )


def build_query_use_case(settings: AppSettings | None = None) -> QueryKnowledgeBase:
    """Wire provider, storage and telemetry into the RAG query use case."""
    settings = settings or AppSettings()
    provider = build_provider(settings)
    session_factory = build_session_factory(settings)
    chunk_store = build_chunk_store(session_factory)
    return QueryKnowledgeBase(
        ranker=HybridRanker(build_embedding(settings, provider)),
        llm=provider,
        chunk_store=chunk_store,
        citations=CitationResolver(chunk_store, build_owner_resolver(settings, session_factory)),
        system_prompt=settings.system_prompt,
        telemetry=build_telemetry(settings),
    )
