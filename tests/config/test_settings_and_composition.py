"""Tests for environment settings and the composition root."""

import pytest

from terusrag.application.use_cases.query_knowledge_base import QueryKnowledgeBase
from terusrag.config.composition import (
    build_embedding,
    build_provider,
    build_query_use_case,
    build_telemetry,
)
from terusrag.config.settings import AppSettings
from terusrag.infrastructure.embeddings.hf_sentence_transformers import HFEmbeddingAdapter
from terusrag.infrastructure.llm.gemini_adapter import GeminiAdapter
from terusrag.infrastructure.llm.ollama_adapter import OllamaAdapter
from terusrag.infrastructure.llm.openai_adapter import OpenAIAdapter
from terusrag.infrastructure.telemetry.otel_adapter import OpenTelemetryAdapter


def test_defaults(monkeypatch):
    for var in ("TERUSRAG_PROVIDER", "TERUSRAG_EMBEDDING_BACKEND", "TELEMETRY_ENABLED"):
        monkeypatch.delenv(var, raising=False)
    settings = AppSettings()

    assert settings.provider == "openai"
    assert settings.embedding_backend == "provider"
    assert settings.request_timeout_s == 30.0
    assert settings.telemetry_enabled is False


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("TERUSRAG_PROVIDER", "Ollama")
    monkeypatch.setenv("OLLAMA_ENDPOINT", "http://gpu-box:11434")
    monkeypatch.setenv("TERUSRAG_REQUEST_TIMEOUT_S", "7.5")
    monkeypatch.setenv("TELEMETRY_ENABLED", "TRUE")
    monkeypatch.setenv("TERUSRAG_LOG_LEVEL", "debug")
    settings = AppSettings()

    assert settings.provider == "ollama"
    assert settings.ollama_endpoint == "http://gpu-box:11434"
    assert settings.request_timeout_s == 7.5
    assert settings.telemetry_enabled is True
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    ("provider", "adapter_cls"),
    [("openai", OpenAIAdapter), ("ollama", OllamaAdapter), ("gemini", GeminiAdapter)],
)
def test_build_provider(provider, adapter_cls):
    adapter = build_provider(AppSettings(provider=provider, request_timeout_s=9.0))
    assert isinstance(adapter, adapter_cls)
    assert adapter.name == provider
    assert adapter.timeout_s == 9.0


def test_unknown_provider_is_rejected():
    with pytest.raises(ValueError, match="Unsupported provider 'azure'"):
        build_provider(AppSettings(provider="azure"))


def test_embedding_backend_switch():
    provider_settings = AppSettings(provider="ollama", embedding_backend="provider")
    provider = build_provider(provider_settings)
    assert build_embedding(provider_settings, provider) is provider

    local = AppSettings(provider="ollama", embedding_backend="sentence-transformers")
    embedding = build_embedding(local, provider)
    assert isinstance(embedding, HFEmbeddingAdapter)
    assert embedding.model_name == local.embedding_model


def test_telemetry_only_when_enabled():
    assert build_telemetry(AppSettings(telemetry_enabled=False)) is None
    assert isinstance(build_telemetry(AppSettings(telemetry_enabled=True)), OpenTelemetryAdapter)


def test_build_query_use_case_wires_provider_for_both_roles():
    uc = build_query_use_case(
        AppSettings(provider="gemini", database_url="sqlite://", system_prompt="SYS")
    )

    assert isinstance(uc, QueryKnowledgeBase)
    assert uc.llm is uc.ranker.embedding
    assert uc.system_prompt == "SYS"
