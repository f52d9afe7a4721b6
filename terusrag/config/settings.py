"""Application settings with environment-driven configuration.

This is the ONLY place where environment variables are read. Adapters receive
explicit values from the composition root.
"""

import os
from dataclasses import dataclass, field

from terusrag.domain.services.prompting import DEFAULT_SYSTEM_PROMPT


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass(frozen=True)
class AppSettings:
    """Application settings loaded from environment variables.

    Provider selection:
    - provider: which AI provider answers questions (and embeds, by default)
    - embedding_backend: "provider" reuses the provider's embedding model;
      "sentence-transformers" embeds locally
    """

    # ===== Provider Selection =====
    provider: str = field(default_factory=lambda: os.getenv("TERUSRAG_PROVIDER", "openai").lower())
    # Supported: "openai" | "ollama" | "gemini"

    embedding_backend: str = field(
        default_factory=lambda: os.getenv("TERUSRAG_EMBEDDING_BACKEND", "provider").lower()
    )
    # Supported: "provider" | "sentence-transformers"

    request_timeout_s: float = field(
        default_factory=lambda: float(os.getenv("TERUSRAG_REQUEST_TIMEOUT_S", "30"))
    )

    # ===== OpenAI =====
    openai_api_key: str = field(default_factory=lambda: os.getenv("OPENAI_API_KEY", ""))
    openai_endpoint: str = field(
        default_factory=lambda: os.getenv("OPENAI_ENDPOINT", "https://api.openai.com/v1")
    )
    openai_model_chat: str = field(
        default_factory=lambda: os.getenv("OPENAI_MODEL_CHAT", "gpt-4o-mini")
    )
    openai_model_embedding: str = field(
        default_factory=lambda: os.getenv("OPENAI_MODEL_EMBEDDING", "text-embedding-3-small")
    )

    # ===== Ollama =====
    ollama_api_key: str = field(default_factory=lambda: os.getenv("OLLAMA_API_KEY", ""))
    ollama_endpoint: str = field(
        default_factory=lambda: os.getenv("OLLAMA_ENDPOINT", "http://localhost:11434")
    )
    ollama_model_chat: str = field(
        default_factory=lambda: os.getenv("OLLAMA_MODEL_CHAT", "llama3.1")
    )
    ollama_model_embedding: str = field(
        default_factory=lambda: os.getenv("OLLAMA_MODEL_EMBEDDING", "nomic-embed-text")
    )

    # ===== Gemini =====
    gemini_api_key: str = field(default_factory=lambda: os.getenv("GEMINI_API_KEY", ""))
    gemini_endpoint: str = field(
        default_factory=lambda: os.getenv(
            "GEMINI_ENDPOINT", "https://generativelanguage.googleapis.com/v1beta"
        )
    )
    gemini_model_chat: str = field(
        default_factory=lambda: os.getenv("GEMINI_MODEL_CHAT", "gemini-2.0-flash")
    )
    gemini_model_embedding: str = field(
        default_factory=lambda: os.getenv("GEMINI_MODEL_EMBEDDING", "text-embedding-004")
    )

    # ===== Local Embeddings =====
    embedding_model: str = field(
        default_factory=lambda: os.getenv(
            "TERUSRAG_EMBEDDING_MODEL", "sentence-transformers/all-MiniLM-L6-v2"
        )
    )
    embedding_device: str = field(default_factory=lambda: os.getenv("EMBEDDING_DEVICE", "cpu"))
    # Supported: "cpu" | "cuda" | "mps"

    # ===== Prompt =====
    system_prompt: str = field(
        default_factory=lambda: os.getenv("TERUSRAG_SYSTEM_PROMPT", DEFAULT_SYSTEM_PROMPT)
    )

    # ===== Storage =====
    database_url: str = field(
        default_factory=lambda: os.getenv("TERUSRAG_DATABASE_URL", "sqlite:///terusrag.db")
    )
    site_url: str = field(
        default_factory=lambda: os.getenv("TERUSRAG_SITE_URL", "http://localhost")
    )
    # Base URL used to build citation view links

    # ===== Telemetry / Logging =====
    telemetry_enabled: bool = field(
        default_factory=lambda: _env_bool("TELEMETRY_ENABLED", "false")
    )
    otlp_endpoint: str = field(default_factory=lambda: os.getenv("OTLP_ENDPOINT", ""))
    # Empty string = no OTLP export
    telemetry_environment: str = field(
        default_factory=lambda: os.getenv("TELEMETRY_ENVIRONMENT", "production")
    )
    log_level: str = field(default_factory=lambda: os.getenv("TERUSRAG_LOG_LEVEL", "INFO").upper())
