from typing import Protocol, runtime_checkable

from terusrag.application.ports.embedding_port import EmbeddingPort
from terusrag.application.ports.llm_port import LLMPort


@runtime_checkable
class ProviderPort(EmbeddingPort, LLMPort, Protocol):
    """One AI provider offering both embeddings and text generation.

    Implemented once per provider (OpenAI, Ollama, Gemini). The ranker and the
    response parser depend only on the narrower ports.
    """

    name: str
