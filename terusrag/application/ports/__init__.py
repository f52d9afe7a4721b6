"""Application ports package.

Re-exports the ports consumed by the use cases.
"""

from terusrag.application.ports.chunk_store_port import ChunkStorePort
from terusrag.application.ports.clock_port import ClockPort
from terusrag.application.ports.embedding_port import EmbeddingPort
from terusrag.application.ports.llm_port import ChatMessage, LLMPort, LLMResponse
from terusrag.application.ports.owner_resolver_port import OwnerResolverPort
from terusrag.application.ports.provider_port import ProviderPort
from terusrag.application.ports.telemetry_port import TelemetryPort

__all__ = [
    "ChunkStorePort",
    "ClockPort",
    "EmbeddingPort",
    "ChatMessage",
    "LLMPort",
    "LLMResponse",
    "OwnerResolverPort",
    "ProviderPort",
    "TelemetryPort",
]
