from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from terusrag.domain.models import TokenUsage


@dataclass(frozen=True)
class ChatMessage:
    role: str  # "system" | "user" | "assistant"
    content: str


@dataclass(frozen=True)
class LLMResponse:
    text: str
    usage: TokenUsage = field(default_factory=TokenUsage)
    finish_reason: str = "stop"


@runtime_checkable
class LLMPort(Protocol):
    def generate(self, prompt: str, timeout: float | None = None) -> LLMResponse:
        """Single-shot text generation.

        Args:
            prompt: Fully assembled prompt (system prompt, context block, question)
            timeout: Per-call timeout in seconds; adapter default when None

        Returns:
            Generated text with token usage

        Raises:
            ProviderError: Transport failure, malformed or empty payload
        """
        ...
