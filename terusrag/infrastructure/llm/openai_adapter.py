from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from importlib import import_module
from typing import Any, cast

from terusrag.application.ports.llm_port import ChatMessage, LLMResponse
from terusrag.application.ports.provider_port import ProviderPort
from terusrag.domain.errors import (
    EmptyResponseError,
    MalformedResponseError,
    ProviderError,
    ProviderTransportError,
)
from terusrag.domain.models import TokenUsage

logger = logging.getLogger(__name__)


@dataclass
class OpenAIAdapter(ProviderPort):
    """OpenAI (or any OpenAI-compatible endpoint) for embeddings and chat completions."""

    api_key: str
    base_url: str = "https://api.openai.com/v1"
    chat_model: str = "gpt-4o-mini"
    embedding_model: str = "text-embedding-3-small"
    timeout_s: float = 30.0
    name: str = "openai"

    def __post_init__(self) -> None:
        # Client is created on first use
        self._client: Any | None = None

    def _get_client(self) -> Any:
        if self._client is None:
            module = import_module("openai")
            self._client = module.OpenAI(
                base_url=self.base_url,
                api_key=self.api_key,
                timeout=self.timeout_s,
                max_retries=0,
            )
        return self._client

    def _translate(self, ex: Exception, operation: str) -> ProviderError:
        """Translate openai SDK exceptions into provider errors."""
        status = getattr(ex, "status_code", None)
        if status is not None:
            return ProviderTransportError(
                str(ex), provider=self.name, operation=operation, status=int(status)
            )
        openai = import_module("openai")
        if isinstance(ex, openai.APIConnectionError):  # includes APITimeoutError
            return ProviderTransportError(str(ex), provider=self.name, operation=operation)
        return MalformedResponseError(str(ex), provider=self.name, operation=operation)

    def embed_texts(
        self, texts: Sequence[str], timeout: float | None = None
    ) -> list[list[float]]:
        if not texts:
            return []
        return self._embed(list(texts), timeout)

    def embed_query(self, text: str, timeout: float | None = None) -> list[float]:
        return self._embed(text, timeout)[0]

    def _embed(self, inputs: str | list[str], timeout: float | None) -> list[list[float]]:
        try:
            resp: Any = self._get_client().embeddings.create(
                model=self.embedding_model,
                input=inputs,
                encoding_format="float",
                timeout=timeout or self.timeout_s,
            )
            data = list(resp.data)
        except Exception as ex:  # noqa: BLE001
            logger.error("OpenAI embedding request failed: %s", ex)
            raise self._translate(ex, "embedding") from ex
        if not data:
            raise EmptyResponseError(
                "no embeddings returned", provider=self.name, operation="embedding"
            )
        try:
            return [[float(x) for x in item.embedding] for item in data]
        except (AttributeError, TypeError, ValueError) as ex:
            raise MalformedResponseError(
                f"invalid embedding payload: {ex}", provider=self.name, operation="embedding"
            ) from ex

    def generate(self, prompt: str, timeout: float | None = None) -> LLMResponse:
        # The assembled prompt carries the instructions, so it is sent as the system message.
        messages = [ChatMessage(role="system", content=prompt)]
        try:
            payload: Any = [m.__dict__ for m in messages]
            resp: Any = self._get_client().chat.completions.create(
                model=self.chat_model,
                messages=cast(Any, payload),
                timeout=timeout or self.timeout_s,
            )
        except Exception as ex:  # noqa: BLE001
            logger.error("OpenAI chat request failed: %s", ex)
            raise self._translate(ex, "generation") from ex

        choices = getattr(resp, "choices", None)
        if choices is None:
            raise MalformedResponseError(
                "response has no choices", provider=self.name, operation="generation"
            )
        if not choices:
            raise EmptyResponseError(
                "no choices returned", provider=self.name, operation="generation"
            )
        choice = choices[0]
        usage = getattr(resp, "usage", None)
        return LLMResponse(
            text=choice.message.content or "",
            usage=TokenUsage(
                prompt_tokens=getattr(usage, "prompt_tokens", 0) or 0,
                completion_tokens=getattr(usage, "completion_tokens", 0) or 0,
                total_tokens=getattr(usage, "total_tokens", 0) or 0,
            ),
            finish_reason=choice.finish_reason or "stop",
        )
