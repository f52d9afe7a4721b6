from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import requests

from terusrag.application.ports.llm_port import LLMResponse
from terusrag.application.ports.provider_port import ProviderPort
from terusrag.domain.errors import EmptyResponseError, MalformedResponseError
from terusrag.domain.models import TokenUsage
from terusrag.infrastructure.llm.http_json import as_vector, post_json

logger = logging.getLogger(__name__)


@dataclass
class OllamaAdapter(ProviderPort):
    """Ollama native API: ``/api/embed`` for embeddings, ``/api/generate`` for answers."""

    host: str = "http://localhost:11434"
    api_key: str = ""
    chat_model: str = "llama3.1"
    embedding_model: str = "nomic-embed-text"
    timeout_s: float = 30.0
    session: requests.Session = field(default_factory=requests.Session)
    name: str = "ollama"

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _embed(self, inputs: str | list[str], timeout: float | None) -> list[list[float]]:
        data = post_json(
            self.session,
            f"{self.host.rstrip('/')}/api/embed",
            {"model": self.embedding_model, "input": inputs},
            headers=self._headers(),
            timeout=timeout or self.timeout_s,
            provider=self.name,
            operation="embedding",
        )
        embeddings = data.get("embeddings")
        if not isinstance(embeddings, list):
            logger.debug("Ollama API: invalid embedding response: %s", data)
            raise MalformedResponseError(
                "response has no 'embeddings' list", provider=self.name, operation="embedding"
            )
        if not embeddings:
            raise EmptyResponseError(
                "no embeddings returned", provider=self.name, operation="embedding"
            )
        return [as_vector(vec, provider=self.name, operation="embedding") for vec in embeddings]

    def embed_texts(
        self, texts: Sequence[str], timeout: float | None = None
    ) -> list[list[float]]:
        if not texts:
            return []
        return self._embed(list(texts), timeout)

    def embed_query(self, text: str, timeout: float | None = None) -> list[float]:
        return self._embed(text, timeout)[0]

    def generate(self, prompt: str, timeout: float | None = None) -> LLMResponse:
        data: dict[str, Any] = post_json(
            self.session,
            f"{self.host.rstrip('/')}/api/generate",
            {"model": self.chat_model, "prompt": prompt, "stream": False},
            headers=self._headers(),
            timeout=timeout or self.timeout_s,
            provider=self.name,
            operation="generation",
        )
        text = data.get("response")
        if not isinstance(text, str):
            logger.debug("Ollama API returned unexpected response structure: %s", data)
            raise MalformedResponseError(
                "response has no 'response' text", provider=self.name, operation="generation"
            )
        prompt_tokens = int(data.get("prompt_eval_count") or 0)
        completion_tokens = int(data.get("eval_count") or 0)
        return LLMResponse(
            text=text,
            usage=TokenUsage(
                prompt_tokens=prompt_tokens,
                completion_tokens=completion_tokens,
                total_tokens=prompt_tokens + completion_tokens,
            ),
            finish_reason=str(data.get("done_reason") or "stop"),
        )
