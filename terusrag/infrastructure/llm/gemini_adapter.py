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


def _collect_text(node: Any, parts: list[str]) -> list[str]:
    """Depth-first collection of every ``"text"`` string in a candidate payload."""
    if isinstance(node, dict):
        for key, value in node.items():
            if key == "text" and isinstance(value, str):
                parts.append(value)
            else:
                _collect_text(value, parts)
    elif isinstance(node, list):
        for item in node:
            _collect_text(item, parts)
    return parts


@dataclass
class GeminiAdapter(ProviderPort):
    """Google Gemini REST API (``generativelanguage``), authenticated with an API key header."""

    api_key: str
    host: str = "https://generativelanguage.googleapis.com/v1beta"
    chat_model: str = "gemini-2.0-flash"
    embedding_model: str = "text-embedding-004"
    timeout_s: float = 30.0
    session: requests.Session = field(default_factory=requests.Session)
    name: str = "gemini"

    def _headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json", "x-goog-api-key": self.api_key}

    def _url(self, model: str, method: str) -> str:
        return f"{self.host.rstrip('/')}/models/{model}:{method}"

    def _content_request(self, text: str) -> dict[str, Any]:
        return {
            "model": f"models/{self.embedding_model}",
            "content": {"parts": [{"text": text}]},
        }

    def embed_query(self, text: str, timeout: float | None = None) -> list[float]:
        data = post_json(
            self.session,
            self._url(self.embedding_model, "embedContent"),
            self._content_request(text),
            headers=self._headers(),
            timeout=timeout or self.timeout_s,
            provider=self.name,
            operation="embedding",
        )
        embedding = data.get("embedding")
        if not isinstance(embedding, dict) or "values" not in embedding:
            logger.debug("Gemini API: invalid embedding response: %s", data)
            raise MalformedResponseError(
                "response has no 'embedding.values'", provider=self.name, operation="embedding"
            )
        return as_vector(embedding["values"], provider=self.name, operation="embedding")

    def embed_texts(
        self, texts: Sequence[str], timeout: float | None = None
    ) -> list[list[float]]:
        if not texts:
            return []
        data = post_json(
            self.session,
            self._url(self.embedding_model, "batchEmbedContents"),
            {"requests": [self._content_request(t) for t in texts]},
            headers=self._headers(),
            timeout=timeout or self.timeout_s,
            provider=self.name,
            operation="embedding",
        )
        embeddings = data.get("embeddings")
        if not isinstance(embeddings, list):
            raise MalformedResponseError(
                "response has no 'embeddings' list", provider=self.name, operation="embedding"
            )
        if len(embeddings) != len(texts):
            raise EmptyResponseError(
                f"expected {len(texts)} embeddings, got {len(embeddings)}",
                provider=self.name,
                operation="embedding",
            )
        return [
            as_vector(
                e.get("values") if isinstance(e, dict) else None,
                provider=self.name,
                operation="embedding",
            )
            for e in embeddings
        ]

    def generate(self, prompt: str, timeout: float | None = None) -> LLMResponse:
        data = post_json(
            self.session,
            self._url(self.chat_model, "generateContent"),
            {"contents": [{"role": "user", "parts": [{"text": prompt}]}]},
            headers=self._headers(),
            timeout=timeout or self.timeout_s,
            provider=self.name,
            operation="generation",
        )
        candidates = data.get("candidates")
        if not isinstance(candidates, list):
            logger.debug("Gemini API returned unexpected response structure: %s", data)
            raise MalformedResponseError(
                "response has no 'candidates' list", provider=self.name, operation="generation"
            )
        if not candidates:
            raise EmptyResponseError(
                "no candidates returned", provider=self.name, operation="generation"
            )
        first = candidates[0] if isinstance(candidates[0], dict) else {}
        text = " ".join(_collect_text(first.get("content", {}), []))
        usage = data.get("usageMetadata") or {}
        return LLMResponse(
            text=text,
            usage=TokenUsage(
                prompt_tokens=int(usage.get("promptTokenCount") or 0),
                completion_tokens=int(usage.get("candidatesTokenCount") or 0),
                total_tokens=int(usage.get("totalTokenCount") or 0),
            ),
            finish_reason=str(first.get("finishReason") or "stop").lower(),
        )
