"""Contract tests for the OpenAI adapter with a fake client (no network)."""

from types import SimpleNamespace
from typing import Any

import pytest

from terusrag.domain.errors import (
    EmptyResponseError,
    MalformedResponseError,
    ProviderTransportError,
)
from terusrag.infrastructure.llm.openai_adapter import OpenAIAdapter


class _StatusError(Exception):
    """Shaped like openai.APIStatusError: carries ``status_code``."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"HTTP {status_code}")
        self.status_code = status_code


class FakeEmbeddings:
    def __init__(self, owner: "FakeClient") -> None:
        self.owner = owner

    def create(self, **kwargs: Any) -> Any:
        self.owner.calls.append(("embeddings", kwargs))
        if self.owner.error is not None:
            raise self.owner.error
        inputs = kwargs["input"]
        count = 1 if isinstance(inputs, str) else len(inputs)
        return SimpleNamespace(
            data=[SimpleNamespace(embedding=[0.1 * (i + 1), 0.2]) for i in range(count)]
        )


class FakeCompletions:
    def __init__(self, owner: "FakeClient") -> None:
        self.owner = owner

    def create(self, **kwargs: Any) -> Any:
        self.owner.calls.append(("chat", kwargs))
        if self.owner.error is not None:
            raise self.owner.error
        return self.owner.chat_response


class FakeClient:
    def __init__(self, error: Exception | None = None, chat_response: Any = None) -> None:
        self.error = error
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.embeddings = FakeEmbeddings(self)
        self.chat = SimpleNamespace(completions=FakeCompletions(self))
        self.chat_response = chat_response or SimpleNamespace(
            choices=[
                SimpleNamespace(
                    message=SimpleNamespace(content="[7] Paris"), finish_reason="stop"
                )
            ],
            usage=SimpleNamespace(prompt_tokens=9, completion_tokens=3, total_tokens=12),
        )


def make_adapter(client: FakeClient) -> OpenAIAdapter:
    adapter = OpenAIAdapter(api_key="sk-test", timeout_s=8.0)
    adapter._client = client
    return adapter


class TestOpenAIAdapter:
    def test_embed_query(self) -> None:
        client = FakeClient()
        assert make_adapter(client).embed_query("hello") == [0.1, 0.2]

        kind, kwargs = client.calls[0]
        assert kind == "embeddings"
        assert kwargs["model"] == "text-embedding-3-small"
        assert kwargs["input"] == "hello"
        assert kwargs["timeout"] == 8.0

    def test_embed_texts(self) -> None:
        vectors = make_adapter(FakeClient()).embed_texts(["a", "b"], timeout=2.0)
        assert len(vectors) == 2

    def test_embed_texts_empty_batch_skips_call(self) -> None:
        client = FakeClient()
        assert make_adapter(client).embed_texts([]) == []
        assert client.calls == []

    def test_generate_sends_prompt_as_system_message(self) -> None:
        client = FakeClient()
        resp = make_adapter(client).generate("PROMPT", timeout=4.0)

        assert resp.text == "[7] Paris"
        assert resp.usage.total_tokens == 12
        _, kwargs = client.calls[0]
        assert kwargs["messages"] == [{"role": "system", "content": "PROMPT"}]
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["timeout"] == 4.0

    def test_status_error_keeps_status(self) -> None:
        with pytest.raises(ProviderTransportError) as exc:
            make_adapter(FakeClient(error=_StatusError(401))).generate("p")
        assert exc.value.status == 401
        assert exc.value.provider == "openai"

    def test_empty_choices(self) -> None:
        client = FakeClient(chat_response=SimpleNamespace(choices=[], usage=None))
        with pytest.raises(EmptyResponseError):
            make_adapter(client).generate("p")

    def test_missing_choices_is_malformed(self) -> None:
        client = FakeClient(chat_response=SimpleNamespace(usage=None))
        with pytest.raises(MalformedResponseError):
            make_adapter(client).generate("p")

    def test_missing_usage_counts_zero(self) -> None:
        response = SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=None), finish_reason=None)],
            usage=None,
        )
        resp = make_adapter(FakeClient(chat_response=response)).generate("p")
        assert resp.text == ""
        assert resp.usage.total_tokens == 0
