"""Domain errors (typed).

Unified error family for the application layer, without infrastructure leaks.
Adapters translate library exceptions into these; use cases return them inside
``Result.failure`` so callers can branch on the type instead of message text.
"""

from __future__ import annotations


class DomainError(Exception):
    """Base class for domain-specific errors."""


class ValidationError(DomainError):
    """Invalid input/domain state."""


class RetrievalError(DomainError):
    """Ranking failed for a reason other than the provider (e.g. dimension mismatch)."""


class ChunkStoreError(DomainError):
    """Chunk persistence backend failed or is misconfigured."""


class ProviderError(DomainError):
    """Embedding or generation provider failed.

    Carries enough detail (provider, operation, upstream status) for the caller
    to render a failure distinct from "no results found".
    """

    kind = "provider_error"

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        operation: str,
        status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.operation = operation
        self.status = status

    def __str__(self) -> str:
        status = f" (status {self.status})" if self.status is not None else ""
        return f"{self.provider} {self.operation} failed{status}: {self.message}"


class ProviderTransportError(ProviderError):
    """Provider unreachable, timed out, or answered with a non-2xx status."""

    kind = "provider_transport_error"


class MalformedResponseError(ProviderError):
    """Provider answered, but the payload could not be decoded or had the wrong shape."""

    kind = "provider_malformed_response"


class EmptyResponseError(ProviderError):
    """Provider answered with a well-formed payload that carries no usable data."""

    kind = "provider_empty_response"
