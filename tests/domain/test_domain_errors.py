"""Tests for the domain error family and citation model."""

from terusrag.domain.errors import (
    DomainError,
    EmptyResponseError,
    MalformedResponseError,
    ProviderError,
    ProviderTransportError,
    RetrievalError,
    ValidationError,
)
from terusrag.domain.models import UNKNOWN_TITLE, Citation


def test_hierarchy():
    for cls in (ValidationError, RetrievalError, ProviderError):
        assert issubclass(cls, DomainError)
    for cls in (ProviderTransportError, MalformedResponseError, EmptyResponseError):
        assert issubclass(cls, ProviderError)


def test_provider_error_carries_details():
    err = ProviderTransportError("boom", provider="ollama", operation="generation", status=503)
    assert err.provider == "ollama"
    assert err.operation == "generation"
    assert err.status == 503
    assert err.kind == "provider_transport_error"
    assert str(err) == "ollama generation failed (status 503): boom"


def test_provider_error_without_status():
    err = MalformedResponseError("bad json", provider="gemini", operation="embedding")
    assert err.status is None
    assert str(err) == "gemini embedding failed: bad json"


def test_error_kinds_are_distinct():
    kinds = {
        ProviderError.kind,
        ProviderTransportError.kind,
        MalformedResponseError.kind,
        EmptyResponseError.kind,
    }
    assert len(kinds) == 4


def test_unresolved_citation():
    c = Citation.unresolved()
    assert c.id == 0
    assert c.title == UNKNOWN_TITLE == "Unknown Course"
    assert c.viewurl is None
    assert not c.resolved


def test_citation_resolved_needs_id_and_url():
    assert Citation(id=3, title="t", content="c", viewurl="http://x").resolved
    assert not Citation(id=3, title="t", content="c", viewurl=None).resolved
    assert not Citation(id=0, title="t", content="c", viewurl="http://x").resolved
