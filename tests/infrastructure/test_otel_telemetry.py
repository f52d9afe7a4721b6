"""Tests for the OpenTelemetry metrics adapter."""

from terusrag.infrastructure.telemetry.otel_adapter import OpenTelemetryAdapter, OtelConfig


def test_counters_and_histograms_are_created_once():
    adapter = OpenTelemetryAdapter(OtelConfig(environment="test"))
    assert adapter.enabled

    adapter.incr("rag.queries.total", {"status": "success"})
    adapter.incr("rag.queries.total", {"status": "ValidationError"})
    adapter.observe("rag.query.latency_ms", 12.5)

    assert list(adapter._counters) == ["rag.queries.total"]
    assert list(adapter._histograms) == ["rag.query.latency_ms"]


def test_missing_sdk_disables_metrics(monkeypatch):
    def _missing(name):
        raise ImportError(name)

    monkeypatch.setattr("terusrag.infrastructure.telemetry.otel_adapter.import_module", _missing)
    adapter = OpenTelemetryAdapter(OtelConfig())

    assert not adapter.enabled
    adapter.incr("rag.queries.total")
    adapter.observe("rag.query.latency_ms", 1.0)
