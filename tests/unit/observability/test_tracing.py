"""
Unit tests for observability tracing utilities.

Tests for:
- OTEL_AVAILABLE constant
- should_trace() function
"""

from __future__ import annotations


class TestOTELAvailable:
    """Tests for OTEL_AVAILABLE constant."""

    def test_otel_available_is_boolean(self):
        from serialized_client.observability import OTEL_AVAILABLE

        assert isinstance(OTEL_AVAILABLE, bool)


class TestShouldTrace:
    """Tests for should_trace function."""

    def test_false_when_disabled(self):
        from serialized_client.observability.tracing import should_trace

        assert should_trace(False) is False

    def test_true_when_enabled_and_available(self, monkeypatch):
        monkeypatch.setattr("serialized_client.observability.tracing.OTEL_AVAILABLE", True)

        from serialized_client.observability.tracing import should_trace

        assert should_trace(True) is True

    def test_false_when_unavailable(self, monkeypatch):
        monkeypatch.setattr("serialized_client.observability.tracing.OTEL_AVAILABLE", False)

        from serialized_client.observability.tracing import should_trace

        assert should_trace(True) is False
