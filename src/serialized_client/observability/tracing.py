"""
OpenTelemetry availability detection for serialized_client.

OpenTelemetry is an optional dependency. This module is the single place
that attempts the import, so the rest of the library can check
``OTEL_AVAILABLE`` instead of guarding imports itself.

Example:
    >>> from serialized_client.observability.tracing import OTEL_AVAILABLE, should_trace
    >>> if should_trace(enable_tracing=True):
    ...     print("spans will be exported")
"""

from __future__ import annotations

# Optional OpenTelemetry import - single source of truth
try:
    from opentelemetry import trace

    OTEL_AVAILABLE = True
except ImportError:
    OTEL_AVAILABLE = False
    trace = None  # type: ignore[assignment]


def should_trace(enable_tracing: bool) -> bool:
    """
    Determine if tracing should be active.

    Combines the client's enable_tracing setting with global OTEL availability.

    Args:
        enable_tracing: Client-level tracing configuration

    Returns:
        True if both tracing is enabled and OpenTelemetry is available
    """
    return enable_tracing and OTEL_AVAILABLE


__all__ = [
    "OTEL_AVAILABLE",
    "should_trace",
]
