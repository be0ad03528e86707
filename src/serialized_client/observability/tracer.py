"""
Tracers used by the HTTP transport and the feed iterator.

Request code never imports OpenTelemetry itself. It is handed a Tracer and
opens spans through it:

- span(): an INTERNAL span wrapping several requests (feed iteration)
- span_with_kind(): a span of an explicit kind; every provider request is
  a CLIENT span

Which tracer is used is decided once, by create_tracer(), from
ClientConfig.enable_tracing and whether OpenTelemetry is importable. Tests
inject a MockTracer instead.
"""

from __future__ import annotations

import contextlib
from collections.abc import Iterator
from contextlib import AbstractContextManager
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from opentelemetry.trace import Span

from serialized_client.observability.tracing import should_trace


class SpanKindEnum(Enum):
    """Kinds of span the client opens."""

    INTERNAL = "internal"
    CLIENT = "client"


@runtime_checkable
class Tracer(Protocol):
    """Anything that can open spans for the client."""

    def span(
        self,
        name: str,
        attributes: dict[str, Any] | None = None,
    ) -> AbstractContextManager[Span | None]:
        """Open an INTERNAL span; yields the span, or None when not recording."""
        ...

    def span_with_kind(
        self,
        name: str,
        kind: SpanKindEnum = SpanKindEnum.INTERNAL,
        attributes: dict[str, Any] | None = None,
    ) -> AbstractContextManager[Span | None]:
        """Open a span of the given kind; yields the span, or None."""
        ...


class NullTracer:
    """Tracer used when tracing is off. Every span is None."""

    @contextlib.contextmanager
    def span(
        self,
        name: str,
        attributes: dict[str, Any] | None = None,
    ) -> Iterator[None]:
        yield None

    @contextlib.contextmanager
    def span_with_kind(
        self,
        name: str,
        kind: SpanKindEnum = SpanKindEnum.INTERNAL,
        attributes: dict[str, Any] | None = None,
    ) -> Iterator[None]:
        yield None


# SpanKindEnum -> opentelemetry.trace.SpanKind attribute name
_OTEL_KIND_NAMES = {
    SpanKindEnum.INTERNAL: "INTERNAL",
    SpanKindEnum.CLIENT: "CLIENT",
}


class OpenTelemetryTracer:
    """
    Tracer backed by the globally configured OpenTelemetry TracerProvider.

    Args:
        tracer_name: Instrumentation scope name (typically __name__)

    Raises:
        ImportError: If opentelemetry-api is not installed
    """

    def __init__(self, tracer_name: str) -> None:
        from opentelemetry import trace

        self._tracer = trace.get_tracer(tracer_name)

    def span(
        self,
        name: str,
        attributes: dict[str, Any] | None = None,
    ) -> AbstractContextManager[Span | None]:
        return self.span_with_kind(name, SpanKindEnum.INTERNAL, attributes)

    def span_with_kind(
        self,
        name: str,
        kind: SpanKindEnum = SpanKindEnum.INTERNAL,
        attributes: dict[str, Any] | None = None,
    ) -> AbstractContextManager[Span | None]:
        from opentelemetry.trace import SpanKind

        return self._tracer.start_as_current_span(
            name,
            kind=getattr(SpanKind, _OTEL_KIND_NAMES[kind]),
            attributes=attributes or {},
        )


class MockTracer:
    """
    Tracer that remembers the spans it was asked to open.

    Example:
        >>> tracer = MockTracer()
        >>> client = SerializedClient(config, tracer=tracer)
        >>> await client.feeds.list()
        >>> tracer.span_names
        ['serialized.feeds.list']
    """

    def __init__(self) -> None:
        self.spans: list[tuple[str, dict[str, Any] | None]] = []
        self.kinds: list[SpanKindEnum] = []

    @property
    def span_names(self) -> list[str]:
        return [name for name, _ in self.spans]

    def clear(self) -> None:
        self.spans.clear()
        self.kinds.clear()

    def span(
        self,
        name: str,
        attributes: dict[str, Any] | None = None,
    ) -> AbstractContextManager[None]:
        return self.span_with_kind(name, SpanKindEnum.INTERNAL, attributes)

    @contextlib.contextmanager
    def span_with_kind(
        self,
        name: str,
        kind: SpanKindEnum = SpanKindEnum.INTERNAL,
        attributes: dict[str, Any] | None = None,
    ) -> Iterator[None]:
        self.spans.append((name, attributes))
        self.kinds.append(kind)
        yield None


def create_tracer(name: str, enable_tracing: bool = True) -> Tracer:
    """
    Pick the tracer for a client.

    Returns an OpenTelemetryTracer when tracing is enabled and OpenTelemetry
    is installed, a NullTracer otherwise.
    """
    if should_trace(enable_tracing):
        return OpenTelemetryTracer(name)
    return NullTracer()


__all__ = [
    "SpanKindEnum",
    "Tracer",
    "NullTracer",
    "OpenTelemetryTracer",
    "MockTracer",
    "create_tracer",
]
