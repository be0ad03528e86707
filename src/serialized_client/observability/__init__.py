"""
Observability utilities for serialized_client.

Every request to the provider runs inside a CLIENT span carrying the HTTP
method, path, status code and the provider resource being touched.

Example:
    >>> from serialized_client.observability import OTEL_AVAILABLE, create_tracer
    >>> tracer = create_tracer(__name__, enable_tracing=OTEL_AVAILABLE)

Note:
    OpenTelemetry is an optional dependency. All utilities in this module
    gracefully handle the case where OpenTelemetry is not installed.
"""

from serialized_client.observability.attributes import (
    ATTR_AGGREGATE_ID,
    ATTR_AGGREGATE_TYPE,
    ATTR_ERROR_TYPE,
    ATTR_EVENT_COUNT,
    ATTR_FEED_NAME,
    ATTR_FEED_SINCE,
    # HTTP (OTEL semantic)
    ATTR_HTTP_METHOD,
    ATTR_HTTP_STATUS_CODE,
    # Provider resources
    ATTR_PROJECTION_NAME,
    ATTR_REACTION_NAME,
    ATTR_SERVER_ADDRESS,
    ATTR_URL_PATH,
)
from serialized_client.observability.tracer import (
    MockTracer,
    NullTracer,
    OpenTelemetryTracer,
    SpanKindEnum,
    Tracer,
    create_tracer,
)
from serialized_client.observability.tracing import OTEL_AVAILABLE

__all__ = [
    "OTEL_AVAILABLE",
    # Tracer (composition-based API)
    "Tracer",
    "NullTracer",
    "OpenTelemetryTracer",
    "MockTracer",
    "SpanKindEnum",
    "create_tracer",
    # Attributes - HTTP
    "ATTR_HTTP_METHOD",
    "ATTR_HTTP_STATUS_CODE",
    "ATTR_URL_PATH",
    "ATTR_SERVER_ADDRESS",
    "ATTR_ERROR_TYPE",
    # Attributes - Provider resources
    "ATTR_FEED_NAME",
    "ATTR_FEED_SINCE",
    "ATTR_PROJECTION_NAME",
    "ATTR_AGGREGATE_TYPE",
    "ATTR_AGGREGATE_ID",
    "ATTR_EVENT_COUNT",
    "ATTR_REACTION_NAME",
]
