"""
Standard span attributes for serialized_client.

HTTP attributes follow the OpenTelemetry semantic conventions; the
``serialized.*`` attributes describe the provider resource a request
touches.

Example:
    >>> from serialized_client.observability.attributes import (
    ...     ATTR_FEED_NAME,
    ...     ATTR_HTTP_METHOD,
    ... )
    >>> with tracer.span_with_kind(
    ...     "serialized.feeds.get",
    ...     kind=SpanKindEnum.CLIENT,
    ...     attributes={ATTR_HTTP_METHOD: "GET", ATTR_FEED_NAME: "order"},
    ... ):
    ...     pass
"""

# =============================================================================
# HTTP Attributes (OTEL semantic)
# =============================================================================

ATTR_HTTP_METHOD = "http.request.method"
"""HTTP request method (e.g., 'GET', 'POST')."""

ATTR_HTTP_STATUS_CODE = "http.response.status_code"
"""HTTP response status code (integer)."""

ATTR_URL_PATH = "url.path"
"""Request path relative to the provider base URL."""

ATTR_SERVER_ADDRESS = "server.address"
"""Host name of the provider API."""

ATTR_ERROR_TYPE = "error.type"
"""Exception class name when a request fails (string)."""

# =============================================================================
# Provider Resource Attributes
# =============================================================================

ATTR_FEED_NAME = "serialized.feed.name"
"""Name of the feed being read (usually an aggregate type)."""

ATTR_FEED_SINCE = "serialized.feed.since"
"""Sequence number cursor passed to a feed read (integer)."""

ATTR_PROJECTION_NAME = "serialized.projection.name"
"""Name of the projection or projection definition."""

ATTR_AGGREGATE_TYPE = "serialized.aggregate.type"
"""Type name of the aggregate (e.g., 'order', 'payment')."""

ATTR_AGGREGATE_ID = "serialized.aggregate.id"
"""Identifier of the aggregate instance (string)."""

ATTR_EVENT_COUNT = "serialized.event.count"
"""Number of events sent in a store request (integer)."""

ATTR_REACTION_NAME = "serialized.reaction.name"
"""Name of the reaction being registered."""


__all__ = [
    "ATTR_HTTP_METHOD",
    "ATTR_HTTP_STATUS_CODE",
    "ATTR_URL_PATH",
    "ATTR_SERVER_ADDRESS",
    "ATTR_ERROR_TYPE",
    "ATTR_FEED_NAME",
    "ATTR_FEED_SINCE",
    "ATTR_PROJECTION_NAME",
    "ATTR_AGGREGATE_TYPE",
    "ATTR_AGGREGATE_ID",
    "ATTR_EVENT_COUNT",
    "ATTR_REACTION_NAME",
]
